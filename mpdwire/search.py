"""Building and sending database and queue search requests."""

from __future__ import annotations

from enum import IntEnum

from mpdwire.connection import Connection, Pair, StateError
from mpdwire.playlist import format_datetime
from mpdwire.position import whence_char
from mpdwire.quote import escape

# Fragments such as "group", "sort", "window" and "position" are limited to
# this many characters; longer ones are cut off.
_FRAGMENT_LIMIT = 63


class Operator(IntEnum):
    """Comparison operator of a constraint; reserved for future use."""

    DEFAULT = 0
    """Exact match or substring search, as chosen when the search began."""


def _tag_name(tag) -> str:
    if not isinstance(tag, str) or not tag:
        raise ValueError("invalid type specified")
    return tag


class Search:
    """A search request being built; send it with :meth:`commit`.

    A search that is no longer wanted is simply discarded.
    """

    def __init__(self, command: str) -> None:
        self._request = command
        self._done = False

    @property
    def request(self) -> str:
        """The command line built so far."""
        return self._request

    def _append(self, fragment: str) -> Search:
        if self._done:
            raise StateError("no search in progress")
        self._request += fragment
        return self

    def _add_constraint(self, name: str, value: str) -> Search:
        return self._append(f' {name} "{escape(value)}"')

    def add_base_constraint(
        self, value: str, operator: Operator = Operator.DEFAULT
    ) -> Search:
        """Limit the search to a directory, relative to the music directory."""
        return self._add_constraint("base", value)

    def add_uri_constraint(
        self, value: str, operator: Operator = Operator.DEFAULT
    ) -> Search:
        """Add a constraint on the song's URI."""
        return self._add_constraint("file", value)

    def add_tag_constraint(
        self, tag: str, value: str, operator: Operator = Operator.DEFAULT
    ) -> Search:
        """Add a constraint on the value of a tag."""
        return self._add_constraint(_tag_name(tag), value)

    def add_any_tag_constraint(
        self, value: str, operator: Operator = Operator.DEFAULT
    ) -> Search:
        """Search for a value in any tag."""
        return self._add_constraint("any", value)

    def add_modified_since_constraint(
        self, value: int, operator: Operator = Operator.DEFAULT
    ) -> Search:
        """Limit the search to files modified after a POSIX time stamp."""
        try:
            stamp = format_datetime(value)
        except ValueError as exc:
            raise ValueError("failed to format time stamp") from exc
        return self._add_constraint("modified-since", stamp)

    def add_expression(self, expression: str) -> Search:
        """Add a filter expression, which must be enclosed in parentheses."""
        return self._append(f' "{escape(expression)}"')

    def add_group_tag(self, tag: str) -> Search:
        """Group the results by a tag."""
        return self._append(f" group {_tag_name(tag)}"[:_FRAGMENT_LIMIT])

    def add_sort_name(self, name: str, descending: bool = False) -> Search:
        """Sort the results by a named attribute, such as a tag name."""
        prefix = "-" if descending else ""
        return self._append(f" sort {prefix}{name}"[:_FRAGMENT_LIMIT])

    def add_sort_tag(self, tag: str, descending: bool = False) -> Search:
        """Sort the results by a tag."""
        return self.add_sort_name(_tag_name(tag), descending)

    def add_window(self, start: int, end: int) -> Search:
        """Request only the results from *start* (included) to *end*."""
        if start > end:
            raise ValueError("window start is after its end")
        return self._append(f" window {start}:{end}"[:_FRAGMENT_LIMIT])

    def add_position(self, position: int, whence=0) -> Search:
        """Insert the results at a queue position interpreted by *whence*."""
        fragment = f" position {whence_char(whence)}{position}"
        return self._append(fragment[:_FRAGMENT_LIMIT])

    def commit(self, connection: Connection) -> None:
        """Send the request; the search cannot be used afterwards."""
        if self._done:
            raise StateError("no search in progress")
        self._done = True
        connection.send_command(self._request)


def search_db_songs(exact: bool) -> Search:
    """Start a search for songs in the database."""
    return Search("find" if exact else "search")


def search_add_db_songs(exact: bool) -> Search:
    """Start a search whose results are added to the queue."""
    return Search("findadd" if exact else "searchadd")


def search_queue_songs(exact: bool) -> Search:
    """Start a search for songs in the queue."""
    return Search("playlistfind" if exact else "playlistsearch")


def search_db_tags(tag: str) -> Search:
    """Start listing the unique values of a tag in the database."""
    return Search(f"list {_tag_name(tag)}")


def count_db_songs() -> Search:
    """Start gathering statistics on a set of songs in the database."""
    return Search("count")


def search_add_db_songs_to_playlist(playlist_name: str) -> Search:
    """Start a search whose results are added to a stored playlist."""
    return Search(f'searchaddpl "{escape(playlist_name)}" ')


def recv_pair_tag(connection: Connection, tag) -> Pair | None:
    """Receive the next pair named after *tag*, or None at the end."""
    if not isinstance(tag, str) or not tag:
        return None
    return connection.recv_pair_named(tag)