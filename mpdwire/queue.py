"""Commands that inspect and edit the queue (the current playlist)."""

from __future__ import annotations

import re
from typing import Callable

from mpdwire.connection import Connection, MalformedError, float_range_arg, range_arg
from mpdwire.position import whence_char

_UNSIGNED_RE = re.compile(r"\s*\+?(\d+)")
_SIGNED_RE = re.compile(r"\s*([+-]?\d+)")


def _parse_unsigned(text: str) -> int:
    match = _UNSIGNED_RE.match(text)
    return int(match.group(1)) if match else 0


def _parse_signed(text: str) -> int:
    match = _SIGNED_RE.match(text)
    return int(match.group(1)) if match else 0


def _run(connection: Connection, sender: Callable[..., None], *args) -> None:
    connection.run_check()
    sender(connection, *args)
    connection.response_finish()


def _tag_name(tag) -> str:
    return tag if isinstance(tag, str) else str(tag)


# -- listing -------------------------------------------------------------


def send_list_queue_meta(connection: Connection) -> None:
    """Ask for the full metadata of every song in the queue."""
    connection.send_command("playlistinfo")


def send_list_queue_range_meta(connection: Connection, start: int, end) -> None:
    """Ask for the metadata of the songs in a range of positions."""
    connection.send_command("playlistinfo", range_arg(start, end))


def send_get_queue_song_pos(connection: Connection, pos: int) -> None:
    """Ask for the metadata of the song at a queue position."""
    connection.send_command("playlistinfo", pos)


def send_get_queue_song_id(connection: Connection, song_id: int) -> None:
    """Ask for the metadata of the song with a queue id."""
    connection.send_command("playlistid", song_id)


def send_queue_changes_meta(connection: Connection, version: int) -> None:
    """Ask for the songs changed since a queue version, with metadata."""
    connection.send_command("plchanges", version)


def send_queue_changes_meta_range(
    connection: Connection, version: int, start: int, end
) -> None:
    """Like :func:`send_queue_changes_meta`, limited to a position range."""
    connection.send_command("plchanges", version, range_arg(start, end))


def send_queue_changes_brief(connection: Connection, version: int) -> None:
    """Ask for the positions and ids changed since a queue version."""
    connection.send_command("plchangesposid", version)


def send_queue_changes_brief_range(
    connection: Connection, version: int, start: int, end
) -> None:
    """Like :func:`send_queue_changes_brief`, limited to a position range."""
    connection.send_command("plchangesposid", version, range_arg(start, end))


def recv_queue_change_brief(connection: Connection) -> tuple[int, int] | None:
    """Receive the next (position, id) change, or None at the end."""
    pair = connection.recv_pair_named("cpos")
    if pair is None:
        return None
    position = _parse_unsigned(pair.value)
    connection.return_pair(pair)

    pair = connection.recv_pair_named("Id")
    if pair is None:
        raise MalformedError("No id received")
    song_id = _parse_unsigned(pair.value)
    connection.return_pair(pair)
    return position, song_id


# -- adding --------------------------------------------------------------


def send_add(connection: Connection, uri: str) -> None:
    """Append a song or directory to the queue."""
    connection.send_command("add", uri)


def run_add(connection: Connection, uri: str) -> None:
    """Append to the queue and wait for the reply."""
    _run(connection, send_add, uri)


def _whence_arg(to: int, whence) -> str:
    return f"{whence_char(whence)}{to}"


def send_add_whence(connection: Connection, uri: str, to: int, whence) -> None:
    """Insert a song or directory at a position interpreted by *whence*."""
    connection.send_command("add", uri, _whence_arg(to, whence))


def run_add_whence(connection: Connection, uri: str, to: int, whence) -> None:
    """Insert at a position and wait for the reply."""
    _run(connection, send_add_whence, uri, to, whence)


def send_add_id(connection: Connection, uri: str) -> None:
    """Append a song; the reply carries its new id."""
    connection.send_command("addid", uri)


def send_add_id_to(connection: Connection, uri: str, to: int) -> None:
    """Insert a song at an absolute position; the reply carries its id."""
    connection.send_command("addid", uri, to)


def send_add_id_whence(connection: Connection, uri: str, to: int, whence) -> None:
    """Insert a song at a position interpreted by *whence*; reply has its id."""
    connection.send_command("addid", uri, _whence_arg(to, whence))


def recv_song_id(connection: Connection) -> int | None:
    """Receive the "Id" of an added song, or None if there is none."""
    pair = connection.recv_pair_named("Id")
    if pair is None:
        return None
    song_id = _parse_signed(pair.value)
    connection.return_pair(pair)
    return song_id


def _run_add_id(connection: Connection, sender: Callable[..., None], *args):
    connection.run_check()
    sender(connection, *args)
    song_id = recv_song_id(connection)
    connection.response_finish()
    return song_id


def run_add_id(connection: Connection, uri: str) -> int | None:
    """Append a song and return its new id."""
    return _run_add_id(connection, send_add_id, uri)


def run_add_id_to(connection: Connection, uri: str, to: int) -> int | None:
    """Insert a song at a position and return its new id."""
    return _run_add_id(connection, send_add_id_to, uri, to)


def run_add_id_whence(
    connection: Connection, uri: str, to: int, whence
) -> int | None:
    """Insert a song at a relative position and return its new id."""
    return _run_add_id(connection, send_add_id_whence, uri, to, whence)


# -- removing and reordering ---------------------------------------------


def send_delete(connection: Connection, pos: int) -> None:
    """Remove the song at a queue position."""
    connection.send_command("delete", pos)


def run_delete(connection: Connection, pos: int) -> None:
    """Remove by position and wait for the reply."""
    _run(connection, send_delete, pos)


def send_delete_range(connection: Connection, start: int, end) -> None:
    """Remove the songs in a range of positions."""
    connection.send_command("delete", range_arg(start, end))


def run_delete_range(connection: Connection, start: int, end) -> None:
    """Remove a range and wait for the reply."""
    _run(connection, send_delete_range, start, end)


def send_delete_id(connection: Connection, song_id: int) -> None:
    """Remove the song with a queue id."""
    connection.send_command("deleteid", song_id)


def run_delete_id(connection: Connection, song_id: int) -> None:
    """Remove by id and wait for the reply."""
    _run(connection, send_delete_id, song_id)


def send_shuffle(connection: Connection) -> None:
    """Shuffle the whole queue."""
    connection.send_command("shuffle")


def run_shuffle(connection: Connection) -> None:
    """Shuffle the queue and wait for the reply."""
    _run(connection, send_shuffle)


def send_shuffle_range(connection: Connection, start: int, end) -> None:
    """Shuffle a range of positions."""
    connection.send_command("shuffle", range_arg(start, end))


def run_shuffle_range(connection: Connection, start: int, end) -> None:
    """Shuffle a range and wait for the reply."""
    _run(connection, send_shuffle_range, start, end)


def send_clear(connection: Connection) -> None:
    """Remove every song from the queue."""
    connection.send_command("clear")


def run_clear(connection: Connection) -> None:
    """Clear the queue and wait for the reply."""
    _run(connection, send_clear)


def send_move(connection: Connection, source: int, to: int) -> None:
    """Move the song at one position to another."""
    connection.send_command("move", source, to)


def run_move(connection: Connection, source: int, to: int) -> None:
    """Move by position and wait for the reply."""
    _run(connection, send_move, source, to)


def send_move_id(connection: Connection, source: int, to: int) -> None:
    """Move the song with a queue id to a position."""
    connection.send_command("moveid", source, to)


def run_move_id(connection: Connection, source: int, to: int) -> None:
    """Move by id and wait for the reply."""
    _run(connection, send_move_id, source, to)


def send_move_range(connection: Connection, start: int, end, to: int) -> None:
    """Move a range of positions to a new position."""
    connection.send_command("move", range_arg(start, end), to)


def run_move_range(connection: Connection, start: int, end, to: int) -> None:
    """Move a range and wait for the reply."""
    _run(connection, send_move_range, start, end, to)


def send_swap(connection: Connection, pos1: int, pos2: int) -> None:
    """Swap the songs at two positions."""
    connection.send_command("swap", pos1, pos2)


def run_swap(connection: Connection, pos1: int, pos2: int) -> None:
    """Swap by position and wait for the reply."""
    _run(connection, send_swap, pos1, pos2)


def send_swap_id(connection: Connection, id1: int, id2: int) -> None:
    """Swap the songs with two queue ids."""
    connection.send_command("swapid", id1, id2)


def run_swap_id(connection: Connection, id1: int, id2: int) -> None:
    """Swap by id and wait for the reply."""
    _run(connection, send_swap_id, id1, id2)


# -- tags ----------------------------------------------------------------


def send_add_tag_id(connection: Connection, song_id: int, tag, value: str) -> None:
    """Add a tag value to a (remote) song in the queue."""
    connection.send_command("addtagid", song_id, _tag_name(tag), value)


def run_add_tag_id(connection: Connection, song_id: int, tag, value: str) -> None:
    """Add a tag value and wait for the reply."""
    _run(connection, send_add_tag_id, song_id, tag, value)


def send_clear_tag_id(connection: Connection, song_id: int, tag) -> None:
    """Remove all values of one tag from a song in the queue."""
    connection.send_command("cleartagid", song_id, _tag_name(tag))


def run_clear_tag_id(connection: Connection, song_id: int, tag) -> None:
    """Clear one tag and wait for the reply."""
    _run(connection, send_clear_tag_id, song_id, tag)


def send_clear_all_tags_id(connection: Connection, song_id: int) -> None:
    """Remove all tags from a song in the queue."""
    connection.send_command("cleartagid", song_id)


def run_clear_all_tags_id(connection: Connection, song_id: int) -> None:
    """Clear all tags and wait for the reply."""
    _run(connection, send_clear_all_tags_id, song_id)


# -- priorities and ranges -----------------------------------------------


def send_prio(connection: Connection, priority: int, position: int) -> None:
    """Set the priority of the song at a position."""
    connection.send_command("prio", priority, position)


def run_prio(connection: Connection, priority: int, position: int) -> None:
    """Set a priority by position and wait for the reply."""
    _run(connection, send_prio, priority, position)


def send_prio_range(connection: Connection, priority: int, start: int, end) -> None:
    """Set the priority of a range of positions."""
    connection.send_command("prio", priority, range_arg(start, end))


def run_prio_range(connection: Connection, priority: int, start: int, end) -> None:
    """Set a priority on a range and wait for the reply."""
    _run(connection, send_prio_range, priority, start, end)


def send_prio_id(connection: Connection, priority: int, song_id: int) -> None:
    """Set the priority of the song with a queue id."""
    connection.send_command("prioid", priority, song_id)


def run_prio_id(connection: Connection, priority: int, song_id: int) -> None:
    """Set a priority by id and wait for the reply."""
    _run(connection, send_prio_id, priority, song_id)


def send_range_id(
    connection: Connection, song_id: int, start: float, end: float
) -> None:
    """Limit playback of a song to a time range; a negative end is open."""
    connection.send_command("rangeid", song_id, float_range_arg(start, end))


def run_range_id(
    connection: Connection, song_id: int, start: float, end: float
) -> None:
    """Set a playback range and wait for the reply."""
    _run(connection, send_range_id, song_id, start, end)