"""Receiving stored playlists from a response."""

from __future__ import annotations

from typing import Iterator

from mpdwire.connection import Connection, MalformedError
from mpdwire.playlist import Playlist


def recv_playlist(connection: Connection) -> Playlist | None:
    """Receive the next playlist, or None at the end of the response."""
    pair = connection.recv_pair_named("playlist")
    if pair is None:
        return None

    connection.return_pair(pair)
    try:
        playlist = Playlist.begin(pair.name, pair.value)
    except ValueError as exc:
        raise MalformedError("Malformed entity response line") from exc

    while (pair := connection.recv_pair()) is not None and playlist.feed(
        pair.name, pair.value
    ):
        connection.return_pair(pair)

    # unread this pair for the next call
    connection.enqueue_pair(pair)
    return playlist


def iter_playlists(connection: Connection) -> Iterator[Playlist]:
    """Yield every playlist of the current response."""
    while (playlist := recv_playlist(connection)) is not None:
        yield playlist