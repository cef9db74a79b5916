"""Reading embedded pictures of songs in binary chunks."""

from __future__ import annotations

import re

from mpdwire.connection import Connection

_UNSIGNED_RE = re.compile(r"\s*\+?(\d+)")


def send_readpicture(connection: Connection, uri: str, offset: int) -> None:
    """Ask for a chunk of a song's embedded picture starting at *offset*."""
    connection.send_command("readpicture", uri, offset)


def recv_readpicture(connection: Connection, buffer_size: int) -> bytes | None:
    """Receive up to *buffer_size* bytes of the chunk; None if there is none."""
    pair = connection.recv_pair_named("binary")
    if pair is None:
        return None
    match = _UNSIGNED_RE.match(pair.value)
    chunk_size = int(match.group(1)) if match else 0
    connection.return_pair(pair)

    return connection.recv_binary(min(chunk_size, buffer_size))


def run_readpicture(
    connection: Connection, uri: str, offset: int, buffer_size: int
) -> bytes | None:
    """Fetch one picture chunk and finish the response."""
    connection.run_check()
    send_readpicture(connection, uri, offset)
    data = recv_readpicture(connection, buffer_size)
    connection.response_finish()
    return data