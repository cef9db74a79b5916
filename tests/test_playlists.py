import socket

import pytest

from mpdwire.connection import Connection, MalformedError, ServerError
from mpdwire.playlist import format_datetime
from mpdwire.playlists import iter_playlists, recv_playlist


@pytest.fixture
def capture():
    ours, peer = socket.socketpair()
    peer.settimeout(2)
    conn = Connection(ours, 2)
    yield conn, peer
    conn.close()
    peer.close()


def test_iter_playlists_reads_all(capture):
    conn, peer = capture
    stamp = 1600000000
    conn.send_command("listplaylists")
    response = (
        f"playlist: foo\nLast-Modified: {format_datetime(stamp)}\n"
        "playlist: bar\nOK\n"
    )
    peer.sendall(response.encode())

    playlists = list(iter_playlists(conn))
    assert [p.path for p in playlists] == ["foo", "bar"]
    assert playlists[0].last_modified == stamp
    assert playlists[1].last_modified == 0
    conn.response_finish()
    assert conn.error is None


def test_recv_playlist_skips_foreign_pairs(capture):
    conn, peer = capture
    conn.send_command("listplaylists")
    peer.sendall(b"other: x\nplaylist: a\nOK\n")
    playlist = recv_playlist(conn)
    assert playlist.path == "a"
    assert recv_playlist(conn) is None


def test_recv_playlist_empty_response(capture):
    conn, peer = capture
    conn.send_command("listplaylists")
    peer.sendall(b"OK\n")
    assert recv_playlist(conn) is None


def test_recv_playlist_rejects_absolute_path(capture):
    conn, peer = capture
    conn.send_command("listplaylists")
    peer.sendall(b"playlist: /abs\nOK\n")
    with pytest.raises(MalformedError):
        recv_playlist(conn)


def test_recv_playlist_server_error(capture):
    conn, peer = capture
    conn.send_command("listplaylists")
    peer.sendall(b"playlist: a\nACK [5@0] {} cancel\n")
    with pytest.raises(ServerError):
        recv_playlist(conn)
    assert conn.clear_error()