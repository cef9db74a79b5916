import socket

import pytest

from mpdwire.connection import (
    Connection,
    MalformedError,
    MpdError,
    Pair,
    ServerError,
    StateError,
    float_range_arg,
    range_arg,
)


@pytest.fixture
def pipe():
    peer, client = socket.socketpair()
    peer.settimeout(2.0)
    conn = Connection(client, 2.0)
    yield conn, peer
    conn.close()
    peer.close()


def _receive(peer):
    return peer.recv(4096)


def test_range_arg():
    assert range_arg(0, 1) == "0:1"
    assert range_arg(42, 0xFFFFFFFF) == "42:"
    assert range_arg(6, None) == "6:"


def test_float_range_arg():
    assert float_range_arg(0, 666) == "0.000:666.000"
    assert float_range_arg(6, -1) == "6.000:"


def test_send_command_without_arguments(pipe):
    conn, peer = pipe
    conn.send_command("playlistinfo")
    assert _receive(peer) == b"playlistinfo\n"


def test_send_command_quotes_arguments(pipe):
    conn, peer = pipe
    conn.send_command("plchanges", "42", range_arg(6, 7))
    assert _receive(peer) == b'plchanges "42" "6:7"\n'


def test_recv_pairs_until_ok(pipe):
    conn, peer = pipe
    conn.send_command("currentsong")
    _receive(peer)
    peer.sendall(b"file: a.mp3\nTitle: b\nOK\n")

    first = conn.recv_pair()
    assert first == Pair("file", "a.mp3")
    conn.return_pair(first)
    second = conn.recv_pair()
    assert second == Pair("Title", "b")
    conn.return_pair(second)
    assert conn.recv_pair() is None

    with pytest.raises(StateError):
        conn.recv_pair()


def test_recv_pair_named_skips_others(pipe):
    conn, peer = pipe
    conn.send_command("status")
    _receive(peer)
    peer.sendall(b"volume: 5\nrepeat: 0\nstate: play\nOK\n")

    pair = conn.recv_pair_named("state")
    assert pair == Pair("state", "play")
    conn.return_pair(pair)
    assert conn.recv_pair_named("state") is None


def test_server_error_is_recoverable(pipe):
    conn, peer = pipe
    conn.send_command("commands")
    assert _receive(peer) == b"commands\n"
    peer.sendall(b"ACK [5@0] {} cancel\n")

    with pytest.raises(ServerError) as info:
        conn.response_finish()
    assert info.value.code == 5
    assert info.value.at == 0
    assert info.value.message == "cancel"

    with pytest.raises(ServerError):
        conn.send_command("status")
    assert conn.clear_error() is True
    assert conn.error is None

    conn.send_command("status")
    assert _receive(peer) == b"status\n"


def test_malformed_line_is_fatal(pipe):
    conn, peer = pipe
    conn.send_command("status")
    _receive(peer)
    peer.sendall(b"garbage without separator\n")

    with pytest.raises(MalformedError):
        conn.recv_pair()
    assert conn.clear_error() is False
    with pytest.raises(MalformedError):
        conn.send_command("status")


def test_enqueue_pair_redelivers(pipe):
    conn, peer = pipe
    conn.send_command("listplaylists")
    _receive(peer)
    peer.sendall(b"playlist: x\nOK\n")

    pair = conn.recv_pair()
    conn.enqueue_pair(pair)
    again = conn.recv_pair()
    assert again is pair
    conn.return_pair(again)

    assert conn.recv_pair() is None
    conn.enqueue_pair(None)
    assert conn.recv_pair() is None


def test_unreturned_pair_blocks_next_receive(pipe):
    conn, peer = pipe
    conn.send_command("status")
    _receive(peer)
    peer.sendall(b"volume: 5\nOK\n")

    conn.recv_pair()
    with pytest.raises(StateError):
        conn.recv_pair()
    with pytest.raises(StateError):
        conn.return_pair(Pair("volume", "5"))


def test_recv_binary(pipe):
    conn, peer = pipe
    conn.send_command("readpicture", "song.flac", "0")
    assert _receive(peer) == b'readpicture "song.flac" "0"\n'
    peer.sendall(b"size: 3\nbinary: 3\nabc\nOK\n")

    pair = conn.recv_pair_named("binary")
    assert pair.value == "3"
    conn.return_pair(pair)
    assert conn.recv_binary(int(pair.value)) == b"abc"
    conn.response_finish()
    assert conn.error is None


def test_recv_binary_requires_newline(pipe):
    conn, peer = pipe
    conn.send_command("readpicture", "song.flac", "0")
    _receive(peer)
    peer.sendall(b"binary: 3\nabcX")

    pair = conn.recv_pair_named("binary")
    conn.return_pair(pair)
    with pytest.raises(MalformedError, match="Malformed binary response"):
        conn.recv_binary(3)


def test_command_list_with_discrete_ok(pipe):
    conn, peer = pipe
    conn.command_list_begin(True)
    conn.send_command("status")
    conn.send_command("currentsong")
    with pytest.raises(StateError):
        conn.run_check()
    assert conn.clear_error() is True

    conn.command_list_end()
    assert _receive(peer) == (
        b"command_list_ok_begin\nstatus\ncurrentsong\ncommand_list_end\n"
    )
    peer.sendall(b"volume: 5\nlist_OK\nfile: x\nlist_OK\nOK\n")

    pair = conn.recv_pair()
    assert pair == Pair("volume", "5")
    conn.return_pair(pair)
    assert conn.recv_pair() is None

    conn.response_next()
    pair = conn.recv_pair()
    assert pair == Pair("file", "x")
    conn.return_pair(pair)
    conn.response_finish()
    assert conn.error is None


def test_command_list_end_without_begin(pipe):
    conn, _peer = pipe
    with pytest.raises(StateError, match="not in command list mode"):
        conn.command_list_end()


def test_response_next_outside_command_list(pipe):
    conn, peer = pipe
    conn.send_command("status")
    _receive(peer)
    with pytest.raises(StateError, match="Not in command list mode"):
        conn.response_next()


def test_unexpected_list_ok(pipe):
    conn, peer = pipe
    conn.send_command("status")
    _receive(peer)
    peer.sendall(b"list_OK\n")
    with pytest.raises(MalformedError, match="unexpected list_OK"):
        conn.recv_pair()


def test_send_while_receiving(pipe):
    conn, peer = pipe
    conn.send_command("status")
    _receive(peer)
    with pytest.raises(StateError):
        conn.send_command("stats")


def test_closed_by_server_is_fatal(pipe):
    conn, peer = pipe
    conn.send_command("status")
    _receive(peer)
    peer.close()
    with pytest.raises(MpdError):
        conn.recv_pair()
    assert conn.clear_error() is False


def test_timeout_is_fatal():
    peer, client = socket.socketpair()
    with Connection(client, 0.05) as conn:
        conn.send_command("idle")
        with pytest.raises(MpdError, match="Timeout"):
            conn.recv_pair()
        assert conn.error.fatal is True
    peer.close()