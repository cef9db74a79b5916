import socket

import pytest

from mpdwire.connection import Connection, ServerError, StateError
from mpdwire.position import Whence
from mpdwire.search import (
    Operator,
    Search,
    count_db_songs,
    recv_pair_tag,
    search_add_db_songs,
    search_add_db_songs_to_playlist,
    search_db_songs,
    search_db_tags,
    search_queue_songs,
)


@pytest.fixture
def capture():
    client, server = socket.socketpair()
    server.settimeout(5)
    conn = Connection(client, 5)
    yield conn, server
    conn.close()
    server.close()


def receive(server):
    return server.recv(4096).decode()


def abort(conn, server):
    server.sendall(b"ACK [5@0] {} cancel\n")
    with pytest.raises(ServerError):
        conn.response_finish()
    assert conn.clear_error()


def test_search_cancel_and_find(capture):
    conn, server = capture
    cancelled = search_queue_songs(False)
    cancelled.add_uri_constraint("foo", Operator.DEFAULT)
    assert cancelled.request == 'playlistsearch file "foo"'

    s = search_db_songs(True)
    s.add_base_constraint("foo", Operator.DEFAULT)
    s.add_tag_constraint("Artist", "Queen", Operator.DEFAULT)
    s.add_any_tag_constraint("Foo", Operator.DEFAULT)
    s.add_sort_tag("Date", False)
    s.add_window(7, 9)
    s.commit(conn)
    assert receive(server) == (
        'find base "foo" Artist "Queen" any "Foo" sort Date window 7:9\n'
    )
    abort(conn, server)

    s = search_db_songs(False)
    s.add_base_constraint("foo", Operator.DEFAULT)
    s.add_sort_tag("Date", False)
    s.add_window(7, 9)
    s.commit(conn)
    assert receive(server) == 'search base "foo" sort Date window 7:9\n'
    abort(conn, server)


def test_backslash_escape(capture):
    conn, server = capture
    s = search_db_songs(False)
    s.add_tag_constraint("Artist", 'double quote: " and backslash: \\')
    s.commit(conn)
    assert receive(server) == (
        'search Artist "double quote: \\" and backslash: \\\\"\n'
    )
    abort(conn, server)


def test_expression(capture):
    conn, server = capture
    s = search_db_songs(True)
    s.add_expression('(Artist == "Queen")')
    s.commit(conn)
    assert receive(server) == 'find "(Artist == \\"Queen\\")"\n'
    abort(conn, server)


def test_list(capture):
    conn, server = capture
    search_db_tags("Artist").commit(conn)
    assert receive(server) == "list Artist\n"
    abort(conn, server)

    s = search_db_tags("Album")
    s.add_group_tag("Artist")
    s.commit(conn)
    assert receive(server) == "list Album group Artist\n"
    abort(conn, server)


def test_count(capture):
    conn, server = capture
    s = count_db_songs()
    s.add_tag_constraint("Artist", "Queen", Operator.DEFAULT)
    s.commit(conn)
    assert receive(server) == 'count Artist "Queen"\n'
    abort(conn, server)

    s = count_db_songs()
    s.add_tag_constraint("Artist", "Queen", Operator.DEFAULT)
    s.add_group_tag("Album")
    s.commit(conn)
    assert receive(server) == 'count Artist "Queen" group Album\n'
    abort(conn, server)


def test_add_commands():
    assert search_add_db_songs(True).request == "findadd"
    assert search_add_db_songs(False).request == "searchadd"
    assert search_queue_songs(True).request == "playlistfind"


def test_add_to_playlist_request():
    s = search_add_db_songs_to_playlist('my "list"')
    s.add_tag_constraint("Artist", "Queen")
    assert s.request == 'searchaddpl "my \\"list\\""  Artist "Queen"'


def test_sort_descending_and_position():
    s = search_add_db_songs(True)
    s.add_sort_name("Last-Modified", True)
    s.add_position(3, Whence.AFTER_CURRENT)
    s.add_position(2, Whence.ABSOLUTE)
    assert s.request == "findadd sort -Last-Modified position +3 position 2"


def test_modified_since():
    s = search_db_songs(True)
    s.add_modified_since_constraint(0)
    assert s.request == 'find modified-since "1970-01-01T00:00:00Z"'


def test_fragment_is_truncated():
    s = search_db_songs(True)
    s.add_sort_name("x" * 100)
    fragment = s.request[len("find"):]
    assert len(fragment) == 63
    assert fragment.startswith(" sort xxx")


def test_invalid_window():
    with pytest.raises(ValueError):
        search_db_songs(True).add_window(9, 7)


def test_invalid_tag():
    with pytest.raises(ValueError, match="invalid type"):
        search_db_tags(None)
    with pytest.raises(ValueError, match="invalid type"):
        search_db_songs(True).add_tag_constraint(None, "x")


def test_use_after_commit(capture):
    conn, server = capture
    s = count_db_songs()
    s.commit(conn)
    assert receive(server) == "count\n"
    with pytest.raises(StateError, match="no search in progress"):
        s.add_window(0, 1)
    with pytest.raises(StateError, match="no search in progress"):
        s.commit(conn)
    abort(conn, server)


def test_commit_while_receiving(capture):
    conn, server = capture
    search_db_tags("Artist").commit(conn)
    assert receive(server) == "list Artist\n"
    with pytest.raises(StateError, match="Cannot send"):
        Search("count").commit(conn)


def test_recv_pair_tag(capture):
    conn, server = capture
    search_db_tags("Artist").commit(conn)
    server.sendall(b"Artist: Queen\nAlbum: X\nArtist: ABBA\nOK\n")
    values = []
    while (pair := recv_pair_tag(conn, "Artist")) is not None:
        values.append(pair.value)
        conn.return_pair(pair)
    assert values == ["Queen", "ABBA"]


def test_recv_pair_tag_invalid(capture):
    conn, _server = capture
    assert recv_pair_tag(conn, None) is None