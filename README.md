# mpdwire

A client library for the Music Player Daemon (MPD) protocol. It writes
commands to a running MPD server and reads its replies. It covers playback
control, the queue, stored playlists, replay gain, embedded pictures, database
searches and the server's capabilities.

## Installation

```
pip install mpdwire
```

To run the test suite, install the test extra:

```
pip install "mpdwire[test]"
pytest
```

## Connecting

`mpdwire.resolver.resolve(host, port)` returns a list of `ResolverAddress`
objects, each with `family`, `protocol` and `address`. A host that starts with
`/` is a UNIX socket path; one that starts with `@` names an abstract socket.
Any other host is looked up over TCP.

`Connection` works on a socket that is already connected. It does not read
the server's greeting line (`OK MPD <version>`), so read that yourself first:

```python
import socket

from mpdwire.connection import Connection
from mpdwire.resolver import resolve

address = resolve("localhost", 6600)[0]
sock = socket.socket(address.family, socket.SOCK_STREAM, address.protocol)
sock.connect(address.address)
greeting = sock.recv(4096)          # b"OK MPD 0.23.0\n"

with Connection(sock, timeout=30.0) as conn:
    ...
```

Leaving the `with` block, or calling `conn.close()`, closes the socket.

## Errors

A failed operation raises an `MpdError`. The error is also kept in
`conn.error`, and every later operation raises it again until it is cleared.

- `StateError`: the call was made in the wrong state, for example a `run_*`
  shortcut inside a command list.
- `MalformedError`: the server's reply could not be parsed.
- `ServerError`: the server answered with an `ACK`; it carries `message`,
  `code` and `at`.
- `MpdError` itself: the socket failed, timed out or was closed.

`conn.clear_error()` clears a `StateError` or `ServerError` and returns
`True`. For the other errors it returns `False`, and the connection cannot be
used any more.

## Sending commands

Most operations come in two forms:

- A `send_*` function only writes the command.
- A `run_*` function checks that no command list is being built, writes the
  command and reads the response to its end.

```python
from mpdwire import player, queue
from mpdwire.position import Whence

queue.run_clear(conn)
song_id = queue.run_add_id_whence(conn, "music/track.flac", 0, Whence.AFTER_CURRENT)
player.run_play_id(conn, song_id)
player.run_seek_current(conn, 30.0, True)   # sends seekcur "+30.000"
player.run_repeat(conn, True)
```

Any other command can be written with `conn.send_command(name, *args)`; each
argument is quoted, and `True`/`False` are sent as `1`/`0`.

Ranges go through `range_arg(start, end)`, where an end of `None` or
`0xFFFFFFFF` leaves the range open (`"42:"`), and `float_range_arg(start, end)`,
where a negative end is open (`"6.000:"`).

## Reading responses

Replies arrive as `Pair` objects, each with a `name` and a `value`. Hand each
pair back with `return_pair` before reading the next one:

```python
from mpdwire.capabilities import recv_command_pair, send_allowed_commands

send_allowed_commands(conn)
while (pair := recv_command_pair(conn)) is not None:
    print(pair.value)
    conn.return_pair(pair)
conn.response_finish()
```

`conn.enqueue_pair(pair)` unreads the pair just received (or the `None` that
ended a response), and `conn.recv_binary(length)` reads a binary payload.

Stored playlists can be iterated over. Each `Playlist` holds its `path` and
its `last_modified` POSIX time stamp (0 if unknown):

```python
from mpdwire.playlists import iter_playlists

conn.send_command("listplaylists")
for playlist in iter_playlists(conn):
    print(playlist.path, playlist.last_modified)
conn.response_finish()
```

`queue.recv_queue_change_brief(conn)` returns `(position, id)` tuples after
`send_queue_changes_brief`, and `queue.recv_song_id(conn)` reads the id of an
added song.

## Command lists

A command list sends several commands to the server in one go:

```python
conn.command_list_begin(True)
player.send_stop(conn)
queue.send_clear(conn)
conn.command_list_end()
conn.response_next()
conn.response_next()
conn.response_finish()
```

With `discrete_ok=True` the server acknowledges each command, and
`response_next` moves on to the reply of the next one.

## Searching

Build a search step by step, then send it with `commit`. Tags are given by
their protocol names, such as `"Artist"`:

```python
from mpdwire.search import search_db_songs

search = search_db_songs(exact=True)
search.add_tag_constraint("Artist", "Queen")
search.add_window(0, 10)
search.commit(conn)
```

This sends `find Artist "Queen" window 0:10`. The builder methods return the
search, so they can be chained. The other starting points are
`search_add_db_songs`, `search_queue_songs`, `search_db_tags`,
`count_db_songs` and `search_add_db_songs_to_playlist`. Read `list` results
with `recv_pair_tag(conn, "Artist")`.

## Embedded pictures

```python
from mpdwire.readpicture import run_readpicture

chunk = run_readpicture(conn, "music/track.flac", 0, 8192)
```

`chunk` holds up to 8192 bytes of the picture starting at offset 0, or is
`None` if the song has no picture.

## Replay gain

```python
from mpdwire.replay_gain import ReplayGainMode, run_replay_gain_mode, run_replay_gain_status

run_replay_gain_mode(conn, ReplayGainMode.ALBUM)
print(run_replay_gain_status(conn))
```

## Tag types

`mpdwire.capabilities` lists the supported commands, URL schemes and tag
types, and turns tag types on and off for this client, for example
`run_disable_tag_types(conn, ["Comment", "Performer"])`.

## What it does not do

- It does not open the connection or read the greeting; you pass in a socket
  that is already connected.
- It has no objects for songs, status, statistics or directories, and no list
  of tag types: such replies are read as plain pairs, and tags are passed as
  strings.
- It has no password command and no idle support of its own; send those with
  `conn.send_command`.