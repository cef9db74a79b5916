"""Commands that control playback."""

from __future__ import annotations

from typing import Callable

from mpdwire.connection import Connection


def _run(connection: Connection, sender: Callable[..., None], *args) -> None:
    connection.run_check()
    sender(connection, *args)
    connection.response_finish()


def _float_arg(value: float) -> str:
    return f"{value:.3f}"


def send_current_song(connection: Connection) -> None:
    """Ask for the song that is currently playing."""
    connection.send_command("currentsong")


def send_play(connection: Connection) -> None:
    """Start playing at the current position."""
    connection.send_command("play")


def run_play(connection: Connection) -> None:
    """Start playing and wait for the server's reply."""
    _run(connection, send_play)


def send_play_pos(connection: Connection, song_pos: int) -> None:
    """Start playing the song at a queue position."""
    connection.send_command("play", song_pos)


def run_play_pos(connection: Connection, song_pos: int) -> None:
    """Play the song at a queue position and wait for the reply."""
    _run(connection, send_play_pos, song_pos)


def send_play_id(connection: Connection, song_id: int) -> None:
    """Start playing the song with the given queue id."""
    connection.send_command("playid", song_id)


def run_play_id(connection: Connection, song_id: int) -> None:
    """Play the song with the given id and wait for the reply."""
    _run(connection, send_play_id, song_id)


def send_stop(connection: Connection) -> None:
    """Stop playback."""
    connection.send_command("stop")


def run_stop(connection: Connection) -> None:
    """Stop playback and wait for the reply."""
    _run(connection, send_stop)


def send_toggle_pause(connection: Connection) -> None:
    """Toggle between paused and playing."""
    connection.send_command("pause")


def run_toggle_pause(connection: Connection) -> None:
    """Toggle pause and wait for the reply."""
    _run(connection, send_toggle_pause)


def send_pause(connection: Connection, mode: bool) -> None:
    """Pause (True) or resume (False) playback."""
    connection.send_command("pause", bool(mode))


def run_pause(connection: Connection, mode: bool) -> None:
    """Pause or resume and wait for the reply."""
    _run(connection, send_pause, mode)


def send_next(connection: Connection) -> None:
    """Skip to the next song."""
    connection.send_command("next")


def run_next(connection: Connection) -> None:
    """Skip to the next song and wait for the reply."""
    _run(connection, send_next)


def send_previous(connection: Connection) -> None:
    """Go back to the previous song."""
    connection.send_command("previous")


def run_previous(connection: Connection) -> None:
    """Go back to the previous song and wait for the reply."""
    _run(connection, send_previous)


def send_seek_pos(connection: Connection, song_pos: int, t: int) -> None:
    """Seek to *t* seconds within the song at a queue position."""
    connection.send_command("seek", song_pos, t)


def run_seek_pos(connection: Connection, song_pos: int, t: int) -> None:
    """Seek by position and wait for the reply."""
    _run(connection, send_seek_pos, song_pos, t)


def send_seek_id(connection: Connection, song_id: int, t: int) -> None:
    """Seek to *t* seconds within the song with the given id."""
    connection.send_command("seekid", song_id, t)


def run_seek_id(connection: Connection, song_id: int, t: int) -> None:
    """Seek by id and wait for the reply."""
    _run(connection, send_seek_id, song_id, t)


def send_seek_id_float(connection: Connection, song_id: int, t: float) -> None:
    """Seek to a fractional time within the song with the given id."""
    connection.send_command("seekid", song_id, _float_arg(t))


def run_seek_id_float(connection: Connection, song_id: int, t: float) -> None:
    """Seek by id to a fractional time and wait for the reply."""
    _run(connection, send_seek_id_float, song_id, t)


def send_seek_current(connection: Connection, t: float, relative: bool) -> None:
    """Seek within the current song, absolutely or relative to now."""
    arg = f"{t:+.3f}" if relative else f"{t:.3f}"
    connection.send_command("seekcur", arg)


def run_seek_current(connection: Connection, t: float, relative: bool) -> None:
    """Seek within the current song and wait for the reply."""
    _run(connection, send_seek_current, t, relative)


def send_repeat(connection: Connection, mode: bool) -> None:
    """Switch repeat mode on or off."""
    connection.send_command("repeat", bool(mode))


def run_repeat(connection: Connection, mode: bool) -> None:
    """Set repeat mode and wait for the reply."""
    _run(connection, send_repeat, mode)


def send_random(connection: Connection, mode: bool) -> None:
    """Switch random mode on or off."""
    connection.send_command("random", bool(mode))


def run_random(connection: Connection, mode: bool) -> None:
    """Set random mode and wait for the reply."""
    _run(connection, send_random, mode)


def send_single(connection: Connection, mode: bool) -> None:
    """Switch single mode on or off."""
    connection.send_command("single", bool(mode))


def run_single(connection: Connection, mode: bool) -> None:
    """Set single mode and wait for the reply."""
    _run(connection, send_single, mode)


def send_consume(connection: Connection, mode: bool) -> None:
    """Switch consume mode on or off."""
    connection.send_command("consume", bool(mode))


def run_consume(connection: Connection, mode: bool) -> None:
    """Set consume mode and wait for the reply."""
    _run(connection, send_consume, mode)


def send_crossfade(connection: Connection, seconds: int) -> None:
    """Set the crossfade duration in seconds."""
    connection.send_command("crossfade", seconds)


def run_crossfade(connection: Connection, seconds: int) -> None:
    """Set crossfade and wait for the reply."""
    _run(connection, send_crossfade, seconds)


def send_mixrampdb(connection: Connection, db: float) -> None:
    """Set the MixRamp threshold in decibels."""
    connection.send_command("mixrampdb", _float_arg(db))


def run_mixrampdb(connection: Connection, db: float) -> None:
    """Set the MixRamp threshold and wait for the reply."""
    _run(connection, send_mixrampdb, db)


def send_mixrampdelay(connection: Connection, seconds: float) -> None:
    """Set the MixRamp delay in seconds."""
    connection.send_command("mixrampdelay", _float_arg(seconds))


def run_mixrampdelay(connection: Connection, seconds: float) -> None:
    """Set the MixRamp delay and wait for the reply."""
    _run(connection, send_mixrampdelay, seconds)


def send_clearerror(connection: Connection) -> None:
    """Clear the player's current error."""
    connection.send_command("clearerror")


def run_clearerror(connection: Connection) -> None:
    """Clear the player's error and wait for the reply."""
    _run(connection, send_clearerror)