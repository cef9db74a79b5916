"""ReplayGain mode queries and settings."""

from __future__ import annotations

from enum import IntEnum

from mpdwire.connection import Connection


class ReplayGainMode(IntEnum):
    """The server's ReplayGain mode."""

    OFF = 0
    TRACK = 1
    ALBUM = 2
    AUTO = 3
    UNKNOWN = 4


_NAMES = {
    ReplayGainMode.OFF: "off",
    ReplayGainMode.TRACK: "track",
    ReplayGainMode.ALBUM: "album",
    ReplayGainMode.AUTO: "auto",
}

_BY_NAME = {name: mode for mode, name in _NAMES.items()}


def parse_replay_gain_name(name: str) -> ReplayGainMode:
    """Map a mode name to a mode; unknown names give UNKNOWN."""
    return _BY_NAME.get(name, ReplayGainMode.UNKNOWN)


def lookup_replay_gain_mode(mode) -> str | None:
    """Return the protocol name of *mode*, or None if it is not valid."""
    try:
        return _NAMES.get(ReplayGainMode(mode))
    except ValueError:
        return None


def send_replay_gain_status(connection: Connection) -> None:
    """Ask for the current ReplayGain mode."""
    connection.send_command("replay_gain_status")


def run_replay_gain_status(connection: Connection) -> ReplayGainMode:
    """Query the ReplayGain mode; UNKNOWN if the reply names none."""
    connection.run_check()
    send_replay_gain_status(connection)

    pair = connection.recv_pair_named("replay_gain_mode")
    if pair is not None:
        mode = parse_replay_gain_name(pair.value)
        connection.return_pair(pair)
    else:
        mode = ReplayGainMode.UNKNOWN

    connection.response_finish()
    return mode


def send_replay_gain_mode(connection: Connection, mode) -> None:
    """Set the ReplayGain mode."""
    name = lookup_replay_gain_mode(mode)
    if name is None:
        raise ValueError(f"invalid replay gain mode: {mode!r}")
    connection.send_command("replay_gain_mode", name)


def run_replay_gain_mode(connection: Connection, mode) -> None:
    """Set the ReplayGain mode and wait for the reply."""
    connection.run_check()
    send_replay_gain_mode(connection, mode)
    connection.response_finish()