"""Querying the commands, URL schemes and tag types the server supports."""

from __future__ import annotations

from typing import Iterable

from mpdwire.connection import Connection, Pair


def _tag_names(types: Iterable[str]) -> list[str]:
    names = list(types)
    if not names:
        raise ValueError("no tag types specified")
    for name in names:
        if not isinstance(name, str) or not name:
            raise ValueError("invalid type specified")
    return names


def send_allowed_commands(connection: Connection) -> None:
    """Ask for the commands this connection may use.

    Read the reply with :func:`recv_command_pair`.
    """
    connection.send_command("commands")


def send_disallowed_commands(connection: Connection) -> None:
    """Ask for the supported commands this connection may not use.

    Read the reply with :func:`recv_command_pair`.
    """
    connection.send_command("notcommands")


def recv_command_pair(connection: Connection) -> Pair | None:
    """Receive the next "command" pair, or None at the end of the response."""
    return connection.recv_pair_named("command")


def send_list_url_schemes(connection: Connection) -> None:
    """Ask for the supported URL schemes, such as "http://".

    Read the reply with :func:`recv_url_scheme_pair`.
    """
    connection.send_command("urlhandlers")


def recv_url_scheme_pair(connection: Connection) -> Pair | None:
    """Receive the next "handler" pair, or None at the end of the response."""
    return connection.recv_pair_named("handler")


def send_list_tag_types(connection: Connection) -> None:
    """Ask for the supported tag types.

    Read the reply with :func:`recv_tag_type_pair`.
    """
    connection.send_command("tagtypes")


def recv_tag_type_pair(connection: Connection) -> Pair | None:
    """Receive the next "tagtype" pair, or None at the end of the response."""
    return connection.recv_pair_named("tagtype")


def _send_tag_types(connection: Connection, action: str,
                    types: Iterable[str]) -> None:
    names = _tag_names(types)
    connection.send_command(" ".join(["tagtypes", action, *names]))


def send_disable_tag_types(connection: Connection, types: Iterable[str]) -> None:
    """Stop the server from sending the given tag types to this client."""
    _send_tag_types(connection, "disable", types)


def run_disable_tag_types(connection: Connection, types: Iterable[str]) -> None:
    """Disable tag types and wait for the server's reply."""
    connection.run_check()
    send_disable_tag_types(connection, types)
    connection.response_finish()


def send_enable_tag_types(connection: Connection, types: Iterable[str]) -> None:
    """Make the server send the given tag types to this client again."""
    _send_tag_types(connection, "enable", types)


def run_enable_tag_types(connection: Connection, types: Iterable[str]) -> None:
    """Enable tag types and wait for the server's reply."""
    connection.run_check()
    send_enable_tag_types(connection, types)
    connection.response_finish()


def send_clear_tag_types(connection: Connection) -> None:
    """Make the server send no tags at all to this client."""
    connection.send_command("tagtypes", "clear")


def run_clear_tag_types(connection: Connection) -> None:
    """Clear the tag types and wait for the server's reply."""
    connection.run_check()
    send_clear_tag_types(connection)
    connection.response_finish()


def send_all_tag_types(connection: Connection) -> None:
    """Make the server send every tag type to this client."""
    connection.send_command("tagtypes", "all")


def run_all_tag_types(connection: Connection) -> None:
    """Enable all tag types and wait for the server's reply."""
    connection.run_check()
    send_all_tag_types(connection)
    connection.response_finish()