"""A synchronous client connection speaking the MPD line protocol."""

from __future__ import annotations

import re
import socket
from dataclasses import dataclass
from enum import Enum, auto

from mpdwire.quote import quote

_UINT_MAX = 0xFFFFFFFF

_ACK_RE = re.compile(r"ACK\s*(?:\[(-?\d+)@(\d+)\])?\s*(?:\{[^}]*\})?\s?(.*)\Z")


class MpdError(Exception):
    """Base class of all errors raised by a connection.

    A fatal error leaves the connection unusable; it cannot be cleared.
    """

    fatal = True


class StateError(MpdError):
    """The operation is not possible in the connection's current state."""

    fatal = False


class MalformedError(MpdError):
    """The server sent a response that could not be understood."""

    fatal = True


class ServerError(MpdError):
    """The server rejected a command with an ACK line."""

    fatal = False

    def __init__(self, message: str, code: int = -1, at: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.at = at


@dataclass(frozen=True)
class Pair:
    """One "name: value" line of a response."""

    name: str
    value: str


class _PairState(Enum):
    NONE = auto()
    FLOATING = auto()
    QUEUED = auto()
    NULL = auto()


class _Line(Enum):
    OK = auto()
    LIST_OK = auto()
    ERROR = auto()
    PAIR = auto()
    MALFORMED = auto()


def _parse_line(line: str):
    if line == "OK":
        return _Line.OK, None
    if line == "list_OK":
        return _Line.LIST_OK, None
    if line.startswith("ACK"):
        match = _ACK_RE.match(line)
        if match is None:
            return _Line.ERROR, (-1, 0, None)
        code, at, message = match.groups()
        return _Line.ERROR, (
            int(code) if code is not None else -1,
            int(at) if at is not None else 0,
            message,
        )
    name, sep, value = line.partition(": ")
    if not sep or not name:
        return _Line.MALFORMED, None
    return _Line.PAIR, Pair(name, value)


def _format_arg(arg) -> str:
    if isinstance(arg, bool):
        return str(int(arg))
    return arg if isinstance(arg, str) else str(arg)


def range_arg(start: int, end: int | None) -> str:
    """Format a "start:end" range; an end of None or UINT_MAX is open."""
    if end is None or end == _UINT_MAX:
        return f"{start}:"
    return f"{start}:{end}"


def float_range_arg(start: float, end: float) -> str:
    """Format a "start:end" time range in seconds; a negative end is open."""
    if end < 0:
        return f"{start:.3f}:"
    return f"{start:.3f}:{end:.3f}"


class Connection:
    """A connection to the server over an already connected socket.

    Errors are raised and also remembered: until :meth:`clear_error`
    succeeds, every further operation raises the same error again.
    """

    def __init__(self, sock: socket.socket, timeout: float | None) -> None:
        self._sock = sock
        self._sock.settimeout(timeout)
        self._inbuf = bytearray()
        self._outbuf: list[bytes] = []
        self._error: MpdError | None = None

        self._receiving = False
        self._sending_command_list = False
        self._sending_command_list_ok = False
        self._command_list_remaining = 0
        self._discrete_finished = False

        self._pair_state = _PairState.NONE
        self._pair: Pair | None = None

    # -- context management -------------------------------------------

    def __enter__(self) -> Connection:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying socket."""
        self._sock.close()

    # -- errors --------------------------------------------------------

    @property
    def error(self) -> MpdError | None:
        """The error currently stored in this connection, if any."""
        return self._error

    def _check_error(self) -> None:
        if self._error is not None:
            raise self._error

    def _fail(self, exc: MpdError):
        if self._error is None:
            self._error = exc
        raise self._error

    def clear_error(self) -> bool:
        """Clear a recoverable error; return False if the error is fatal."""
        if self._error is None:
            return True
        if self._error.fatal:
            return False
        self._error = None
        return True

    def run_check(self) -> None:
        """Raise unless a single command may be run now."""
        self._check_error()
        if self._sending_command_list:
            self._fail(StateError("Not possible in command list mode"))

    # -- low level I/O -------------------------------------------------

    def _fill(self) -> None:
        try:
            data = self._sock.recv(4096)
        except TimeoutError as exc:
            raise MpdError("Timeout") from exc
        except OSError as exc:
            raise MpdError(str(exc)) from exc
        if not data:
            raise MpdError("Connection closed by the server")
        self._inbuf += data

    def _read_line(self) -> str:
        while True:
            index = self._inbuf.find(b"\n")
            if index >= 0:
                line = bytes(self._inbuf[:index])
                del self._inbuf[: index + 1]
                return line.decode("utf-8", "replace")
            self._fill()

    def _read_exact(self, length: int) -> bytes:
        while len(self._inbuf) < length:
            self._fill()
        data = bytes(self._inbuf[:length])
        del self._inbuf[:length]
        return data

    def _flush(self) -> None:
        data = b"".join(self._outbuf)
        self._outbuf.clear()
        try:
            self._sock.sendall(data)
        except TimeoutError:
            self._fail(MpdError("Timeout"))
        except OSError as exc:
            self._fail(MpdError(str(exc)))

    # -- sending -------------------------------------------------------

    def send_command(self, command: str, *args) -> None:
        """Send a command with its arguments, each quoted."""
        self._check_error()
        if self._receiving:
            self._fail(StateError(
                "Cannot send a new command while receiving another response"))

        parts = [command, *(quote(_format_arg(arg)) for arg in args)]
        self._outbuf.append((" ".join(parts) + "\n").encode("utf-8"))

        if not self._sending_command_list:
            self._flush()
            self._receiving = True
        elif self._sending_command_list_ok:
            self._command_list_remaining += 1

    def command_list_begin(self, discrete_ok: bool) -> None:
        """Start a command list; with *discrete_ok* each command is acknowledged."""
        self._check_error()
        if self._sending_command_list:
            self._fail(StateError("already in command list mode"))
        if self._receiving:
            self._fail(StateError(
                "Cannot send a new command while receiving another response"))

        begin = "command_list_ok_begin" if discrete_ok else "command_list_begin"
        self._outbuf.append((begin + "\n").encode("utf-8"))
        self._sending_command_list = True
        self._sending_command_list_ok = bool(discrete_ok)
        self._command_list_remaining = 0
        self._discrete_finished = False

    def command_list_end(self) -> None:
        """Commit the command list, making the server execute it."""
        self._check_error()
        if not self._sending_command_list:
            self._fail(StateError("not in command list mode"))

        self._sending_command_list = False
        try:
            self.send_command("command_list_end")
        except MpdError:
            raise
        self._sending_command_list = True

    # -- receiving -----------------------------------------------------

    def recv_binary(self, length: int) -> bytes:
        """Read *length* bytes of binary payload and its trailing newline."""
        self._check_error()
        if self._pair_state is _PairState.FLOATING:
            raise StateError("the previous pair was not returned")

        try:
            data = self._read_exact(length)
            newline = self._read_exact(1)
        except MpdError as exc:
            self._fail(exc)

        if newline != b"\n":
            self._fail(MalformedError("Malformed binary response"))
        return data

    def recv_pair(self) -> Pair | None:
        """Read the next pair, or return None at the end of the response."""
        self._check_error()
        if self._pair_state is _PairState.FLOATING:
            raise StateError("the previous pair was not returned")

        if self._pair_state is _PairState.NULL:
            self._pair_state = _PairState.NONE
            return None

        if self._pair_state is _PairState.QUEUED:
            self._pair_state = _PairState.FLOATING
            return self._pair

        if not self._receiving or (
            self._sending_command_list
            and self._command_list_remaining > 0
            and self._discrete_finished
        ):
            self._fail(StateError("already done processing current command"))

        try:
            line = self._read_line()
        except MpdError as exc:
            self._receiving = False
            self._sending_command_list = False
            self._fail(exc)

        kind, payload = _parse_line(line)

        if kind is _Line.MALFORMED:
            self._receiving = False
            self._fail(MalformedError("Failed to parse MPD response"))

        if kind is _Line.OK:
            expected_more = (self._sending_command_list
                             and self._command_list_remaining > 0)
            if expected_more:
                self._command_list_remaining = 0
            self._receiving = False
            self._sending_command_list = False
            self._discrete_finished = False
            if expected_more:
                self._fail(MalformedError("expected more list_OK's"))
            return None

        if kind is _Line.LIST_OK:
            if (not self._sending_command_list
                    or self._command_list_remaining == 0):
                self._fail(MalformedError("got an unexpected list_OK"))
            self._discrete_finished = True
            self._command_list_remaining -= 1
            return None

        if kind is _Line.ERROR:
            self._receiving = False
            self._sending_command_list = False
            code, at, message = payload
            if message is None:
                message = "Unspecified MPD error"
            self._fail(ServerError(message, code, at))

        self._pair = payload
        self._pair_state = _PairState.FLOATING
        return payload

    def recv_pair_named(self, name: str) -> Pair | None:
        """Like :meth:`recv_pair`, but skip pairs with a different name."""
        while (pair := self.recv_pair()) is not None:
            if pair.name == name:
                return pair
            self.return_pair(pair)
        return None

    def return_pair(self, pair: Pair) -> None:
        """Release a pair obtained from :meth:`recv_pair`."""
        if self._pair_state is not _PairState.FLOATING or pair is not self._pair:
            raise StateError("this pair is not the one last received")
        self._pair_state = _PairState.NONE

    def enqueue_pair(self, pair: Pair | None) -> None:
        """Unread the pair just received, or the None that ended a response."""
        if pair is not None:
            if (self._pair_state is not _PairState.FLOATING
                    or pair is not self._pair):
                raise StateError("only the pair last received can be unread")
            self._pair_state = _PairState.QUEUED
        else:
            if self._pair_state is not _PairState.NONE:
                raise StateError("a pair is still pending")
            self._pair_state = _PairState.NULL

    # -- responses -----------------------------------------------------

    def response_finish(self) -> None:
        """Discard the rest of the current response."""
        self._check_error()
        if self._pair_state is _PairState.NULL:
            self._pair_state = _PairState.NONE

        while self._receiving:
            self._discrete_finished = False
            pair = self.recv_pair()
            if pair is not None:
                self.return_pair(pair)

    def response_next(self) -> None:
        """Skip to the response of the next command in a command list."""
        self._check_error()
        if not self._receiving:
            self._fail(StateError("Response is already finished"))
        if not self._sending_command_list_ok:
            self._fail(StateError("Not in command list mode"))

        while not self._discrete_finished:
            if self._command_list_remaining == 0 or not self._receiving:
                self._fail(MalformedError("No list_OK found"))
            pair = self.recv_pair()
            if pair is not None:
                self.return_pair(pair)

        self._discrete_finished = False