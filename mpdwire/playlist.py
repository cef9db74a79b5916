"""Stored playlists as reported by the server."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def parse_datetime(text: str) -> int:
    """Parse an ISO 8601 UTC time stamp; return 0 if it cannot be parsed."""
    try:
        parsed = datetime.strptime(text, _DATETIME_FORMAT)
    except ValueError:
        return 0
    return int(parsed.replace(tzinfo=timezone.utc).timestamp())


def format_datetime(timestamp: int) -> str:
    """Format a POSIX time stamp as an ISO 8601 UTC string."""
    try:
        moment = datetime.fromtimestamp(timestamp, timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise ValueError(f"cannot format time stamp {timestamp!r}") from exc
    return moment.strftime(_DATETIME_FORMAT)


def _is_local_uri(uri: str) -> bool:
    return bool(uri) and not uri.startswith("/") and not uri.endswith("/")


@dataclass
class Playlist:
    """A stored playlist: its path and last modification time (0 if unknown)."""

    path: str
    last_modified: int = 0

    @classmethod
    def begin(cls, name: str, value: str) -> Playlist:
        """Start a playlist from its first pair, which must be "playlist"."""
        if name != "playlist" or not _is_local_uri(value):
            raise ValueError(f"not a playlist pair: {name!r}: {value!r}")
        return cls(value)

    def feed(self, name: str, value: str) -> bool:
        """Absorb a pair; return False if it begins the next playlist."""
        if name == "playlist":
            return False
        if name == "Last-Modified":
            self.last_modified = parse_datetime(value)
        return True