"""Quoting of command arguments for the MPD protocol."""

_SPECIAL = ('"', "\\")


def escape(value: str) -> str:
    """Prefix every double quote and backslash in *value* with a backslash."""
    return "".join("\\" + ch if ch in _SPECIAL else ch for ch in value)


def quote(value: str) -> str:
    """Enclose *value* in double quotes, escaping special characters."""
    return f'"{escape(value)}"'