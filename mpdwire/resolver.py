"""Resolving a host name or socket path into connectable addresses."""

from __future__ import annotations

import socket
from dataclasses import dataclass
from typing import Any

# Size of sun_path in struct sockaddr_un.
_SUN_PATH_SIZE = 108


@dataclass(frozen=True)
class ResolverAddress:
    """One address to try: socket family, protocol and socket address."""

    family: int
    protocol: int
    address: Any


def _resolve_local(host: str) -> list[ResolverAddress]:
    family = getattr(socket, "AF_UNIX", None)
    if family is None:
        raise OSError("local sockets are not supported on this platform")

    abstract = host.startswith("@")
    encoded = host.encode()
    # the path needs a terminating null byte unless the socket is abstract
    path_length = len(encoded) + (0 if abstract else 1)
    if path_length > _SUN_PATH_SIZE:
        raise ValueError(f"socket path too long: {host!r}")

    address = "\0" + host[1:] if abstract else host
    return [ResolverAddress(family, 0, address)]


def resolve(host: str, port: int) -> list[ResolverAddress]:
    """Resolve *host* and *port* into a list of addresses to try in order.

    A host starting with "/" is a local socket path; one starting with "@"
    names an abstract local socket.  Anything else is looked up as a TCP host.
    """
    if host.startswith(("/", "@")):
        return _resolve_local(host)

    infos = socket.getaddrinfo(
        host, str(port), socket.AF_UNSPEC, socket.SOCK_STREAM, socket.IPPROTO_TCP
    )
    return [
        ResolverAddress(family, protocol, sockaddr)
        for family, _type, protocol, _canon, sockaddr in infos
    ]