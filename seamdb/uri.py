"""Syntax checks and helpers for service URIs shaped ``scheme://address[path][?params]``."""

from __future__ import annotations

import ipaddress
import re
from collections.abc import Iterator, Mapping
from typing import Iterable, Optional, Tuple, Union


class UriError(ValueError):
    """Raised when text is not a valid service URI or part of one."""


_PCT = r"%[0-9A-Fa-f]{2}"
_UNRESERVED = r"A-Za-z0-9\-._~"
_SUB_DELIMS = r"!$&'()*+,;="

_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+\-.]*")
_SEGMENT_RE = re.compile(rf"(?:[{_UNRESERVED}{_SUB_DELIMS}:@]|{_PCT})*")
_QUERY_RE = re.compile(rf"(?:[{_UNRESERVED}{_SUB_DELIMS}:@/?]|{_PCT})*")
_REG_NAME_RE = re.compile(rf"(?:[{_UNRESERVED}{_SUB_DELIMS}]|{_PCT})*")
_USERINFO_RE = re.compile(rf"(?:[{_UNRESERVED}{_SUB_DELIMS}:]|{_PCT})*")
_IPV_FUTURE_RE = re.compile(rf"[vV][0-9A-Fa-f]+\.[{_UNRESERVED}{_SUB_DELIMS}:]+")
_PORT_RE = re.compile(r"[0-9]*")

_MAX_PORT = 65535


class Params(Mapping):
    """Ordered query parameters of a service URI."""

    def __init__(self, items: Union[Mapping, Iterable[Tuple[str, str]], None] = None) -> None:
        self._map: dict[str, str] = dict(items or ())

    def query(self, key: str) -> Optional[str]:
        return self._map.get(key)

    def is_empty(self) -> bool:
        return not self._map

    def __getitem__(self, key: str) -> str:
        return self._map[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._map)

    def __len__(self) -> int:
        return len(self._map)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Params):
            return list(self._map.items()) == list(other._map.items())
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._map.items()))

    def __repr__(self) -> str:
        return f"Params({self._map!r})"

    def __str__(self) -> str:
        """Render as ``k1=v1&k2=v2`` without a leading question mark."""
        return "&".join(f"{key}={value}" for key, value in self._map.items())


def _split_param(param: str) -> Optional[Tuple[str, str]]:
    key, sep, value = param.partition("=")
    if not sep or not key or not value or "=" in value:
        return None
    return key, value


def parse_params(s: str) -> Params:
    """Parse ``k1=v1&k2=v2``; keys must be unique and neither side empty."""
    if not _QUERY_RE.fullmatch(s):
        raise UriError(f"invalid params: {s}")
    params: dict[str, str] = {}
    for param in s.split("&"):
        pair = _split_param(param)
        if pair is None:
            raise UriError(f"invalid params: {s}")
        key, value = pair
        if key in params:
            raise UriError(f"duplicated param {key}: {s}")
        params[key] = value
    return Params(params)


def is_valid_path(path: str) -> bool:
    """Tell whether ``path`` is empty or an absolute path of non-empty valid segments."""
    if not path:
        return True
    if not path.startswith("/"):
        return False
    return all(segment and _SEGMENT_RE.fullmatch(segment) for segment in path[1:].split("/"))


def validate_scheme(scheme: str) -> None:
    """Raise UriError if ``scheme`` is empty or not a valid URI scheme."""
    if not scheme:
        raise UriError("empty scheme")
    if not _SCHEME_RE.fullmatch(scheme):
        raise UriError(f"invalid scheme: {scheme}")


def _validate_ip_literal(literal: str, server: str) -> None:
    if _IPV_FUTURE_RE.fullmatch(literal):
        return
    try:
        ipaddress.IPv6Address(literal)
    except ValueError as err:
        raise UriError(f"invalid address: {server}") from err


def _validate_port(port: str, server: str) -> None:
    if not _PORT_RE.fullmatch(port) or (port and int(port) > _MAX_PORT):
        raise UriError(f"invalid port in address: {server}")


def validate_authority(server: str) -> Optional[str]:
    """Check one ``[userinfo@]host[:port]`` authority; return its username, if any."""
    userinfo, at, hostport = server.partition("@")
    if not at:
        userinfo, hostport = None, server
    elif not _USERINFO_RE.fullmatch(userinfo):
        raise UriError(f"invalid userinfo in address: {server}")

    if hostport.startswith("["):
        literal, bracket, rest = hostport[1:].partition("]")
        if not bracket:
            raise UriError(f"invalid address: {server}")
        _validate_ip_literal(literal, server)
        if rest:
            if not rest.startswith(":"):
                raise UriError(f"invalid address: {server}")
            _validate_port(rest[1:], server)
    else:
        host, _, port = hostport.partition(":")
        if not _REG_NAME_RE.fullmatch(host):
            raise UriError(f"invalid address: {server}")
        _validate_port(port, server)

    if userinfo is None:
        return None
    return userinfo.partition(":")[0]


def format_uri(scheme: str, address: str, path: str, params: Optional[Mapping] = None) -> str:
    """Compose ``scheme://address[path][?params]``."""
    text = f"{scheme}://{address}{path}"
    if params:
        text += "?" + "&".join(f"{key}={value}" for key, value in params.items())
    return text