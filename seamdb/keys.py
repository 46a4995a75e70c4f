"""Key prefixes and helpers that place keys into their key spaces."""

from __future__ import annotations

import enum
from dataclasses import dataclass

TABLET_DESCRIPTOR_KEY_PREFIX = b"TD"
TABLET_DEPLOYMENT_KEY_PREFIX = b"TT"
ROOT_KEY_PREFIX = b"a1"
RANGE_KEY_PREFIX = b"a2"
DATA_KEY_PREFIX = b"d"
SYSTEM_KEY_PREFIX = b"ds"
USER_KEY_PREFIX = b"du"
MAX_KEY = b"\xff"


class KeyKind(enum.Enum):
    """Key space a key belongs to."""

    ROOT = "root"
    RANGE = "range"
    SYSTEM = "system"
    USER = "user"

    def is_root(self) -> bool:
        return self is KeyKind.ROOT

    def is_range(self) -> bool:
        return self is KeyKind.RANGE


@dataclass(frozen=True)
class KeyRange:
    """Half-open key range ``[start, end)``."""

    start: bytes
    end: bytes


_PREFIX_KINDS = {
    ROOT_KEY_PREFIX: KeyKind.ROOT,
    RANGE_KEY_PREFIX: KeyKind.RANGE,
    USER_KEY_PREFIX: KeyKind.USER,
    SYSTEM_KEY_PREFIX: KeyKind.SYSTEM,
}


def identify_key(key: bytes) -> tuple[KeyKind, bytes]:
    """Split a key into its kind and the key with the prefix removed."""
    key = bytes(key)
    if not key:
        raise ValueError("invalid key: no key")
    if len(key) == 1:
        if key == DATA_KEY_PREFIX:
            return KeyKind.USER, b""
        raise ValueError(f"invalid key: {list(key)}")
    kind = _PREFIX_KINDS.get(key[:2])
    if kind is None:
        raise ValueError(f"invalid key: {list(key)}")
    return kind, key[2:]


def root_key(key: bytes) -> bytes:
    return ROOT_KEY_PREFIX + bytes(key)


def range_key(key: bytes) -> bytes:
    return RANGE_KEY_PREFIX + bytes(key)


def user_key(key: bytes) -> bytes:
    return USER_KEY_PREFIX + bytes(key)


def system_key(key: bytes) -> bytes:
    return SYSTEM_KEY_PREFIX + bytes(key)


def descriptor_key(tablet_id) -> bytes:
    return TABLET_DESCRIPTOR_KEY_PREFIX + str(tablet_id).encode()


def deployment_key(tablet_id) -> bytes:
    return TABLET_DEPLOYMENT_KEY_PREFIX + str(tablet_id).encode()


def descriptor_range() -> KeyRange:
    return KeyRange(TABLET_DESCRIPTOR_KEY_PREFIX, TABLET_DESCRIPTOR_KEY_PREFIX + b"z")


def deployment_range() -> KeyRange:
    return KeyRange(TABLET_DEPLOYMENT_KEY_PREFIX, TABLET_DEPLOYMENT_KEY_PREFIX + b"z")