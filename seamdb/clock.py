"""Hybrid logical timestamps and a monotonic clock producing them."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import ClassVar, Optional, Union

U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1

_NANOS_PER_SECOND = 10**9
_TXN_SEQUENCE_BIT = 1 << 63
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

Duration = Union[int, timedelta]
"""A non-negative span of time: an int counts nanoseconds."""


def _duration_nanos(duration: Duration) -> int:
    if isinstance(duration, timedelta):
        nanos = (duration.days * 86_400 + duration.seconds) * _NANOS_PER_SECOND
        nanos += duration.microseconds * 1_000
    else:
        nanos = duration
    if nanos < 0:
        raise ValueError(f"duration must not be negative: {duration!r}")
    return nanos


def _is_duration(value: object) -> bool:
    return isinstance(value, timedelta) or (isinstance(value, int) and not isinstance(value, bool))


@dataclass(order=True)
class Timestamp:
    """Physical time in seconds and nanoseconds plus a logical counter."""

    seconds: int = 0
    nanoseconds: int = 0
    logical: int = 0

    ZERO: ClassVar["Timestamp"]
    EPSILON: ClassVar["Timestamp"]
    MAX: ClassVar["Timestamp"]

    def is_zero(self) -> bool:
        return self.seconds == 0 and self.nanoseconds == 0 and self.logical == 0

    def get_txn_sequence(self) -> Optional[int]:
        """Return the transaction sequence if this is a sequence timestamp."""
        if self.seconds & _TXN_SEQUENCE_BIT:
            return self.seconds & U32_MAX
        return None

    @classmethod
    def txn_sequence(cls, sequence: int) -> "Timestamp":
        if not 0 <= sequence <= U32_MAX:
            raise ValueError(f"transaction sequence out of range: {sequence}")
        return cls(_TXN_SEQUENCE_BIT + sequence, 0, 0)

    def forward(self, ts: "Timestamp") -> None:
        """Move this timestamp forward to ``ts`` if ``ts`` is later."""
        if self < ts:
            self.seconds, self.nanoseconds, self.logical = ts.seconds, ts.nanoseconds, ts.logical

    def into_physical(self) -> "Timestamp":
        return replace(self, logical=0)

    def next(self) -> "Timestamp":
        """Return the smallest timestamp greater than this one."""
        if self.logical < U32_MAX:
            return replace(self, logical=self.logical + 1)
        return self._with_physical_nanos(self._physical_nanos() + 1, logical=0)

    def _physical_nanos(self) -> int:
        return self.seconds * _NANOS_PER_SECOND + self.nanoseconds

    def _with_physical_nanos(self, nanos: int, logical: int) -> "Timestamp":
        if nanos < 0:
            raise OverflowError("overflow when subtracting durations")
        seconds, nanoseconds = divmod(nanos, _NANOS_PER_SECOND)
        if seconds > U64_MAX:
            raise OverflowError("overflow when adding durations")
        return Timestamp(seconds, nanoseconds, logical)

    def __add__(self, other: Duration) -> "Timestamp":
        if not _is_duration(other):
            return NotImplemented
        total = self._physical_nanos() + _duration_nanos(other)
        return self._with_physical_nanos(total, logical=self.logical)

    def __sub__(self, other):
        """Subtract a duration, or return saturating nanoseconds between timestamps."""
        if isinstance(other, Timestamp):
            return max(0, self._physical_nanos() - other._physical_nanos())
        if not _is_duration(other):
            return NotImplemented
        total = self._physical_nanos() - _duration_nanos(other)
        return self._with_physical_nanos(total, logical=self.logical)

    def __str__(self) -> str:
        sequence = self.get_txn_sequence()
        if sequence is not None:
            return f"txn-seq-{sequence}"
        if self.nanoseconds >= _NANOS_PER_SECOND:
            raise ValueError(f"nanoseconds out of range: {self.nanoseconds}")
        try:
            moment = _EPOCH + timedelta(seconds=self.seconds)
        except OverflowError as err:
            raise ValueError(f"seconds out of range: {self.seconds}") from err
        text = moment.strftime("%Y-%m-%dT%H:%M:%S")
        if self.nanoseconds:
            text += "." + f"{self.nanoseconds:09d}".rstrip("0")
        text += "Z"
        if self.logical:
            text += f"-{self.logical}"
        return text


Timestamp.ZERO = Timestamp(0, 0, 0)
Timestamp.EPSILON = Timestamp(0, 0, 1)
Timestamp.MAX = Timestamp(U64_MAX, U32_MAX, U32_MAX)


def _system_time_now() -> Timestamp:
    seconds, nanoseconds = divmod(time.time_ns(), _NANOS_PER_SECOND)
    return Timestamp(seconds, nanoseconds, 0)


class Clock:
    """Thread-safe clock whose readings never go backwards."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._cache = _system_time_now()

    def now(self) -> Timestamp:
        now = _system_time_now()
        with self._lock:
            if now <= self._cache:
                self._cache = replace(self._cache, logical=self._cache.logical + 1)
                now = self._cache
            else:
                self._cache = now
            return replace(now)

    def update(self, timestamp: Timestamp) -> None:
        """Advance the clock to ``timestamp`` if it is ahead."""
        with self._lock:
            if timestamp > self._cache:
                self._cache = replace(timestamp)