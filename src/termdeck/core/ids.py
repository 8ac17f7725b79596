"""Identifier generation

Every split, group, tab, pane and locally created session gets a string id
of the form::

    <prefix>-<timestamp_ms>-<counter>[-<suffix>]

e.g. ``grp-1739990000000-000001-k3f9``. The timestamp and counter are zero
padded, so ids produced by one generator sort in creation order. The random
suffix keeps ids from two generators (two windows, two test cases) apart.
"""

import random
import string
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .. import config

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


class IdKind(Enum):
    """What an id names. The value is the id prefix."""

    SPLIT = "split"
    GROUP = "grp"
    TAB = "tab"
    PANE = "pane"
    PTY = "pty"
    SSH = "ssh"
    SFTP = "sftp"

    @property
    def is_session(self) -> bool:
        return self in {IdKind.PTY, IdKind.SSH, IdKind.SFTP}


@dataclass(frozen=True)
class ParsedId:
    """Components of a generated id."""

    kind: IdKind
    timestamp_ms: int
    counter: int
    suffix: str = ""

    def __str__(self) -> str:
        base = (
            f"{self.kind.value}-{self.timestamp_ms:0{config.ID_TIMESTAMP_WIDTH}d}"
            f"-{self.counter:0{config.ID_COUNTER_WIDTH}d}"
        )
        return f"{base}-{self.suffix}" if self.suffix else base


class IdGenerator:
    """Per-instance id source.

    The counter belongs to the instance, not the module: two controllers
    built in the same process never share state.

    Attributes:
        issued: number of ids produced so far
    """

    def __init__(
        self,
        clock: Callable[[], float] | None = None,
        suffix_length: int = config.ID_RANDOM_SUFFIX_LENGTH,
        rng: random.Random | None = None,
    ):
        """
        Args:
            clock: returns seconds since epoch (default ``time.time``)
            suffix_length: random suffix length, 0 to disable
            rng: random source for the suffix
        """
        self._clock = clock or time.time
        self._suffix_length = suffix_length
        self._rng = rng or random.Random()
        self._counter = 0
        self._last_ms = 0

    @property
    def issued(self) -> int:
        return self._counter

    def next(self, kind: IdKind) -> str:
        """Produce the next id for ``kind``."""
        now_ms = int(self._clock() * 1000)
        # clock going backwards must not break ordering
        self._last_ms = max(self._last_ms, now_ms)
        self._counter += 1
        suffix = ""
        if self._suffix_length > 0:
            suffix = "".join(self._rng.choices(_SUFFIX_ALPHABET, k=self._suffix_length))
        return str(ParsedId(kind, self._last_ms, self._counter, suffix))

    def split_id(self) -> str:
        return self.next(IdKind.SPLIT)

    def group_id(self) -> str:
        return self.next(IdKind.GROUP)

    def tab_id(self) -> str:
        return self.next(IdKind.TAB)

    def pane_id(self) -> str:
        return self.next(IdKind.PANE)

    def session_id(self, kind: IdKind = IdKind.PTY) -> str:
        """Produce a backend session id (pty, ssh or sftp).

        Raises:
            ValueError: if ``kind`` is not a session kind
        """
        if not kind.is_session:
            raise ValueError(f"Not a session id kind: {kind.value}")
        return self.next(kind)


def parse_id(value: str) -> ParsedId | None:
    """Split a generated id into its components.

    Returns:
        ParsedId, or None if ``value`` was not produced by IdGenerator
    """
    parts = value.split("-", 3)
    if len(parts) < 3:
        return None

    try:
        kind = IdKind(parts[0])
        timestamp_ms = int(parts[1])
        counter = int(parts[2])
    except ValueError:
        return None

    suffix = parts[3] if len(parts) == 4 else ""
    return ParsedId(kind=kind, timestamp_ms=timestamp_ms, counter=counter, suffix=suffix)


def get_kind(value: str) -> IdKind | None:
    """Kind of a generated id, or None."""
    parsed = parse_id(value)
    return parsed.kind if parsed else None


def short_id(value: str, length: int = 8) -> str:
    """Short display form of an id for log lines.

    Generated ids keep their prefix and lose the timestamp, so
    ``pane-1739990000000-000042-k3f9`` becomes ``pane:000042``. Other ids are
    truncated to ``length``.
    """
    parsed = parse_id(value)
    if parsed is None:
        return value[:length]
    return f"{parsed.kind.value}:{parsed.counter:0{config.ID_COUNTER_WIDTH}d}"
