"""
Immutable value types produced by the playlist parsers.

All durations are :class:`datetime.timedelta` values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta

ZERO = timedelta(0)
MILLISECOND = timedelta(milliseconds=1)


def to_millis(duration: timedelta) -> int:
    """Truncate a duration to whole milliseconds."""
    return duration // MILLISECOND


def add_millis(total: timedelta, duration: timedelta) -> timedelta:
    """Add two durations at whole-millisecond precision."""
    return timedelta(milliseconds=to_millis(total) + to_millis(duration))


@dataclass(frozen=True)
class Segment:
    """One media segment: the ``#EXTINF`` duration and the locator line after it."""

    duration: timedelta
    url: str


@dataclass(frozen=True)
class DiscontinuityGroup:
    """Contiguous run of segments between two ``#EXT-X-DISCONTINUITY`` tags."""

    duration: timedelta
    segments: tuple[Segment, ...] = ()


@dataclass(frozen=True)
class Diagnostic:
    """A malformed numeric payload that was tolerated by the lenient parser."""

    lineno: int
    line: str
    message: str


@dataclass(frozen=True)
class Playlist:
    """
    A parsed HLS media playlist.

    Attributes:
        ended: Whether an ``#EXT-X-ENDLIST`` tag was found.
        segments: Every segment, in manifest order.
        target_duration: Value of ``#EXT-X-TARGETDURATION`` in whole seconds.
        version: Value of ``#EXT-X-VERSION``.
        discontinuities: Segments grouped by ``#EXT-X-DISCONTINUITY`` boundaries.
        diagnostics: Tag payloads that could not be read in lenient mode.
    """

    ended: bool
    segments: tuple[Segment, ...]
    target_duration: timedelta
    version: int
    discontinuities: tuple[DiscontinuityGroup, ...]
    diagnostics: tuple[Diagnostic, ...] = field(default=())

    @property
    def duration(self) -> timedelta:
        total = ZERO
        for segment in self.segments:
            total = add_millis(total, segment.duration)
        return total
