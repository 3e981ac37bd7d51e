"""
Pure Python parser for HLS media playlists.

This is the reference implementation: :mod:`m3u8lite.cparser` produces the
same :class:`~m3u8lite.model.Playlist` values and falls back to this module
whenever the compiled scanner is not available.
"""

from __future__ import annotations

import enum
import logging
import math
import re
import string
from datetime import timedelta

from m3u8lite.errors import MissingHeader, MissingVersion, ParseError
from m3u8lite.model import (
    ZERO,
    Diagnostic,
    DiscontinuityGroup,
    Playlist,
    Segment,
    add_millis,
)

logger = logging.getLogger(__name__)

HEADER = "#EXTM3U"
TARGET_DURATION_TAG = "EXT-X-TARGETDURATION"
VERSION_TAG = "#EXT-X-VERSION:"
SEGMENT_DURATION_TAG = "#EXTINF:"
DISCONTINUITY_TAG = "#EXT-X-DISCONTINUITY"
ENDLIST_TAG = "#EXT-X-ENDLIST"
LOCATOR_MARKER = ".ts"

MAX_UINT64 = 2**64 - 1
# Largest whole number of seconds a timedelta can hold.
MAX_DURATION_SECONDS = timedelta.max.days * 86400 + 86399

# Diagnostic kinds, shared with the C scanner.
DIAG_TARGET_DURATION = 1
DIAG_SEGMENT_DURATION = 2
DIAG_VERSION = 3

DIAGNOSTIC_MESSAGES = {
    DIAG_TARGET_DURATION: "EXT-X-TARGETDURATION: expecting digit",
    DIAG_SEGMENT_DURATION: "EXTINF: expecting digit",
    DIAG_VERSION: "EXT-X-VERSION: expecting unsigned integer",
}

_DECIMAL_CHARS = string.digits + "."
_VERSION_RE = re.compile(r"\+?[0-9]+")
_DECIMAL_RE = re.compile(r"[0-9]+\.?[0-9]*|\.[0-9]+")


class ScanState(enum.Enum):
    SCANNING = "scanning"
    AWAITING_LOCATOR = "awaiting_locator"


def uint_from_string(value: str) -> int:
    """
    Keep only the ASCII digits of ``value`` and read them as an unsigned
    64-bit integer.

    Raises:
        ValueError: If no digit is left or the number does not fit.
    """
    digits = "".join(ch for ch in value if ch in string.digits)
    if not digits:
        raise ValueError("no digits in %r" % value)
    number = int(digits)
    if number > MAX_UINT64:
        raise ValueError("%s does not fit in 64 bits" % digits)
    return number


def float_from_string(value: str) -> float:
    """
    Keep only the ASCII digits and dots of ``value`` and read them as a
    decimal number.

    Raises:
        ValueError: If what is left is not a single decimal number.
    """
    decimal = "".join(ch for ch in value if ch in _DECIMAL_CHARS)
    if not _DECIMAL_RE.fullmatch(decimal):
        raise ValueError("not a decimal number: %r" % value)
    number = float(decimal)
    if not math.isfinite(number):
        raise ValueError("%s is out of range" % decimal)
    return number


def seconds_to_duration(seconds: int | float) -> timedelta:
    if seconds > MAX_DURATION_SECONDS:
        raise ValueError("%s seconds is out of range" % seconds)
    return timedelta(seconds=seconds)


def parse_version(payload: str) -> int:
    if not _VERSION_RE.fullmatch(payload):
        raise ValueError("not an unsigned integer: %r" % payload)
    number = int(payload)
    if number > MAX_UINT64:
        raise ValueError("%s does not fit in 64 bits" % payload)
    return number


def split_lines(content: str) -> list[str]:
    """Split on ``\\n`` and drop one trailing ``\\r`` from every line."""
    return [
        line[:-1] if line.endswith("\r") else line for line in content.split("\n")
    ]


class PlaylistBuilder:
    """
    Accumulates segments and discontinuity groups while a playlist is scanned.

    Both parsers feed it one segment at a time and call :meth:`build` once at
    the end.
    """

    def __init__(self):
        self.segments: list[Segment] = []
        self.groups: list[tuple[timedelta, list[Segment]]] = []
        self.diagnostics: list[Diagnostic] = []

    def add_segment(self, segment: Segment, opens_group: bool) -> None:
        self.segments.append(segment)
        if opens_group or not self.groups:
            self.groups.append((segment.duration, [segment]))
        else:
            duration, members = self.groups[-1]
            members.append(segment)
            self.groups[-1] = (add_millis(duration, segment.duration), members)

    def add_diagnostic(self, lineno: int, line: str, kind: int) -> None:
        message = DIAGNOSTIC_MESSAGES[kind]
        logger.warning("Line %d: %s: %r", lineno, message, line)
        self.diagnostics.append(Diagnostic(lineno=lineno, line=line, message=message))

    def build(
        self,
        ended: bool,
        target_duration: timedelta,
        version: int | None,
    ) -> Playlist:
        if version is None:
            raise MissingVersion()
        return Playlist(
            ended=ended,
            segments=tuple(self.segments),
            target_duration=target_duration,
            version=version,
            discontinuities=tuple(
                DiscontinuityGroup(duration=duration, segments=tuple(members))
                for duration, members in self.groups
            ),
            diagnostics=tuple(self.diagnostics),
        )


def parse(content: str, strict: bool = False) -> Playlist:
    """
    Parse an HLS media playlist.

    Args:
        content: The playlist text.
        strict: If True, raise :class:`ParseError` on the first malformed
            numeric tag payload instead of recording a diagnostic.

    Returns:
        The parsed :class:`Playlist`.

    Raises:
        MissingHeader: The first line is not ``#EXTM3U``.
        MissingVersion: No valid ``#EXT-X-VERSION`` tag was found.
        ParseError: Only in strict mode, for a malformed numeric payload.
    """
    lines = split_lines(content)
    if lines[0] != HEADER:
        raise MissingHeader(lines[0])

    builder = PlaylistBuilder()
    state = ScanState.SCANNING
    ended = False
    target_duration = ZERO
    version = None
    pending_duration = ZERO
    discontinuity_boundary = True

    def tolerate(lineno, line, kind):
        if strict:
            raise ParseError(lineno, line)
        builder.add_diagnostic(lineno, line, kind)

    for lineno, line in enumerate(lines[1:], start=2):
        if state is ScanState.AWAITING_LOCATOR:
            if LOCATOR_MARKER not in line:
                continue
            builder.add_segment(
                Segment(duration=pending_duration, url=line), discontinuity_boundary
            )
            discontinuity_boundary = False
            state = ScanState.SCANNING

        elif TARGET_DURATION_TAG in line:
            try:
                target_duration = seconds_to_duration(
                    uint_from_string(line.rsplit(":", 1)[-1])
                )
            except ValueError:
                tolerate(lineno, line, DIAG_TARGET_DURATION)

        elif VERSION_TAG in line:
            try:
                version = parse_version(line[len(VERSION_TAG) :])
            except ValueError:
                version = None
                tolerate(lineno, line, DIAG_VERSION)

        elif SEGMENT_DURATION_TAG in line:
            payload = line[len(SEGMENT_DURATION_TAG) :].split(",", 1)[0]
            try:
                pending_duration = seconds_to_duration(float_from_string(payload))
            except ValueError:
                tolerate(lineno, line, DIAG_SEGMENT_DURATION)
            state = ScanState.AWAITING_LOCATOR

        elif DISCONTINUITY_TAG in line:
            discontinuity_boundary = True

        elif ENDLIST_TAG in line:
            ended = True

    return builder.build(ended, target_duration, version)
