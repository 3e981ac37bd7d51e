"""
Python wrapper for the CFFI-based C scanner.

This module converts the C structs returned by the C scanner into the same
:class:`~m3u8lite.model.Playlist` values the pure Python parser builds.
"""

from __future__ import annotations

from datetime import timedelta

from m3u8lite.errors import MissingHeader, MissingVersion
from m3u8lite.model import Playlist, Segment
from m3u8lite.parser import PlaylistBuilder, split_lines

# Error codes set by hls_parse()
HLS_MISSING_HEADER = 1
HLS_MISSING_VERSION = 2

_ENCODING = "utf-8"
_ERRORS = "surrogatepass"


def _decode(cdata, length: int) -> str:
    """Decode a C buffer of known length to a Python string."""
    return _ffi.unpack(cdata, length).decode(_ENCODING, _ERRORS)


def _convert_segments(c_seg, builder: PlaylistBuilder) -> None:
    """Feed a linked list of HLSSegment to the builder."""
    current = c_seg
    while current != _ffi.NULL:
        segment = Segment(
            duration=timedelta(seconds=current.duration),
            url=_decode(current.url, current.url_len),
        )
        builder.add_segment(segment, bool(current.discontinuity))
        current = current.next


def _convert_diagnostics(c_diag, builder: PlaylistBuilder) -> None:
    """Feed a linked list of HLSDiagnostic to the builder."""
    current = c_diag
    while current != _ffi.NULL:
        builder.add_diagnostic(
            current.lineno, _decode(current.line, current.line_len), current.kind
        )
        current = current.next


def parse(content: str, strict: bool = False) -> Playlist:
    """
    Parse an HLS media playlist using the fast C scanner.

    Args:
        content: The playlist text.
        strict: If True, raise on malformed numeric payloads.
                Note: The C scanner does not support strict mode - it will
                fall back to the Python parser if strict=True.

    Returns:
        The parsed Playlist.

    Raises:
        MissingHeader: The first line is not ``#EXTM3U``.
        MissingVersion: No valid ``#EXT-X-VERSION`` tag was found.
        ParseError: Only in strict mode.
    """
    if strict:
        from m3u8lite.parser import parse as py_parse

        return py_parse(content, strict=True)

    b_content = content.encode(_ENCODING, _ERRORS)

    c_data = _lib.hls_parse(b_content, len(b_content))

    if c_data == _ffi.NULL:
        raise MemoryError("hls_parse could not allocate the playlist")

    try:
        if c_data.error == HLS_MISSING_HEADER:
            raise MissingHeader(split_lines(content)[0])

        builder = PlaylistBuilder()
        _convert_diagnostics(c_data.diagnostics_head, builder)
        _convert_segments(c_data.segments_head, builder)

        if c_data.error == HLS_MISSING_VERSION:
            raise MissingVersion()

        return builder.build(
            ended=bool(c_data.ended),
            target_duration=timedelta(seconds=c_data.target_duration),
            version=c_data.version,
        )

    finally:
        # Always free C memory
        _lib.hls_free(c_data)


# Try to import the compiled C extension
try:
    from m3u8lite._hls_cparser import ffi as _ffi, lib as _lib

    AVAILABLE = True
except ImportError:
    # C extension not available, set sentinel values
    _ffi = None
    _lib = None
    AVAILABLE = False

    def parse(content: str, strict: bool = False) -> Playlist:
        """Fall back to Python parser when C extension is not available."""
        from m3u8lite.parser import parse as py_parse

        return py_parse(content, strict=strict)
