"""
CFFI-based C scanner for HLS media playlists.

The C scanner handles the hot loop (line scanning and state management),
and only creates Python objects at the end of parsing.
"""

from m3u8lite.cparser.fast_parser import AVAILABLE, parse

__all__ = ["AVAILABLE", "parse"]
