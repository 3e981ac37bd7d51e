"""
Parser for HLS media playlists.

    >>> import m3u8lite
    >>> playlist = m3u8lite.loads(text)
    >>> playlist.version, playlist.duration
"""

from m3u8lite import cparser
from m3u8lite.errors import MissingHeader, MissingVersion, ParseError, PlaylistError
from m3u8lite.model import Diagnostic, DiscontinuityGroup, Playlist, Segment
from m3u8lite.parser import parse

__all__ = (
    "Diagnostic",
    "DiscontinuityGroup",
    "MissingHeader",
    "MissingVersion",
    "ParseError",
    "Playlist",
    "PlaylistError",
    "Segment",
    "loads",
    "parse",
)


def loads(content, strict=False):
    """
    Given a string with HLS media playlist content, returns a Playlist.

    Uses the compiled scanner when it is available.
    """
    return cparser.parse(content, strict=strict)
