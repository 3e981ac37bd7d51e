"""Exceptions raised while parsing a media playlist."""


class PlaylistError(Exception):
    """Base class for every parse failure."""


class MissingHeader(PlaylistError):
    def __init__(self, line=None):
        super().__init__(line)
        self.line = line

    def __str__(self):
        return "Missing #EXTM3U header"


class MissingVersion(PlaylistError):
    def __str__(self):
        return "Missing #EXT-X-VERSION"


class ParseError(PlaylistError):
    """Malformed tag payload, only raised when parsing with ``strict=True``."""

    def __init__(self, lineno, line):
        super().__init__(lineno, line)
        self.lineno = lineno
        self.line = line

    def __str__(self):
        return "Syntax error in manifest on line %d: %s" % (self.lineno, self.line)
