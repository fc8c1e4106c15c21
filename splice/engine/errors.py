"""
Splice Errors
=============

Exceptions raised by the parser and the diagnostic text they carry.

A parse failure reads:

    mismatched open and close tags at line 0 col 0: ``<div>hi</span>''

Line and column are zero-based. The snippet is up to 30 characters of the
original source starting at the failure point, with newlines removed.
"""

from __future__ import annotations

from typing import Sequence

from splice.engine.ast import Location

SNIPPET_LENGTH = 30


class SpliceError(Exception):
    """Base exception for Splice errors."""
    pass


class ParseError(SpliceError):
    """
    Raised on the first malformed construct.

    Attributes:
        message: Short description of the failure
        location: Where the failing construct starts, or the cursor position
        snippet: Source text at ``location``
    """

    def __init__(self, message: str, location: Location, snippet: str = "") -> None:
        self.message = message
        self.location = location
        self.snippet = snippet
        super().__init__(format_diagnostic(message, location, snippet))


def snippet(source: str, pos: int, length: int = SNIPPET_LENGTH) -> str:
    """Source text at ``pos`` for a diagnostic, newlines stripped."""
    return source[pos:pos + length].replace("\n", "").replace("\r", "")


def format_diagnostic(message: str, location: Location, text: str) -> str:
    """Format a failure in the fixed ``<message> at line L col C: ``...''`` shape."""
    return f"{message} at line {location.line} col {location.col}: ``{text}''"


def parse_error(message: str, location: Location, fragments: Sequence[str]) -> ParseError:
    """Build a ParseError, reconstructing the snippet from the fragments."""
    return ParseError(message, location, snippet("".join(fragments), location.pos))
