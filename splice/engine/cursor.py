"""
Splice Fragment Cursor
======================

Walks the fragment sequence produced by the lexer.

The lexer splits source text coarsely: every multi-character structural
symbol (``<!--``, ``</``, ``{...`` and so on) arrives as one fragment and
every newline is a fragment of its own, but ordinary text may be grouped
arbitrarily. The cursor therefore works at two granularities:

    advance()       step past the whole current fragment
    split(pattern)  peel a matching prefix off the current fragment

Both keep the line/column/offset counters in step with the source.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Pattern

from splice.engine.ast import Location
from splice.engine.errors import ParseError, parse_error

IDENTIFIER = re.compile(r"[a-zA-Z][A-Za-z0-9_-]*(?:\.[A-Za-z0-9_-]+)*")
LEADING_WS = re.compile(r"\s+")
# first character that ends a run of embedded code at the top level
CODE_TERMINATOR = re.compile(r"[\s<>/,;)\]}]")
CODE_CONTINUATION = re.compile(r"[^\s<>/,;)\]}]+")
# odd number of trailing backslashes: the next character is escaped
ESCAPED_END = re.compile(r"[^\\](?:\\\\)*\\\Z")

CLOSERS = {
    "(": ")",
    "[": "]",
    "{": "}",
    "{...": "}",
}


class FragmentCursor:
    """
    Position in a fragment sequence.

    Example:
        cursor = FragmentCursor(["<", "div id", "=", ...])
        cursor.advance()                  # past "<"
        cursor.split(IDENTIFIER)          # "div", current is now " id"
    """

    def __init__(self, fragments: Iterable[str]) -> None:
        # empty fragments hold no text and would stall prefix splitting
        self.fragments: List[str] = [f for f in fragments if f]
        self.index = 0
        self.line = 0
        self.col = 0
        self.pos = 0
        self.current = self.fragments[0] if self.fragments else ""

    @property
    def eof(self) -> bool:
        return self.index >= len(self.fragments)

    def at(self, *tokens: str) -> bool:
        """Check if the current fragment is exactly one of ``tokens``."""
        return not self.eof and self.current in tokens

    def matches(self, pattern: Pattern[str]) -> Optional[re.Match]:
        """Match ``pattern`` against the start of the current fragment."""
        return pattern.match(self.current)

    def closer(self) -> Optional[str]:
        """Close delimiter for the current fragment, if it opens one."""
        return CLOSERS.get(self.current)

    def advance(self) -> None:
        """Move past the whole current fragment."""
        if self.current == "\n":
            self.line += 1
            self.col = 0
            self.pos += 1
        elif self.current:
            self.col += len(self.current)
            self.pos += len(self.current)

        self.index += 1
        self.current = "" if self.eof else self.fragments[self.index]

    def take(self) -> str:
        """Return the current fragment and move past it."""
        fragment = self.current
        self.advance()
        return fragment

    def split(self, pattern: Pattern[str]) -> str:
        """
        Peel a prefix matching ``pattern`` off the current fragment.

        Returns the prefix, or "" when nothing matches. The remainder
        becomes the current fragment; an exhausted fragment is advanced
        past.
        """
        match = self.matches(pattern)
        if not match or not match.group():
            return ""

        prefix = match.group()
        self.col += len(prefix)
        self.pos += len(prefix)
        self.current = self.current[len(prefix):]
        if not self.current:
            self.advance()
        return prefix

    def skip_whitespace(self) -> None:
        """Skip newline fragments and leading whitespace."""
        while True:
            if self.at("\n"):
                self.advance()
            elif self.matches(LEADING_WS):
                self.split(LEADING_WS)
            else:
                break

    def location(self) -> Location:
        return Location(self.line, self.col, self.pos)

    def error(self, message: str, location: Optional[Location] = None) -> ParseError:
        """Build a ParseError at ``location`` (default: here)."""
        return parse_error(message, location or self.location(), self.fragments)
