"""
Splice Lexical Scanners
=======================

String and comment scanners shared by the markup and code parsers, so
that a ``>`` inside ``"a > b"`` or a ``)`` inside ``/* ) */`` never ends
the surrounding construct.

Each scanner returns the exact source text it consumed.
"""

from __future__ import annotations

from splice.engine.cursor import ESCAPED_END, FragmentCursor

QUOTES = ('"', "'")


def quoted_string(cursor: FragmentCursor) -> str:
    """
    Scan a quoted string literal, quotes included.

    A quote preceded by an odd number of backslashes is escaped and does
    not close the string.
    """
    if not cursor.at(*QUOTES):
        raise cursor.error("not in quoted string")

    start = cursor.location()
    quote = text = cursor.take()

    while not cursor.eof and (not cursor.at(quote) or ESCAPED_END.search(text)):
        text += cursor.take()

    if cursor.eof:
        raise cursor.error("unterminated string", start)

    return text + cursor.take()


def single_line_comment(cursor: FragmentCursor) -> str:
    """Scan a ``//`` comment through its newline, or to end of input."""
    if not cursor.at("//"):
        raise cursor.error("not in code comment")

    text = ""
    while not cursor.eof and not cursor.at("\n"):
        text += cursor.take()

    if not cursor.eof:
        text += cursor.take()

    return text


def multi_line_comment(cursor: FragmentCursor) -> str:
    """Scan a ``/* ... */`` comment, markers included."""
    if not cursor.at("/*"):
        raise cursor.error("not in code comment")

    start = cursor.location()
    text = ""
    while not cursor.eof and not cursor.at("*/"):
        text += cursor.take()

    if cursor.eof:
        raise cursor.error("unterminated multi-line comment", start)

    return text + cursor.take()
