"""
Splice Embedded-Code Parser
===========================

Captures host-language code as text, splicing in any markup elements
written inside it.

Three entry points:

    top_level()            whole-file host code, elements wherever ``<`` starts one
    embedded_code()        ``@expr`` style: runs to the first top-level boundary
    brace_embedded_code()  ``{expr}`` / ``{...expr}``: runs to the matching brace

Inside parentheses, brackets and braces the ``<`` marker always starts an
element, so ``@map(items, i => <li>@i</li>)`` produces

    EmbeddedCode([TextSegment("map(items, i => "), Element(li), TextSegment(")")])

Element parsing itself lives in MarkupParser; the two are combined in
``splice.engine.parser.Parser``.
"""

from __future__ import annotations

from typing import Callable, List, Union

from splice.engine.ast import Element, EmbeddedCode, Location, Root, TextSegment
from splice.engine.cursor import CODE_CONTINUATION, CODE_TERMINATOR, FragmentCursor
from splice.engine.scanners import (
    QUOTES,
    multi_line_comment,
    quoted_string,
    single_line_comment,
)


class CodeRun:
    """
    Code text being accumulated, and the segments already finished.

    ``loc`` is where the pending ``text`` started.
    """

    def __init__(self, loc: Location) -> None:
        self.segments: List[Union[TextSegment, Element]] = []
        self.text = ""
        self.loc = loc

    def flush(self) -> None:
        """Close the pending text as a segment."""
        if self.text:
            self.segments.append(TextSegment(self.text, self.loc))
        self.text = ""

    def splice(self, element: Element, resume: Location) -> None:
        """Insert ``element``; text restarts at ``resume``."""
        self.flush()
        self.segments.append(element)
        self.loc = resume


class EmbeddedCodeParser:
    """Host-code half of the parser. Needs ``cursor`` and ``element()``."""

    cursor: FragmentCursor
    element: Callable[[], Element]

    def top_level(self) -> Root:
        """Parse the whole input as host code with elements embedded."""
        cursor = self.cursor
        run = CodeRun(cursor.location())

        while not cursor.eof:
            if cursor.at("<"):
                run.splice(self.element(), cursor.location())
            elif cursor.at(*QUOTES):
                run.text += quoted_string(cursor)
            elif cursor.at("//"):
                run.text += single_line_comment(cursor)
            elif cursor.at("/*"):
                run.text += multi_line_comment(cursor)
            else:
                run.text += cursor.take()

        run.flush()
        return Root(tuple(run.segments))

    def embedded_code(self) -> EmbeddedCode:
        """
        Parse code up to the first boundary outside any nesting.

        Boundaries are whitespace and ``< > / , ; ) ] }``.
        """
        cursor = self.cursor
        start = cursor.location()
        run = CodeRun(start)

        while not cursor.eof and not cursor.matches(CODE_TERMINATOR):
            if cursor.closer():
                self.balanced_delimiters(run)
            elif cursor.at(*QUOTES):
                run.text += quoted_string(cursor)
            else:
                run.text += cursor.split(CODE_CONTINUATION)

        run.flush()

        if not run.segments:
            raise cursor.error("not in embedded code", start)

        return EmbeddedCode(tuple(run.segments))

    def brace_embedded_code(self) -> EmbeddedCode:
        """Parse ``{...}`` or ``{...expr}`` code, dropping the braces."""
        cursor = self.cursor
        if not cursor.at("{", "{..."):
            raise cursor.error("not at start of JSX embedded code")

        prefix = len(cursor.current)
        run = CodeRun(cursor.location())
        self.balanced_delimiters(run)

        segments = run.segments + [TextSegment(run.text[:-1], run.loc)]

        # first segment always starts with the opening marker
        first = segments[0]
        segments[0] = TextSegment(first.text[prefix:], first.loc.shifted(prefix))

        return EmbeddedCode(tuple(segments))

    def balanced_delimiters(self, run: CodeRun) -> None:
        """
        Consume from an opening delimiter through its matching close.

        Nested delimiters, strings and comments are skipped over whole;
        elements are spliced into ``run``. The closing delimiter is left
        in ``run.text``.
        """
        cursor = self.cursor
        start = cursor.location()
        close = cursor.closer()

        if close is None:
            raise cursor.error("not in parentheses")

        run.text += cursor.take()

        while not cursor.eof and not cursor.at(close):
            if cursor.at(*QUOTES):
                run.text += quoted_string(cursor)
            elif cursor.at("//"):
                run.text += single_line_comment(cursor)
            elif cursor.at("/*"):
                run.text += multi_line_comment(cursor)
            elif cursor.at("<"):
                run.splice(self.element(), cursor.location())
            elif cursor.closer():
                self.balanced_delimiters(run)
            else:
                run.text += cursor.take()

        if cursor.eof:
            raise cursor.error("unterminated parentheses", start)

        run.text += cursor.take()
