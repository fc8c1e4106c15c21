"""
Splice Markup Parser
====================

Parses elements, their attributes and their content.

Two surface grammars are supported, chosen per parse by ``options.jsx``:

    construct          default          jsx
    -----------------  ---------------  --------------
    code insertion     @expr            {expr}
    dynamic attribute  name=expr        name={expr}
    mixin              @expr            {...expr}
    static attribute   name="value"     name="value"
    boolean attribute  name             name

Example:
    <ul class="list" @draggable>
        <!-- rows -->
        @rows.map(r => <li>@r.name</li>)
    </ul>
"""

from __future__ import annotations

from typing import Callable, List

from splice.core.config import ParseOptions
from splice.engine.ast import (
    Attribute,
    CodeInsertion,
    Comment,
    Content,
    DynamicAttribute,
    Element,
    EmbeddedCode,
    Mixin,
    PlainText,
    StaticAttribute,
)
from splice.engine.cursor import IDENTIFIER, FragmentCursor
from splice.engine.scanners import QUOTES, quoted_string


class MarkupParser:
    """
    Markup half of the parser.

    Needs ``cursor``, ``options`` and the code entry points
    ``embedded_code()`` / ``brace_embedded_code()``.
    """

    cursor: FragmentCursor
    options: ParseOptions
    embedded_code: Callable[[], EmbeddedCode]
    brace_embedded_code: Callable[[], EmbeddedCode]

    def element(self) -> Element:
        """Parse ``<tag attrs...>content</tag>`` or ``<tag attrs.../>``."""
        cursor = self.cursor
        if not cursor.at("<"):
            raise cursor.error("not at start of html element")

        start = cursor.location()
        cursor.advance()

        tag = cursor.split(IDENTIFIER)
        if not tag:
            raise cursor.error("bad element name", start)

        cursor.skip_whitespace()

        attributes: List[Attribute] = []
        while not cursor.eof and not cursor.at(">", "/>"):
            attributes.append(self.attribute())
            cursor.skip_whitespace()

        if cursor.eof:
            raise cursor.error("unterminated start node", start)

        if cursor.take() == "/>":
            return Element(tag, tuple(attributes), (), start)

        content: List[Content] = []
        while not cursor.eof and not cursor.at("</"):
            content.append(self.content_node())

        if cursor.eof:
            raise cursor.error("element missing close tag", start)

        cursor.advance()  # pass '</'

        if cursor.split(IDENTIFIER) != tag:
            raise cursor.error("mismatched open and close tags", start)

        if not cursor.at(">"):
            raise cursor.error("malformed close tag")

        cursor.advance()

        return Element(tag, tuple(attributes), tuple(content), start)

    def attribute(self) -> Attribute:
        """Parse one entry inside an opening tag."""
        cursor = self.cursor
        if cursor.matches(IDENTIFIER):
            return self.named_attribute()
        if not self.options.jsx and cursor.at("@"):
            return self.mixin()
        if self.options.jsx and cursor.at("{..."):
            return self.brace_mixin()
        raise cursor.error("unrecognized content in begin tag")

    def named_attribute(self) -> Attribute:
        cursor = self.cursor
        if not cursor.matches(IDENTIFIER):
            raise cursor.error("not at start of property declaration")

        loc = cursor.location()
        name = cursor.split(IDENTIFIER)
        cursor.skip_whitespace()

        if not cursor.at("="):
            return StaticAttribute(name, "true")

        cursor.advance()  # pass '='
        cursor.skip_whitespace()

        if cursor.at(*QUOTES):
            return StaticAttribute(name, quoted_string(cursor))

        if not self.options.jsx:
            return DynamicAttribute(name, self.embedded_code(), loc)

        if cursor.at("{"):
            return DynamicAttribute(name, self.brace_embedded_code(), loc)

        raise cursor.error("unexpected value for JSX property")

    def mixin(self) -> Mixin:
        """Parse an ``@expr`` mixin."""
        cursor = self.cursor
        if not cursor.at("@"):
            raise cursor.error("not at start of mixin")

        loc = cursor.location()
        cursor.advance()

        return Mixin(self.embedded_code(), loc)

    def brace_mixin(self) -> Mixin:
        """Parse a ``{...expr}`` mixin."""
        cursor = self.cursor
        if not cursor.at("{..."):
            raise cursor.error("not at start of JSX mixin")

        loc = cursor.location()
        return Mixin(self.brace_embedded_code(), loc)

    def content_node(self) -> Content:
        """Parse one child of an element."""
        cursor = self.cursor
        if cursor.at("<"):
            return self.element()
        if not self.options.jsx and cursor.at("@"):
            return self.insertion()
        if self.options.jsx and cursor.at("{"):
            return self.brace_insertion()
        if cursor.at("<!--"):
            return self.comment()
        return self.text()

    def text(self) -> PlainText:
        """Parse markup text up to the next element, comment or insertion."""
        cursor = self.cursor
        stops = ("<", "<!--", "</", "{" if self.options.jsx else "@")

        text = ""
        while not cursor.eof and not cursor.at(*stops):
            text += cursor.take()

        return PlainText(text)

    def comment(self) -> Comment:
        """Parse ``<!-- ... -->``, keeping only the body."""
        cursor = self.cursor
        if not cursor.at("<!--"):
            raise cursor.error("not in HTML comment")

        start = cursor.location()
        cursor.advance()

        text = ""
        while not cursor.eof and not cursor.at("-->"):
            text += cursor.take()

        if cursor.eof:
            raise cursor.error("unterminated html comment", start)

        cursor.advance()
        return Comment(text)

    def insertion(self) -> CodeInsertion:
        """Parse an ``@expr`` code insertion."""
        cursor = self.cursor
        if not cursor.at("@"):
            raise cursor.error("not at start of code insert")

        loc = cursor.location()
        cursor.advance()

        return CodeInsertion(self.embedded_code(), loc)

    def brace_insertion(self) -> CodeInsertion:
        """Parse a ``{expr}`` code insertion."""
        loc = self.cursor.location()
        return CodeInsertion(self.brace_embedded_code(), loc)
