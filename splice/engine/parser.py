"""
Splice Parser
=============

Turns a fragment sequence into a Root tree.

Example:
    from splice import parse_source

    root = parse_source('<div id="x">hi</div>')
    root.segments[0].tag                    # "div"

    root = parse_source("<div {...m}/>", jsx=True)
    root.segments[0].attributes[0].code     # EmbeddedCode([TextSegment("m")])

A parse either returns the whole tree or raises ParseError on the first
malformed construct.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Iterable, Optional

from splice.core.config import ParseOptions
from splice.engine.ast import Root
from splice.engine.code import EmbeddedCodeParser
from splice.engine.cursor import FragmentCursor
from splice.engine.errors import ParseError
from splice.engine.markup import MarkupParser
from splice.engine.tokenizer import tokenize
from splice.utils.logger import get_logger


class Parser(MarkupParser, EmbeddedCodeParser):
    """
    Recursive-descent parser over one fragment sequence.

    Markup and host code are mutually recursive: elements hold code in
    attributes and insertions, and code holds elements inside its
    delimiters. Each half lives in its own mixin.

    A Parser is single use; all position state sits in its cursor.
    """

    def __init__(self, fragments: Iterable[str], options: Optional[ParseOptions] = None) -> None:
        self.cursor = FragmentCursor(fragments)
        self.options = options or ParseOptions()

    def parse(self) -> Root:
        return self.top_level()


def _resolve_options(options: Optional[ParseOptions], overrides: Any) -> ParseOptions:
    if options is None:
        options = ParseOptions.from_config()
    if overrides:
        options = dataclasses.replace(options, **overrides)
    return options


def parse(
    fragments: Iterable[str],
    options: Optional[ParseOptions] = None,
    **overrides: Any,
) -> Root:
    """
    Parse lexer fragments into a tree.

    Args:
        fragments: Source split per the lexer contract
        options: Parse options (default: from the global config)
        **overrides: Option fields to replace, e.g. ``jsx=True``

    Returns:
        Root of the parsed tree

    Raises:
        ParseError: On the first malformed construct
    """
    options = _resolve_options(options, overrides)
    parser = Parser(fragments, options)
    logger = get_logger("splice.parser")

    logger.debug("parse started", fragments=len(parser.cursor.fragments), jsx=options.jsx)

    try:
        root = parser.parse()
    except ParseError as e:
        logger.debug(
            "parse failed",
            error=e.message,
            line=e.location.line,
            col=e.location.col,
        )
        raise

    logger.debug("parse finished", segments=len(root.segments))
    return root


def parse_source(
    source: str,
    options: Optional[ParseOptions] = None,
    **overrides: Any,
) -> Root:
    """Tokenize ``source`` and parse it."""
    return parse(tokenize(source), options, **overrides)
