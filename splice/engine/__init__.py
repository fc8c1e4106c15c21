"""
Splice Engine Module
====================

Components:
- Cursor: Walks the lexer's fragment sequence
- Scanners: Quoted strings and code comments
- Code parser: Host code with nested markup
- Markup parser: Elements, attributes and content
- Tokenizer: Reference lexer producing parser fragments
"""

from splice.engine.ast import (
    CodeInsertion,
    Comment,
    DynamicAttribute,
    Element,
    EmbeddedCode,
    Location,
    Mixin,
    NodeType,
    PlainText,
    Root,
    StaticAttribute,
    TextSegment,
)
from splice.engine.errors import ParseError, SpliceError
from splice.engine.cursor import FragmentCursor
from splice.engine.parser import Parser, parse, parse_source
from splice.engine.tokenizer import tokenize

__all__ = [
    "CodeInsertion",
    "Comment",
    "DynamicAttribute",
    "Element",
    "EmbeddedCode",
    "Location",
    "Mixin",
    "NodeType",
    "PlainText",
    "Root",
    "StaticAttribute",
    "TextSegment",
    "ParseError",
    "SpliceError",
    "FragmentCursor",
    "Parser",
    "parse",
    "parse_source",
    "tokenize",
]
