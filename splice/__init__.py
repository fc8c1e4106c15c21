"""
Splice - Markup in Host Code
============================

A recursive-descent parser for templates that mix HTML-like markup with
host-language code, in either of two surface syntaxes:

    default:  <div class="row" @draggable>@item.name</div>
    jsx:      <div class="row" {...draggable}>{item.name}</div>

Markup may hold code and code may hold markup, to any depth. The parser
builds a tree; code generation is left to the caller.

Quick Start:
    from splice import parse_source

    root = parse_source('<ul>@items.map(i => <li>@i</li>)</ul>')
    for element in root.find_by_tag("li"):
        print(element.content)
"""

from __future__ import annotations

__version__ = "1.0.0"
__license__ = "MIT"

from splice.engine import (
    CodeInsertion,
    Comment,
    DynamicAttribute,
    Element,
    EmbeddedCode,
    Location,
    Mixin,
    NodeType,
    ParseError,
    Parser,
    PlainText,
    Root,
    SpliceError,
    StaticAttribute,
    TextSegment,
    parse,
    parse_source,
    tokenize,
)
from splice.core.config import Config, ParseOptions, get_config

__all__ = [
    # Parsing
    "parse",
    "parse_source",
    "tokenize",
    "Parser",
    "ParseOptions",
    # Tree
    "Root",
    "TextSegment",
    "Element",
    "PlainText",
    "Comment",
    "CodeInsertion",
    "StaticAttribute",
    "DynamicAttribute",
    "Mixin",
    "EmbeddedCode",
    "Location",
    "NodeType",
    # Errors
    "SpliceError",
    "ParseError",
    # Configuration
    "Config",
    "get_config",
]
