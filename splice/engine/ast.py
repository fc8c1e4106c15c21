"""
Splice AST
==========

Node types produced by the Splice parser.

A parse yields a single Root holding the host-language text of the
template, split wherever a markup element begins:

    Root
    ├── TextSegment       host code between elements
    └── Element           <tag attrs...>content</tag>
        ├── StaticAttribute     id="x"   (quotes kept)
        ├── DynamicAttribute    id=expr  / id={expr}
        ├── Mixin               @expr    / {...expr}
        └── content
            ├── Element
            ├── CodeInsertion   @expr    / {expr}
            ├── Comment         <!-- ... -->
            └── PlainText

Embedded code is itself a sequence of TextSegment and Element entries, so
markup may nest inside code inside markup to any depth.

All nodes are frozen dataclasses. Children are held in tuples and are
owned exclusively by their parent.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Iterator, List, Tuple, Union


class NodeType(Enum):
    """AST node types."""
    ROOT = auto()
    TEXT_SEGMENT = auto()
    ELEMENT = auto()
    PLAIN_TEXT = auto()
    COMMENT = auto()
    CODE_INSERTION = auto()
    STATIC_ATTRIBUTE = auto()
    DYNAMIC_ATTRIBUTE = auto()
    MIXIN = auto()
    EMBEDDED_CODE = auto()


@dataclass(frozen=True)
class Location:
    """Zero-based line, column and absolute offset into the source."""
    line: int = 0
    col: int = 0
    pos: int = 0

    def shifted(self, count: int) -> "Location":
        """Location ``count`` characters further along the same line."""
        return Location(self.line, self.col + count, self.pos + count)

    def to_dict(self) -> Dict[str, int]:
        return {"line": self.line, "col": self.col, "pos": self.pos}


@dataclass(frozen=True)
class TextSegment:
    """Contiguous host-language text."""
    text: str
    loc: Location

    @property
    def type(self) -> NodeType:
        return NodeType.TEXT_SEGMENT

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.name, "text": self.text, "loc": self.loc.to_dict()}


@dataclass(frozen=True)
class PlainText:
    """Markup text content."""
    text: str

    @property
    def type(self) -> NodeType:
        return NodeType.PLAIN_TEXT

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.name, "text": self.text}


@dataclass(frozen=True)
class Comment:
    """Markup comment body, without the <!-- and --> markers."""
    text: str

    @property
    def type(self) -> NodeType:
        return NodeType.COMMENT

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.name, "text": self.text}


@dataclass(frozen=True)
class EmbeddedCode:
    """
    Host-language code with nested markup spliced in.

    Segments appear in source order. There is always at least one.
    """
    segments: Tuple[Union[TextSegment, "Element"], ...]

    @property
    def type(self) -> NodeType:
        return NodeType.EMBEDDED_CODE

    @property
    def text(self) -> str:
        """Concatenated text of the code segments, skipping nested elements."""
        return "".join(s.text for s in self.segments if isinstance(s, TextSegment))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.name,
            "segments": [s.to_dict() for s in self.segments],
        }


@dataclass(frozen=True)
class CodeInsertion:
    """A point in element content where host code produces markup."""
    code: EmbeddedCode
    loc: Location

    @property
    def type(self) -> NodeType:
        return NodeType.CODE_INSERTION

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.name, "code": self.code.to_dict(), "loc": self.loc.to_dict()}


@dataclass(frozen=True)
class StaticAttribute:
    """Literal attribute. Quoted values keep their quotes."""
    name: str
    value: str

    @property
    def type(self) -> NodeType:
        return NodeType.STATIC_ATTRIBUTE

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.name, "name": self.name, "value": self.value}


@dataclass(frozen=True)
class DynamicAttribute:
    """Attribute whose value is computed by host code."""
    name: str
    code: EmbeddedCode
    loc: Location

    @property
    def type(self) -> NodeType:
        return NodeType.DYNAMIC_ATTRIBUTE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.name,
            "name": self.name,
            "code": self.code.to_dict(),
            "loc": self.loc.to_dict(),
        }


@dataclass(frozen=True)
class Mixin:
    """Attribute-position directive applying host code to the element."""
    code: EmbeddedCode
    loc: Location

    @property
    def type(self) -> NodeType:
        return NodeType.MIXIN

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.name, "code": self.code.to_dict(), "loc": self.loc.to_dict()}


Attribute = Union[StaticAttribute, DynamicAttribute, Mixin]
Content = Union["Element", CodeInsertion, Comment, PlainText]


@dataclass(frozen=True)
class Element:
    """
    Markup element.

    A self-closing element (``<br/>``) has empty content. The close tag is
    not stored since it always equals ``tag``.
    """
    tag: str
    attributes: Tuple[Attribute, ...] = ()
    content: Tuple[Content, ...] = ()
    loc: Location = field(default_factory=Location)

    @property
    def type(self) -> NodeType:
        return NodeType.ELEMENT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.name,
            "tag": self.tag,
            "attributes": [a.to_dict() for a in self.attributes],
            "content": [c.to_dict() for c in self.content],
            "loc": self.loc.to_dict(),
        }


Node = Union[
    TextSegment, PlainText, Comment, EmbeddedCode, CodeInsertion,
    StaticAttribute, DynamicAttribute, Mixin, Element,
]


@dataclass(frozen=True)
class Root:
    """Complete tree for one parse."""
    segments: Tuple[Union[TextSegment, Element], ...] = ()

    @property
    def type(self) -> NodeType:
        return NodeType.ROOT

    def walk(self) -> Iterator[Node]:
        """Yield every node below the root, depth-first in source order."""
        for segment in self.segments:
            yield from _walk(segment)

    def find_by_tag(self, tag: str) -> List[Element]:
        """Find all elements with the given tag."""
        return [n for n in self.walk() if isinstance(n, Element) and n.tag == tag]

    def find_by_type(self, node_type: NodeType) -> List[Node]:
        """Find all nodes of the given type."""
        return [n for n in self.walk() if n.type == node_type]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.name,
            "segments": [s.to_dict() for s in self.segments],
        }


def _walk(node: Node) -> Iterator[Node]:
    yield node
    if isinstance(node, Element):
        for attribute in node.attributes:
            yield from _walk(attribute)
        for child in node.content:
            yield from _walk(child)
    elif isinstance(node, EmbeddedCode):
        for segment in node.segments:
            yield from _walk(segment)
    elif isinstance(node, (CodeInsertion, DynamicAttribute, Mixin)):
        yield from _walk(node.code)
