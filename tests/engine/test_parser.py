"""
Parser entry points, options resolution and logging.
"""

import json

import pytest

from splice import ParseOptions, Parser, get_config, parse, parse_source, tokenize
from splice.engine.ast import CodeInsertion, Mixin, NodeType, PlainText, Root
from splice.engine.errors import ParseError, SpliceError
from splice.utils.logger import LogLevel, configure_logging


class TestEntryPoints:
    def test_parse_accepts_any_iterable(self):
        source = "<p>@x</p>"
        assert parse(iter(tokenize(source))) == parse_source(source)

    def test_empty_fragments_are_ignored(self):
        fragments = ["", "<", "", "p", ">", "hi", "", "</", "p", ">", ""]
        assert parse(fragments) == parse_source("<p>hi</p>")

    def test_parser_class(self):
        root = Parser(tokenize("<br/>"), ParseOptions(jsx=True)).parse()
        assert root.segments[0].tag == "br"

    def test_parse_error_is_splice_error(self):
        with pytest.raises(SpliceError):
            parse_source("<p>")

    def test_no_partial_tree_on_failure(self):
        with pytest.raises(ParseError):
            parse_source("<p>ok</p><q>")


class TestOptions:
    def test_default_grammar_from_config(self):
        root = parse_source("<p>@a</p>")
        assert isinstance(root.segments[0].content[0], CodeInsertion)

    def test_config_selects_brace_grammar(self):
        get_config().set("parser.jsx", True)
        root = parse_source("<p>@a</p>")
        assert root.segments[0].content == (PlainText("@a"),)

    def test_env_selects_brace_grammar(self, monkeypatch):
        monkeypatch.setenv("SPLICE_PARSER_JSX", "true")
        root = parse_source("<i {...m}/>")
        assert isinstance(root.segments[0].attributes[0], Mixin)

    def test_explicit_options_override_config(self):
        get_config().set("parser.jsx", True)
        root = parse_source("<p>@a</p>", ParseOptions(jsx=False))
        assert isinstance(root.segments[0].content[0], CodeInsertion)

    def test_keyword_override(self):
        root = parse_source("<p>{a}</p>", ParseOptions(jsx=False), jsx=True)
        assert isinstance(root.segments[0].content[0], CodeInsertion)

    def test_unknown_override_is_rejected(self):
        with pytest.raises(TypeError):
            parse_source("<p/>", strict=True)


class TestTreeHelpers:
    SOURCE = '<ul class="x">@items.map(i => <li @sel(i)>@i<!-- c --></li>)</ul>'

    def test_walk_is_source_ordered(self):
        root = parse_source(self.SOURCE)
        types = [n.type for n in root.walk()]
        assert types == [
            NodeType.ELEMENT,            # ul
            NodeType.STATIC_ATTRIBUTE,   # class
            NodeType.CODE_INSERTION,
            NodeType.EMBEDDED_CODE,
            NodeType.TEXT_SEGMENT,       # items.map(i =>
            NodeType.ELEMENT,            # li
            NodeType.MIXIN,
            NodeType.EMBEDDED_CODE,
            NodeType.TEXT_SEGMENT,       # sel(i)
            NodeType.CODE_INSERTION,
            NodeType.EMBEDDED_CODE,
            NodeType.TEXT_SEGMENT,       # i
            NodeType.COMMENT,
            NodeType.TEXT_SEGMENT,       # )
        ]

    def test_find_by_tag(self):
        root = parse_source(self.SOURCE)
        (li,) = root.find_by_tag("li")
        assert li.loc.pos == self.SOURCE.index("<li")

    def test_find_by_type(self):
        root = parse_source(self.SOURCE)
        assert [c.text for c in root.find_by_type(NodeType.COMMENT)] == [" c "]

    def test_embedded_code_text_skips_elements(self):
        root = parse_source(self.SOURCE)
        insertion = root.segments[0].content[0]
        assert insertion.code.text == "items.map(i => )"

    def test_to_dict_is_json_serialisable(self):
        root = parse_source(self.SOURCE)
        data = json.loads(json.dumps(root.to_dict()))
        assert data["type"] == "ROOT"
        ul = data["segments"][0]
        assert ul["tag"] == "ul"
        assert ul["attributes"] == [{"type": "STATIC_ATTRIBUTE", "name": "class", "value": '"x"'}]
        assert ul["loc"] == {"line": 0, "col": 0, "pos": 0}

    def test_nodes_are_immutable(self):
        root = parse_source("<br/>")
        with pytest.raises(AttributeError):
            root.segments[0].tag = "hr"

    def test_empty_root(self):
        assert list(Root().walk()) == []


class TestLogging:
    def test_silent_by_default(self, capsys):
        parse_source("<br/>")
        assert capsys.readouterr().err == ""

    def test_debug_records_parse(self, log_stream):
        configure_logging(LogLevel.DEBUG, stream=log_stream)
        parse_source("a<br/>", jsx=False)
        output = log_stream.getvalue()
        assert "[DEBUG] parse started fragments=4 jsx=False" in output
        assert "[DEBUG] parse finished segments=2" in output

    def test_debug_records_failure(self, log_stream):
        configure_logging(LogLevel.DEBUG, stream=log_stream)
        with pytest.raises(ParseError):
            parse_source("\n<p>")
        output = log_stream.getvalue()
        assert "parse failed error=element missing close tag line=1 col=0" in output

    def test_json_format(self, log_stream):
        configure_logging(LogLevel.DEBUG, format="json", stream=log_stream)
        parse_source("<br/>")
        records = [json.loads(line) for line in log_stream.getvalue().splitlines()]
        assert [r["message"] for r in records] == ["parse started", "parse finished"]
        assert records[0]["logger"] == "splice.parser"
        assert records[1]["context"] == {"segments": 1}
