"""
String and comment scanner tests.
"""

import pytest

from splice.engine.cursor import FragmentCursor
from splice.engine.errors import ParseError
from splice.engine.scanners import multi_line_comment, quoted_string, single_line_comment
from splice.engine.tokenizer import tokenize


def cursor_for(source):
    return FragmentCursor(tokenize(source))


class TestQuotedString:
    def test_double_quoted(self):
        cursor = cursor_for('"abc" rest')
        assert quoted_string(cursor) == '"abc"'
        assert cursor.current == " rest"

    def test_single_quoted_ignores_double_quotes(self):
        assert quoted_string(cursor_for("'a \"b\" c'")) == "'a \"b\" c'"

    def test_escaped_quote_does_not_close(self):
        assert quoted_string(cursor_for(r'"a\"b"')) == r'"a\"b"'

    def test_escaped_backslash_before_quote_closes(self):
        cursor = cursor_for(r'"a\\" b')
        assert quoted_string(cursor) == r'"a\\"'
        assert cursor.current == " b"

    def test_three_backslashes_escape(self):
        assert quoted_string(cursor_for(r'"a\\\"b"')) == r'"a\\\"b"'

    def test_backslash_newline_then_quote_closes(self):
        cursor = FragmentCursor(['"', "a\\", "\n", '"', " rest"])
        assert quoted_string(cursor) == '"a\\\n"'
        assert cursor.current == " rest"
        assert cursor.line == 1

    def test_markup_inside_string_is_text(self):
        assert quoted_string(cursor_for('"<div>"')) == '"<div>"'

    def test_unterminated(self):
        with pytest.raises(ParseError, match="unterminated string at line 0 col 0"):
            quoted_string(cursor_for('"abc'))

    def test_not_at_quote(self):
        with pytest.raises(ParseError, match="not in quoted string"):
            quoted_string(cursor_for("abc"))


class TestSingleLineComment:
    def test_includes_newline(self):
        cursor = cursor_for("// note\nnext")
        assert single_line_comment(cursor) == "// note\n"
        assert cursor.current == "next"
        assert cursor.line == 1

    def test_end_of_input_is_fine(self):
        cursor = cursor_for("// trailing")
        assert single_line_comment(cursor) == "// trailing"
        assert cursor.eof

    def test_not_at_comment(self):
        with pytest.raises(ParseError, match="not in code comment"):
            single_line_comment(cursor_for("/* x */"))


class TestMultiLineComment:
    def test_spans_lines(self):
        cursor = cursor_for("/* a\n) b */c")
        assert multi_line_comment(cursor) == "/* a\n) b */"
        assert cursor.current == "c"

    def test_unterminated(self):
        with pytest.raises(ParseError) as excinfo:
            multi_line_comment(cursor_for("/* open"))
        assert str(excinfo.value) == "unterminated multi-line comment at line 0 col 0: ``/* open''"
