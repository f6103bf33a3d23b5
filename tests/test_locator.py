"""Tests for jsonlintplus/locator.py - mapping parser messages to positions."""

import json

import pytest

from jsonlintplus.locator import ErrorInfo, locate


class TestLineColumnMessages:
    """Messages carrying an explicit line/column."""

    def test_python_decoder_message(self):
        src = '{\n  "a": 1\n  "b": 2\n}'
        info = locate("Expecting ',' delimiter: line 3 column 3 (char 13)", src)
        assert (info.line, info.column, info.position) == (3, 3, 13)

    def test_comma_between_line_and_column(self):
        info = locate("Unexpected token at line 2, column 3", "ab\ncdef")
        assert (info.line, info.column, info.position) == (2, 3, 5)

    def test_case_insensitive(self):
        info = locate("LINE 1 COLUMN 4", "abcdef")
        assert info.position == 3

    def test_line_past_end_is_clamped(self):
        info = locate("line 5 column 1", "ab")
        assert info.line == 5
        assert info.position == 2

    def test_message_is_kept(self):
        msg = "Expecting value: line 1 column 1 (char 0)"
        assert locate(msg, "").message == msg

    @pytest.mark.parametrize(
        "doc",
        [
            '{"a": 1,, "b": 2}',
            '[1, 2\n, 3 4]',
            '{\n\t"x": tru\n}',
            '{"a": {"b": [1, 2,]}}',
            '  \n\n   @',
            '{"k": "v"} extra',
        ],
    )
    def test_agrees_with_decoder_offset(self, doc):
        with pytest.raises(json.JSONDecodeError) as exc_info:
            json.loads(doc)
        exc = exc_info.value
        info = locate(str(exc), doc)
        assert info.position == exc.pos
        assert (info.line, info.column) == (exc.lineno, exc.colno)


class TestPositionMessages:
    """Messages carrying only a character offset."""

    def test_position_on_first_line(self):
        info = locate("Unexpected token } in JSON at position 7", '{"a":1,}')
        assert (info.line, info.column, info.position) == (1, 8, 7)

    def test_position_after_newline(self):
        info = locate("Unexpected end at position 4", "ab\ncd")
        assert (info.line, info.column, info.position) == (2, 2, 4)

    def test_position_right_after_newline(self):
        info = locate("position 3", "ab\ncd")
        assert (info.line, info.column) == (2, 1)

    def test_position_clamped_to_length(self):
        info = locate("Unexpected end of JSON input at position 99", "[1")
        assert info.position == 2
        assert (info.line, info.column) == (1, 3)


class TestUnrecognizedMessages:
    """Anything else falls back to the start of the document."""

    @pytest.mark.parametrize("message", ["", "Unexpected end of JSON input", "boom"])
    def test_defaults(self, message):
        info = locate(message, '{"a": }')
        assert info == ErrorInfo(1, 1, 0, message)

    def test_none_inputs_do_not_raise(self):
        info = locate(None, None)
        assert (info.line, info.column, info.position) == (1, 1, 0)
