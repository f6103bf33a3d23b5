"""Tests for jsonlintplus/api.py - the text-level entry points."""

import pytest

from jsonlintplus.api import InvalidJSONError, format_text, validate_text


class TestFormatText:
    def test_default_beautify(self):
        assert format_text('{"a":[1,2]}') == '{\n  "a": [\n    1,\n    2\n  ]\n}\n'

    def test_overrides(self):
        out = format_text('{"b":1,"a":null}', indent=4, mode="compact", sort_keys=True)
        assert out == '{\n    "a": null,\n    "b": 1\n}\n'

    def test_remove_empty(self):
        assert format_text('{"a":null,"b":1}', mode="minify", remove_empty=True) == '{"b":1}\n'

    def test_tab(self):
        assert format_text("[1]", indent="tab") == "[\n\t1\n]\n"

    def test_invalid_raises_with_partial_result(self):
        with pytest.raises(InvalidJSONError) as exc_info:
            format_text('{"name": "John"')
        err = exc_info.value
        assert isinstance(err, ValueError)
        assert str(err).endswith("(Line 2, Column 17)")
        assert err.result.formatted_prefix == '{\n  "name": "John"'
        assert err.result.expected == "closing brace/bracket or next value"


class TestValidateText:
    def test_valid(self):
        assert validate_text("[1]").formatted_full == "[\n  1\n]"

    def test_indent_applies_to_prefix(self):
        result = validate_text('{"a":1,', indent="tab")
        assert result.formatted_prefix == '{\n\t"a": 1,\n\t'
