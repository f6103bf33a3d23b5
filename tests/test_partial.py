"""Tests for jsonlintplus/partial.py - the re-indenting automaton."""

import pytest

from jsonlintplus.partial import AutomatonState, advance, format_prefix, replay


class TestFormatPrefix:
    """Tests for format_prefix()."""

    def test_zero_boundary(self):
        result = format_prefix('{"a": 1}', 0)
        assert result.formatted_prefix == ""
        assert result.formatted_error_offset == 0
        assert result.suffix_raw == '{"a": 1}'

    def test_complete_object(self):
        src = '{"a":1,"b":[true,null]}'
        result = format_prefix(src, len(src))
        assert result.formatted_prefix == (
            '{\n  "a": 1,\n  "b": [\n    true,\n    null\n  ]\n}'
        )
        assert result.suffix_raw == ""

    def test_tab_indent(self):
        result = format_prefix('[1,[2]]', 7, "\t")
        assert result.formatted_prefix == "[\n\t1,\n\t[\n\t\t2\n\t]\n]"

    def test_offset_is_prefix_length(self):
        src = '{"a": [1, 2, 3], "b": {"c": "d"}}'
        for boundary in range(len(src) + 1):
            result = format_prefix(src, boundary)
            assert result.formatted_error_offset == len(result.formatted_prefix)
            assert result.suffix_raw == src[boundary:]

    def test_suffix_untouched(self):
        result = format_prefix('{"a":1,  "b" :2}', 7)
        assert result.formatted_prefix == '{\n  "a": 1,\n  '
        assert result.suffix_raw == '  "b" :2}'

    def test_closer_strips_trailing_spaces(self):
        result = format_prefix('{"a": 1   }', 11)
        assert result.formatted_prefix == '{\n  "a": 1\n}'

    def test_source_whitespace_collapsed(self):
        src = '{\n    "a":    1,\n\n    "b": 2\n}'
        result = format_prefix(src, len(src))
        assert result.formatted_prefix == '{\n  "a": 1,\n  "b": 2\n}'

    def test_leading_whitespace_dropped(self):
        assert format_prefix("   1", 4).formatted_prefix == "1"

    def test_whitespace_between_tokens_kept_once(self):
        assert format_prefix("[1   2]", 7).formatted_prefix == "[\n  1 2\n]"

    def test_string_content_is_verbatim(self):
        src = '{"a": "{[,: ]}  x"}'
        result = format_prefix(src, len(src))
        assert result.formatted_prefix == '{\n  "a": "{[,: ]}  x"\n}'

    def test_escaped_quote_stays_in_string(self):
        src = r'["a\"b,c"]'
        result = format_prefix(src, len(src))
        assert result.formatted_prefix == '[\n  "a\\"b,c"\n]'

    def test_unbalanced_closers_floor_depth(self):
        assert format_prefix("]]1", 3).formatted_prefix == "\n]\n]1"

    @pytest.mark.parametrize("boundary, expected", [(-5, ""), (100, "[\n  1\n]")])
    def test_boundary_clamped(self, boundary, expected):
        result = format_prefix("[1]", boundary)
        assert result.formatted_prefix == expected


class TestAutomaton:
    """Tests for advance() and replay()."""

    def test_initial_state(self):
        assert AutomatonState() == AutomatonState(0, False, False)

    def test_escape_applies_to_next_char_only(self):
        state = AutomatonState()
        for ch in '"\\':
            state = advance(state, ch)
        assert state == AutomatonState(0, True, True)
        state = advance(state, '"')
        assert state == AutomatonState(0, True, False)
        state = advance(state, '"')
        assert state == AutomatonState(0, False, False)

    def test_brackets_in_string_ignored(self):
        assert replay('["{[', 4) == AutomatonState(1, True, False)

    def test_depth_floored(self):
        assert replay("]]{", 3).depth == 1

    def test_replay_stops_at_boundary(self):
        src = '{"a": [1'
        assert replay(src, 1).depth == 1
        assert replay(src, len(src)).depth == 2
        assert replay(src, 3).in_string

    def test_replay_matches_format_prefix_state(self):
        src = '{"a": {"b": "c\\"'
        state = replay(src, len(src))
        assert state == AutomatonState(2, True, False)
