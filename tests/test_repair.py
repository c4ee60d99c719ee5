import pytest

from panda_docs.errors import DocumentParseError
from panda_docs.parser.repair import parse_json, repair_json, to_text


class TestRepairJson:
    def test_escapes_newline_inside_string_value(self):
        text = '{"desc": "line one\nline two"}'
        assert repair_json(text) == '{"desc": "line one\\nline two"}'

    def test_leaves_valid_json_alone(self):
        text = '{\n  "a": "b",\n  "c": 1\n}'
        assert repair_json(text) == text

    def test_keeps_escaped_quotes(self):
        text = '{"a": "say \\"hi\\"\nnow"}'
        assert parse_json(text) == {"a": 'say "hi"\nnow'}

    def test_colon_inside_key_does_not_shift_the_scan(self):
        assert parse_json('{"a:": "x\ny", "b": "z"}') == {"a:": "x\ny", "b": "z"}

    def test_strings_inside_arrays(self):
        assert parse_json('{"lines": ["one\ntwo"]}') == {"lines": ["one\ntwo"]}


class TestParseJson:
    def test_parses_multiline_string(self):
        data = parse_json('{"desc": "first\nsecond", "n": 2}')
        assert data == {"desc": "first\nsecond", "n": 2}

    def test_invalid_json_raises(self):
        with pytest.raises(DocumentParseError) as exc_info:
            parse_json("{not json", "broken.json")
        assert exc_info.value.path == "broken.json"


class TestToText:
    def test_string_is_unchanged(self):
        assert to_text("abc") == "abc"

    def test_scalars_render_as_json(self):
        assert to_text(1) == "1"
        assert to_text(True) == "true"
        assert to_text(None) == "null"

    def test_objects_render_compact(self):
        assert to_text({"a": 1}) == '{"a":1}'
