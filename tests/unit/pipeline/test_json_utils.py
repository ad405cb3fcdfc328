import pytest

from novel_kit.pipeline.json_utils import clean_json, extract_list, parse_json


class TestCleanJson:
    def test_strips_code_fences(self) -> None:
        assert clean_json('```json\n["a", "b"]\n```') == '["a", "b"]'

    def test_strips_surrounding_prose(self) -> None:
        assert clean_json('Here you go: {"a": 1} Enjoy!') == '{"a": 1}'

    def test_plain_json_unchanged(self) -> None:
        assert clean_json('[1, 2]') == "[1, 2]"


class TestParseJson:
    def test_parses_fenced_array(self) -> None:
        assert parse_json('```\n[{"id": "seg-1"}]\n```') == [{"id": "seg-1"}]

    def test_invalid_json_raises_value_error(self) -> None:
        with pytest.raises(ValueError, match="Failed to parse JSON"):
            parse_json("not json at all")


class TestExtractList:
    def test_list_returned_as_is(self) -> None:
        assert extract_list(["a"]) == ["a"]

    def test_first_list_field_of_object(self) -> None:
        assert extract_list({"note": "x", "translations": ["a", "b"]}) == ["a", "b"]

    def test_object_without_list_raises(self) -> None:
        with pytest.raises(ValueError, match="Expected a JSON array"):
            extract_list({"a": 1})

    def test_scalar_raises(self) -> None:
        with pytest.raises(ValueError):
            extract_list("text")
