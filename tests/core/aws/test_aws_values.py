"""
tests/core/aws/test_aws_values.py - 표시용 문자열 정규화 테스트
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from core.aws.values import (
    NOT_AVAILABLE,
    format_json_indent,
    get_map_value,
    get_tag_value,
    normalize_raw_data,
    string_value,
)


class TestStringValue:
    """string_value"""

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_is_default(self, value):
        assert string_value(value) == NOT_AVAILABLE
        assert string_value(value, default="") == ""

    def test_bool(self):
        assert string_value(True) == "true"
        assert string_value(False) == "false"

    def test_number(self):
        assert string_value(0) == "0"
        assert string_value(1.5) == "1.5"

    def test_datetime_utc(self):
        kst = timezone(timedelta(hours=9))
        value = datetime(2024, 1, 1, 9, 0, 0, tzinfo=kst)
        assert string_value(value) == "2024-01-01T00:00:00Z"

    def test_date(self):
        assert string_value(date(2024, 3, 1)) == "2024-03-01"

    def test_list_sorted_newline(self):
        assert string_value(["sg-b", "sg-a", "", None]) == "sg-a\nsg-b"

    def test_empty_list(self):
        assert string_value([]) == NOT_AVAILABLE


class TestMaps:
    def test_normalize_raw_data(self):
        data = normalize_raw_data({"A": None, "B": True, "C": ["x"]})
        assert data == {"A": "N/A", "B": "true", "C": "x"}

    def test_normalize_empty(self):
        assert normalize_raw_data(None) == {}

    def test_get_map_value(self):
        assert get_map_value({"A": "1"}, "A") == "1"
        assert get_map_value({"A": "1"}, "B") == ""
        assert get_map_value(None, "A") == ""


class TestFormatJsonIndent:
    def test_dict(self):
        assert format_json_indent({"a": 1}) == '{\n  "a": 1\n}'

    def test_json_string_reindented(self):
        assert format_json_indent('{"a":1}') == '{\n  "a": 1\n}'

    def test_empty(self):
        assert format_json_indent(None) == ""
        assert format_json_indent("") == ""

    def test_invalid_json_string(self):
        with pytest.raises(ValueError):
            format_json_indent("{not json")


class TestGetTagValue:
    def test_case_insensitive(self):
        tags = [{"Key": "name", "Value": "web"}]
        assert get_tag_value(tags, "Name") == "web"

    def test_missing(self):
        assert get_tag_value([{"Key": "Env", "Value": "prod"}], "Name") == ""
        assert get_tag_value(None, "Name") == ""
