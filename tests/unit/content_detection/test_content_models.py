"""Tests for detection and segment models."""

import pytest

from siftview_mcp.content_detection import (
    ContentKind,
    DetectionMethod,
    DetectionResult,
    Segment,
)
from siftview_mcp.errors import InvalidArgumentsError


class TestContentKind:
    """Test kind parsing."""

    def test_parse_member(self):
        assert ContentKind.parse(ContentKind.CSV) is ContentKind.CSV

    def test_parse_string(self):
        assert ContentKind.parse("json") is ContentKind.JSON
        assert ContentKind.parse(" YAML ") is ContentKind.YAML

    @pytest.mark.parametrize(
        "alias,expected",
        [
            ("html", ContentKind.XML),
            ("HTM", ContentKind.XML),
            ("env", ContentKind.PROPERTIES),
            ("yml", ContentKind.YAML),
        ],
    )
    def test_parse_alias(self, alias, expected):
        assert ContentKind.parse(alias) is expected

    def test_parse_unknown(self):
        with pytest.raises(InvalidArgumentsError) as exc_info:
            ContentKind.parse("toml")
        assert "toml" in exc_info.value.message
        assert "properties" in exc_info.value.details["allowed"]

    def test_str_enum_compares_to_value(self):
        assert ContentKind.XML == "xml"


class TestDetectionResult:
    """Test DetectionResult serialization."""

    def test_to_dict(self):
        result = DetectionResult(ContentKind.CSV, 0.7)
        assert result.to_dict() == {
            "kind": "csv",
            "confidence": 0.7,
            "method": "heuristic",
        }

    def test_repr(self):
        result = DetectionResult(ContentKind.JSON, 0.95, DetectionMethod.EXTENSION)
        assert repr(result) == (
            "DetectionResult(kind='json', confidence=0.95, method=extension)"
        )


class TestSegment:
    """Test Segment validation and conversion."""

    def test_line_count(self):
        assert Segment(2, 5, ContentKind.TEXT).line_count == 4

    def test_kind_is_coerced(self):
        assert Segment(1, 1, "csv").kind is ContentKind.CSV

    def test_kind_alias_is_coerced(self):
        assert Segment(1, 1, "html").kind is ContentKind.XML
        assert Segment.from_dict({"startLine": 1, "endLine": 2, "kind": "env"}).kind is (
            ContentKind.PROPERTIES
        )

    @pytest.mark.parametrize(
        "start,end",
        [(0, 1), (-1, 2), (3, 2), (1.0, 2)],
    )
    def test_invalid_ranges(self, start, end):
        with pytest.raises(InvalidArgumentsError):
            Segment(start, end, ContentKind.TEXT)

    def test_invalid_kind(self):
        with pytest.raises(InvalidArgumentsError):
            Segment(1, 2, "markdown")

    def test_extended_to(self):
        segment = Segment(1, 1, ContentKind.JSON).extended_to(4)
        assert segment == Segment(1, 4, ContentKind.JSON)

    def test_from_dict_snake_case(self):
        segment = Segment.from_dict({"start_line": 1, "end_line": 3, "kind": "json"})
        assert segment == Segment(1, 3, ContentKind.JSON)

    def test_from_dict_camel_case(self):
        segment = Segment.from_dict({"startLine": 5, "endLine": 6, "kind": "csv"})
        assert segment == Segment(5, 6, ContentKind.CSV)

    def test_from_dict_missing_field(self):
        with pytest.raises(InvalidArgumentsError, match="kind"):
            Segment.from_dict({"start_line": 1, "end_line": 3})

    def test_to_dict(self):
        assert Segment(5, 6, ContentKind.CSV).to_dict() == {
            "start_line": 5,
            "end_line": 6,
            "kind": "csv",
        }
