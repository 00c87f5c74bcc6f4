"""Unit tests for content kind detection."""

import pytest

from siftview_mcp.content_detection import (
    ContentDetector,
    ContentKind,
    DetectionMethod,
    DetectionResult,
    detect_content,
    normalize_extension,
)


class TestNormalizeExtension:
    """Test reduction of hints to bare extensions."""

    @pytest.mark.parametrize(
        "hint,expected",
        [
            ("json", "json"),
            (".JSON", "json"),
            ("data.json", "json"),
            ("/tmp/export/data.CSV", "csv"),
            ("C:\\Users\\me\\app.yml", "yml"),
            (".env", "env"),
            ("  yaml ", "yaml"),
            ("", ""),
            (None, ""),
        ],
    )
    def test_normalize(self, hint, expected):
        assert normalize_extension(hint) == expected


class TestExtensionDetection:
    """Test detection driven by a declared extension."""

    @pytest.fixture
    def detector(self):
        return ContentDetector()

    def test_json_by_extension(self, detector):
        result = detector.detect("anything", "json")
        assert result.kind is ContentKind.JSON
        assert result.confidence == pytest.approx(0.95)
        assert result.method is DetectionMethod.EXTENSION

    def test_csv_by_extension(self, detector):
        result = detector.detect("anything", "csv")
        assert result.kind is ContentKind.CSV
        assert result.confidence == pytest.approx(0.95)

    def test_xml_and_html_by_extension(self, detector):
        assert detector.detect("x", "xml").kind is ContentKind.XML
        assert detector.detect("x", "HTML").kind is ContentKind.XML
        assert detector.detect("x", "xml").confidence == pytest.approx(0.9)

    def test_yaml_and_properties_by_extension(self, detector):
        assert detector.detect("x", "yaml").kind is ContentKind.YAML
        assert detector.detect("x", "yml").kind is ContentKind.YAML
        assert detector.detect("x", "env").kind is ContentKind.PROPERTIES
        assert detector.detect("x", "properties").kind is ContentKind.PROPERTIES

    def test_extension_overrides_heuristic(self, detector):
        result = detector.detect("a,b,c\n1,2,3", "json")
        assert result.kind is ContentKind.JSON
        assert result.confidence == pytest.approx(0.95)

    def test_file_name_hint(self, detector):
        result = detector.detect("x", "report.final.csv")
        assert result.kind is ContentKind.CSV

    def test_lexer_lookup_for_unlisted_extension(self, detector):
        """Extensions outside the static table resolve through Pygments."""
        result = detector.detect("x", "xsd")
        assert result.kind is ContentKind.XML
        assert result.confidence == pytest.approx(0.9)
        assert result.method is DetectionMethod.LEXER

    def test_unknown_extension_falls_back_to_content(self, detector):
        result = detector.detect('{"a": 1}', "nosuchext")
        assert result.kind is ContentKind.JSON
        assert result.method is DetectionMethod.HEURISTIC

    def test_detect_from_hint_without_match(self, detector):
        assert detector.detect_from_hint("py") is None
        assert detector.detect_from_hint(None) is None


class TestContentSniffing:
    """Test heuristic detection on content alone."""

    def test_json_object(self):
        result = detect_content('  {"a": 1}  ')
        assert result.kind is ContentKind.JSON
        assert result.confidence == pytest.approx(0.85)

    def test_compact_json_object(self):
        result = detect_content('{"a":1}', None)
        assert result.kind is ContentKind.JSON
        assert result.confidence >= 0.8

    def test_json_array(self):
        assert detect_content('["x", "y"]').kind is ContentKind.JSON

    def test_bracket_without_quotes_is_not_json(self):
        assert detect_content("[1 2 3]").kind is ContentKind.TEXT

    def test_csv(self):
        result = detect_content("a,b,c\n1,2,3")
        assert result.kind is ContentKind.CSV
        assert result.confidence == pytest.approx(0.7)

    def test_single_line_with_commas_is_not_csv(self):
        assert detect_content("one, two, three").kind is ContentKind.TEXT

    def test_xml(self):
        result = detect_content("<root>\n  <item/>\n</root>")
        assert result.kind is ContentKind.XML
        assert result.confidence == pytest.approx(0.8)

    def test_yaml_document_start(self):
        result = detect_content("---\nname: demo")
        assert result.kind is ContentKind.YAML
        assert result.confidence == pytest.approx(0.75)

    def test_yaml_mapping(self):
        result = detect_content("name: demo\nversion: 2")
        assert result.kind is ContentKind.YAML
        assert result.confidence == pytest.approx(0.65)

    def test_properties(self):
        result = detect_content("# settings\nHOST=localhost\nPORT=8080")
        assert result.kind is ContentKind.PROPERTIES
        assert result.confidence == pytest.approx(0.65)

    def test_fallback_text(self):
        result = detect_content("plain text\nno structure")
        assert result.kind is ContentKind.TEXT
        assert result.confidence == pytest.approx(0.5)
        assert result.method is DetectionMethod.FALLBACK


class TestDetectionTotality:
    """Detection never fails and stays within bounds."""

    @pytest.mark.parametrize(
        "content",
        [
            "",
            "   \n\t\n",
            "\x00\x01\x02\xff\ufffd",
            "{",
            "[[[[",
            "=",
            "\ud800 lone surrogate",
            "<",
            "," * 1000,
        ],
    )
    def test_never_raises(self, content):
        result = detect_content(content)
        assert isinstance(result, DetectionResult)
        assert 0.0 <= result.confidence <= 1.0

    def test_deterministic(self):
        content = "a,b\n1,2\n"
        assert detect_content(content) == detect_content(content)

    def test_empty_string_is_text(self):
        result = detect_content("")
        assert result.kind is ContentKind.TEXT
        assert result.confidence == pytest.approx(0.5)


class TestOversizedContent:
    """Above the cap only the extension is consulted."""

    def test_oversized_uses_extension(self):
        detector = ContentDetector(max_bytes=16)
        result = detector.detect('{"key": "' + "v" * 64 + '"}', "csv")
        assert result.kind is ContentKind.CSV

    def test_oversized_without_hint_is_text(self):
        detector = ContentDetector(max_bytes=16)
        result = detector.detect('{"key": "' + "v" * 64 + '"}')
        assert result.kind is ContentKind.TEXT
        assert result.method is DetectionMethod.FALLBACK

    def test_within_cap_sniffs(self):
        detector = ContentDetector(max_bytes=1024)
        assert detector.detect('{"key": "v"}').kind is ContentKind.JSON
