"""Per-kind pretty printers.

Every formatter is a pure ``str -> str`` function that raises FormatError when
its input does not parse. Kinds without an entry in FORMATTERS pass through.
"""

import csv
import io
import json
import re
from typing import Callable, Dict, List

import yaml
from lxml import etree

from ..content_detection.models import ContentKind
from ..errors import FormatError

Formatter = Callable[[str], str]

JSON_INDENT = 2
CSV_COLUMN_GAP = "  "
XML_INDENT = "  "

_XML_DECLARATION = re.compile(r"^\s*(<\?xml[^>]*\?>)")
_PROPERTY_ENTRY = re.compile(r"^([^=\s][^=]*?)\s*=\s*(.*)$")


def format_json(content: str) -> str:
    """Pretty-print JSON with two-space indentation, keeping key order."""
    try:
        value = json.loads(content)
    except (ValueError, RecursionError) as e:
        raise FormatError(ContentKind.JSON.value, str(e)) from e
    return json.dumps(value, indent=JSON_INDENT, ensure_ascii=False)


def format_csv(content: str) -> str:
    """Align CSV columns to the widest cell of each column."""
    try:
        rows: List[List[str]] = list(csv.reader(io.StringIO(content), strict=True))
    except csv.Error as e:
        raise FormatError(ContentKind.CSV.value, str(e)) from e

    records = [row for row in rows if row]
    if not records:
        return content

    field_counts = {len(row) for row in records}
    if len(field_counts) > 1:
        raise FormatError(
            ContentKind.CSV.value,
            f"rows have differing field counts {sorted(field_counts)}",
        )

    ncols = field_counts.pop()
    widths = [max(len(row[col]) for row in records) for col in range(ncols)]
    lines = []
    for row in rows:
        if not row:
            lines.append("")
            continue
        cells = [cell.ljust(widths[col]) for col, cell in enumerate(row)]
        lines.append(CSV_COLUMN_GAP.join(cells).rstrip())
    return "\n".join(lines)


def format_xml(content: str) -> str:
    """Re-indent an XML document, keeping its declaration if it had one."""
    parser = etree.XMLParser(remove_blank_text=True, resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(content.strip().encode("utf-8"), parser)
    except (etree.XMLSyntaxError, ValueError) as e:
        raise FormatError(ContentKind.XML.value, str(e)) from e

    etree.indent(root, space=XML_INDENT)
    body = etree.tostring(root.getroottree(), encoding="unicode", pretty_print=True)
    declaration = _XML_DECLARATION.match(content)
    if declaration:
        body = f"{declaration.group(1)}\n{body}"
    return body.rstrip("\n")


def format_yaml(content: str) -> str:
    """Re-emit YAML in block style, keeping key order."""
    try:
        documents = list(yaml.safe_load_all(content))
    except (yaml.YAMLError, ValueError, RecursionError) as e:
        raise FormatError(ContentKind.YAML.value, str(e)) from e
    if not documents:
        return content

    dumped = yaml.safe_dump_all(
        documents,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        explicit_start=content.lstrip().startswith("---") or len(documents) > 1,
    )
    if dumped.endswith("...\n"):
        dumped = dumped[: -len("...\n")]
    return dumped.rstrip("\n")


def format_properties(content: str) -> str:
    """Normalize key=value lines: comments first, entries sorted by key."""
    comments: List[str] = []
    entries: List[tuple] = []
    for line_number, raw in enumerate(content.split("\n"), start=1):
        line = raw.strip()
        if not line:
            continue
        if line.startswith(("#", "!")):
            comments.append(line)
            continue
        match = _PROPERTY_ENTRY.match(line)
        if not match:
            raise FormatError(
                ContentKind.PROPERTIES.value,
                f"line {line_number} is not a key=value entry",
            )
        entries.append((match.group(1), match.group(2)))

    entries.sort(key=lambda entry: entry[0])
    return "\n".join(comments + [f"{key}={value}" for key, value in entries])


FORMATTERS: Dict[ContentKind, Formatter] = {
    ContentKind.JSON: format_json,
    ContentKind.CSV: format_csv,
    ContentKind.XML: format_xml,
    ContentKind.YAML: format_yaml,
    ContentKind.PROPERTIES: format_properties,
}


def get_formatter(kind: ContentKind) -> Formatter | None:
    """Formatter registered for ``kind``, or None to pass text through."""
    return FORMATTERS.get(kind)
