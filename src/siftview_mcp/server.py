"""FastMCP server exposing the content-analysis engine to a viewer shell."""

import json
import logging
from typing import Any

from fastmcp.exceptions import ToolError
from fastmcp.server import FastMCP
from fastmcp.tools.tool import TextContent, ToolResult
from mcp.types import ToolAnnotations

from .config import SiftViewConfig
from .content_detection import AnalysisCache, ContentDetector, ContentSegmenter
from .diffing import DiffEngine
from .errors import ContentAnalysisError
from .formatting import SegmentedFormatter
from .formatting import format_json as format_json_strict

logger = logging.getLogger(__name__)

READ_ONLY = ToolAnnotations(
    readOnlyHint=True,
    destructiveHint=False,
    idempotentHint=True,
    openWorldHint=False,
)


def _annotations(title: str) -> ToolAnnotations:
    return READ_ONLY.model_copy(update={"title": title})


def create_mcp_server(
    config: SiftViewConfig | None = None,
    cache: AnalysisCache | None = None,
) -> FastMCP:
    """
    Create an MCP server for content detection, formatting and diffing.

    Args:
        config: Server configuration (default: from environment)
        cache: Optional cache for detection and segmentation results. When
            omitted one is created if caching is enabled in ``config``.

    Returns:
        FastMCP server instance
    """
    config = config or SiftViewConfig.from_env()
    analysis = config.analysis

    if cache is None and config.cache.enabled:
        cache = AnalysisCache(
            max_size=config.cache.max_size,
            max_age_seconds=config.cache.max_age_seconds,
        )

    detector = ContentDetector(max_bytes=analysis.max_buffer_bytes)
    segmenter = ContentSegmenter(detector=detector, max_bytes=analysis.max_buffer_bytes)
    formatter = SegmentedFormatter(detector=detector, max_bytes=analysis.max_buffer_bytes)
    engine = DiffEngine(
        left_label=analysis.left_label,
        right_label=analysis.right_label,
        context_lines=analysis.diff_context_lines,
        max_bytes=analysis.max_buffer_bytes,
    )

    logger.info(
        f"Creating MCP server (max_buffer_bytes={analysis.max_buffer_bytes}, "
        f"cache={'on' if cache else 'off'})"
    )
    mcp = FastMCP("siftview-mcp")

    def memoized(operation: str, content: str, hint: str | None, compute):
        if cache is None:
            return compute()
        cached = cache.get(operation, content, hint)
        if cached is not None:
            return cached
        value = compute()
        cache.put(operation, content, value, hint)
        return value

    def engine_error(operation: str, error: ContentAnalysisError) -> ToolError:
        logger.error(f"{operation} failed: {error}")
        return ToolError(f"{operation} failed [{error.error_code}]: {error.message}")

    @mcp.tool(annotations=_annotations("Detect Content"))
    async def detect_content(content: str, extension: str | None = None) -> ToolResult:
        """
        Detect the data format of a buffer.

        The extension hint (e.g. "json", ".csv" or a file name) wins over
        content sniffing. Unknown content is reported as "text".

        Returns:
            ToolResult with kind, confidence (0-1) and the detection method
        """
        result = memoized(
            "detect_content", content, extension, lambda: detector.detect(content, extension)
        )
        return ToolResult(
            content=[
                TextContent(
                    type="text",
                    text=f"{result.kind.value} (confidence {result.confidence:.2f})",
                )
            ],
            structured_content=result.to_dict(),
        )

    @mcp.tool(annotations=_annotations("Detect Segments"))
    async def detect_segments(content: str, extension: str | None = None) -> ToolResult:
        """
        Split a buffer into line-aligned segments of one data format each.

        Lines are 1-based and inclusive; blank lines separate segments and do
        not belong to any segment. Results are valid only for this exact
        content.

        Returns:
            ToolResult with a "segments" list of {start_line, end_line, kind}
        """
        segments = memoized(
            "detect_segments",
            content,
            extension,
            lambda: segmenter.segment(content, extension),
        )
        summary = ", ".join(
            f"{s.start_line}-{s.end_line}:{s.kind.value}" for s in segments
        )
        return ToolResult(
            content=[TextContent(type="text", text=summary)],
            structured_content={"segments": [s.to_dict() for s in segments]},
        )

    @mcp.tool(annotations=_annotations("Format Content"))
    async def format_content_segmented(
        content: str, segments: list[dict[str, Any]] | None = None
    ) -> ToolResult:
        """
        Pretty-print a buffer segment by segment.

        Segments that fail to parse are returned unchanged. With no segments
        the whole buffer is formatted according to its detected kind.

        Raises:
            ToolError: When a segment lies outside the buffer (stale segments)
        """
        try:
            formatted = formatter.format(content, segments or [])
        except ContentAnalysisError as e:
            raise engine_error("format_content_segmented", e)
        return ToolResult(
            content=[TextContent(type="text", text=formatted)],
            structured_content={"formatted": formatted, "changed": formatted != content},
        )

    @mcp.tool(annotations=_annotations("Format JSON"))
    async def format_json(content: str) -> ToolResult:
        """
        Pretty-print a JSON document.

        Raises:
            ToolError: When the content is not valid JSON
        """
        try:
            formatted = format_json_strict(content)
        except ContentAnalysisError as e:
            raise engine_error("format_json", e)
        return ToolResult(
            content=[TextContent(type="text", text=formatted)],
            structured_content={"formatted": formatted},
        )

    @mcp.tool(annotations=_annotations("Compute Diff"))
    async def compute_diff(
        left: str,
        right: str,
        left_label: str | None = None,
        right_label: str | None = None,
    ) -> ToolResult:
        """
        Unified line diff between two buffers.

        Raises:
            ToolError: When either buffer exceeds the size cap
        """
        try:
            result = engine.diff(left, right, left_label, right_label)
        except ContentAnalysisError as e:
            raise engine_error("compute_diff", e)
        return ToolResult(
            content=[TextContent(type="text", text=result.unified)],
            structured_content={
                "unified": result.unified,
                "added": result.structured.added_count,
                "removed": result.structured.removed_count,
            },
        )

    @mcp.tool(annotations=_annotations("Compute Structured Diff"))
    async def compute_diff_structured(
        left: str,
        right: str,
        left_label: str | None = None,
        right_label: str | None = None,
    ) -> ToolResult:
        """
        Side-by-side diff as unchanged/changed blocks.

        Returns:
            ToolResult with left_label, right_label and blocks, where each
            block is {"type": "unchanged", "count", "lines"} or
            {"type": "changed", "old_lines", "new_lines"}

        Raises:
            ToolError: When either buffer exceeds the size cap
        """
        try:
            result = engine.diff(left, right, left_label, right_label)
        except ContentAnalysisError as e:
            raise engine_error("compute_diff_structured", e)
        structured = result.structured.to_dict()
        return ToolResult(
            content=[TextContent(type="text", text=json.dumps(structured))],
            structured_content=structured,
        )

    @mcp.tool(annotations=_annotations("Analysis Cache Stats"))
    async def analysis_cache_stats() -> ToolResult:
        """Report hit/miss statistics of the detection cache."""
        info = cache.get_info() if cache else {"enabled": False}
        if cache:
            info["enabled"] = True
        return ToolResult(
            content=[TextContent(type="text", text=json.dumps(info))],
            structured_content=info,
        )

    return mcp
