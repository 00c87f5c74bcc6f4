"""Command-line interface for SiftView MCP."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from .config import AnalysisConfig, ServerConfig, SiftViewConfig
from .content_detection import ContentDetector, ContentSegmenter
from .diffing import DiffEngine
from .errors import ContentAnalysisError
from .formatting import SegmentedFormatter
from .server import create_mcp_server

# Configure logging - default to WARNING to keep stdout/stderr quiet
logging.basicConfig(
    level=logging.WARNING, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def _read(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def run_once(args: argparse.Namespace, analysis: AnalysisConfig) -> int:
    """
    Run a single analysis and print the result.

    Returns:
        Exit code: 0 for success, 1 for failure
    """
    detector = ContentDetector(max_bytes=analysis.max_buffer_bytes)
    try:
        if args.detect:
            hint = args.extension or args.detect
            _print_json(detector.detect(_read(args.detect), hint).to_dict())
        elif args.segments:
            hint = args.extension or args.segments
            segmenter = ContentSegmenter(detector=detector, max_bytes=analysis.max_buffer_bytes)
            segments = segmenter.segment(_read(args.segments), hint)
            _print_json([segment.to_dict() for segment in segments])
        elif args.format:
            hint = args.extension or args.format
            content = _read(args.format)
            segmenter = ContentSegmenter(detector=detector, max_bytes=analysis.max_buffer_bytes)
            formatter = SegmentedFormatter(detector=detector, max_bytes=analysis.max_buffer_bytes)
            sys.stdout.write(formatter.format(content, segmenter.segment(content, hint)))
            sys.stdout.write("\n")
        elif args.diff:
            left_path, right_path = args.diff
            engine = DiffEngine(
                left_label=left_path,
                right_label=right_path,
                context_lines=analysis.diff_context_lines,
                max_bytes=analysis.max_buffer_bytes,
            )
            result = engine.diff(_read(left_path), _read(right_path))
            if args.structured:
                _print_json(result.structured.to_dict())
            else:
                sys.stdout.write(result.unified)
        return 0
    except (ContentAnalysisError, OSError, UnicodeDecodeError) as e:
        logger.debug(f"One-shot analysis failed: {e!r}")
        print(f"Error: {e}", file=sys.stderr)
        return 1


async def main(config: SiftViewConfig) -> None:
    """
    Main entry point for the SiftView MCP server.

    Args:
        config: Analysis, cache and transport configuration
    """
    server = config.server
    logger.info("=" * 60)
    logger.info("Starting SiftView MCP Server")
    logger.info("=" * 60)
    logger.info(f"Transport: {server.transport}")
    if server.transport in ["http", "sse"]:
        logger.info(f"Server endpoint: {server.transport}://{server.host}:{server.port}{server.path}")
    logger.info(f"Max buffer size: {config.analysis.max_buffer_bytes} bytes")

    mcp = create_mcp_server(config)

    match server.transport:
        case "http":
            await mcp.run_http_async(
                host=server.host, port=server.port, path=server.path, stateless_http=True
            )
        case "stdio":
            await mcp.run_stdio_async()
        case "sse":
            await mcp.run_sse_async(host=server.host, port=server.port, path=server.path)
        case _:
            raise ValueError(f"Unsupported transport: {server.transport}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="siftview-mcp",
        description="SiftView - content detection, formatting and diffing over MCP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the MCP server over stdio
  siftview-mcp

  # Run as HTTP server
  siftview-mcp --transport http --port 8080

  # One-shot analysis
  siftview-mcp --detect data.json
  siftview-mcp --segments notes.txt
  siftview-mcp --format export.csv
  siftview-mcp --diff old.txt new.txt --structured

Environment:
  SIFTVIEW_MAX_BUFFER_BYTES, SIFTVIEW_DIFF_CONTEXT, SIFTVIEW_LEFT_LABEL,
  SIFTVIEW_RIGHT_LABEL, SIFTVIEW_CACHE_ENABLED, MCP_TRANSPORT, MCP_HOST,
  MCP_PORT, MCP_PATH
        """,
    )

    modes = parser.add_mutually_exclusive_group()
    modes.add_argument("--detect", metavar="FILE", help="Print the detected kind of FILE")
    modes.add_argument("--segments", metavar="FILE", help="Print the segments of FILE")
    modes.add_argument("--format", metavar="FILE", help="Print FILE formatted by segment")
    modes.add_argument(
        "--diff", nargs=2, metavar=("LEFT", "RIGHT"), help="Print the diff of two files"
    )

    parser.add_argument(
        "--structured",
        action="store_true",
        help="With --diff, print unchanged/changed blocks as JSON",
    )
    parser.add_argument(
        "--extension",
        "-e",
        default=None,
        help="Extension hint overriding the file name (e.g. json, csv)",
    )
    parser.add_argument(
        "--max-bytes",
        type=int,
        default=None,
        help="Maximum buffer size in bytes (default: 5 MiB)",
    )

    # Server arguments
    parser.add_argument(
        "--transport",
        "-t",
        choices=["stdio", "http", "sse"],
        default=None,
        help="Transport type (default: stdio)",
    )
    parser.add_argument("--host", default=None, help="HTTP/SSE server host (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=None, help="HTTP/SSE server port (default: 8000)")
    parser.add_argument("--path", default=None, help="HTTP/SSE server path (default: /mcp/)")

    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    return parser


def cli(argv: list[str] | None = None) -> None:
    """Command-line interface for SiftView."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.INFO)
        logging.getLogger("siftview_mcp").setLevel(logging.DEBUG)
    else:
        logging.getLogger().setLevel(logging.WARNING)

    if args.structured and not args.diff:
        parser.error("--structured requires --diff")

    try:
        config = SiftViewConfig.from_env()
        if args.max_bytes is not None:
            config.analysis = AnalysisConfig(
                max_buffer_bytes=args.max_bytes,
                diff_context_lines=config.analysis.diff_context_lines,
                left_label=config.analysis.left_label,
                right_label=config.analysis.right_label,
            )
        if any(v is not None for v in (args.transport, args.host, args.port, args.path)):
            config.server = ServerConfig(
                transport=args.transport or config.server.transport,
                host=args.host or config.server.host,
                port=args.port or config.server.port,
                path=args.path or config.server.path,
            )
    except ValueError as e:
        parser.error(str(e))

    if args.detect or args.segments or args.format or args.diff:
        sys.exit(run_once(args, config.analysis))

    try:
        asyncio.run(main(config))
    except KeyboardInterrupt:
        logger.info("\nShutting down gracefully...")
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    cli()
