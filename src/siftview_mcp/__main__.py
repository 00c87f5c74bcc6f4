"""Allow ``python -m siftview_mcp``."""

from .cli import cli

if __name__ == "__main__":
    cli()
