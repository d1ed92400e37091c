"""my-mcp-server: Model Context Protocol server with greeting, arithmetic, time, geocoding, weather and image tools."""

import asyncio
import logging
import sys

from .config import Settings

__version__ = "1.0.0"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Send logs to stderr; stdout carries the MCP protocol."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


async def main():
    """
    Main entry point for the MCP server.

    Sets up stdio-based MCP server and runs it.
    """
    from mcp.server.stdio import stdio_server

    from .server import app

    async with stdio_server() as (read_stream, write_stream):
        logger.info("MCP server started")
        await app.run(
            read_stream,
            write_stream,
            app.create_initialization_options()
        )


def run():
    """Synchronous wrapper for main() to use as console script entry point."""
    configure_logging(Settings.from_environment().log_level)
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("MCP server stopped.")
        sys.exit(0)
    except Exception:
        logger.exception("Fatal error")
        sys.exit(1)


__all__ = ["main", "run", "__version__"]
