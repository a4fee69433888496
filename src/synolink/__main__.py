"""SynoLink entry point.

Runs the FileStation MCP server on stdio. Connection settings come from
``SYNO_*`` environment variables; the flags below override them.
"""

import argparse
import asyncio
import logging

from synolink import SERVER_NAME, SERVER_VERSION
from synolink.config import get_settings
from synolink.logging_setup import setup_logging
from synolink.mcp.server import serve

logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="synolink",
        description="Synology FileStation tools for MCP hosts (stdio transport)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
  SYNO_HOST          NAS host (default: localhost)
  SYNO_PORT          NAS DSM port (default: 5000)
  SYNO_USER          NAS user name (not used automatically)
  SYNO_PASS          NAS password (not used automatically)
  SYNO_POLL_INTERVAL Seconds between search polls (default: 0.5)
  SYNO_TIMEOUT       HTTP timeout in seconds (default: none)
""",
    )
    parser.add_argument("--host", type=str, default=None, help="NAS host (overrides SYNO_HOST)")
    parser.add_argument(
        "--port", "-p", type=int, default=None, help="NAS DSM port (overrides SYNO_PORT)"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for stderr output (default: INFO)",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"{SERVER_NAME} {SERVER_VERSION}",
    )
    args = parser.parse_args()

    overrides = {
        key: value
        for key, value in (("host", args.host), ("port", args.port), ("log_level", args.log_level))
        if value is not None
    }
    settings = get_settings().model_copy(update=overrides)
    setup_logging(level=settings.log_level)

    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logger.info("SynoLink stopped.")
    except Exception as e:
        logger.critical("Fatal error while running the server: %s", e, exc_info=True)
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
