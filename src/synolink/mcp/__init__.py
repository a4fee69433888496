"""MCP (Model Context Protocol) stdio server for the FileStation tools.

Created: 2026-10-12
"""

from synolink.mcp.server import build_server, serve

__all__ = ["build_server", "serve"]
