"""Tool protocol, registry and built-in FileStation tools."""

from synolink.tools.protocol import BaseTool, ErrorKind, ToolDefinition, ToolResult
from synolink.tools.registry import ToolRegistry

__all__ = ["BaseTool", "ErrorKind", "ToolDefinition", "ToolRegistry", "ToolResult"]
