# Tool registry — catalog and dispatch for FileStation tools.
# Created: 2026-10-12


from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from synolink.integrations.errors import (
    InvalidArgumentsError,
    NotAuthenticatedError,
    RemoteAPIError,
    describe_http_error,
)
from synolink.tools.protocol import BaseTool, ErrorKind, ToolResult

logger = logging.getLogger(__name__)


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "arguments"
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


class ToolRegistry:
    """
    Registry for managing tools.

    Usage:
        registry = ToolRegistry()
        registry.register(ListFilesTool(client))

        # Catalog for tools/list
        definitions = registry.get_definitions()

        # Execute a tool
        result = await registry.execute("list_files", {"path": "/volume1/photos"})

    ``execute`` never raises: every failure comes back as an error
    :class:`ToolResult`.
    """

    def __init__(self):
        self._tools: dict[str, BaseTool] = {}

    def register(self, tool: BaseTool) -> None:
        """Register a tool."""
        self._tools[tool.name] = tool
        logger.debug("Registered tool: %s", tool.name)

    def unregister(self, name: str) -> None:
        """Unregister a tool."""
        if name in self._tools:
            del self._tools[name]
            logger.debug("Unregistered tool: %s", name)

    def get(self, name: str) -> BaseTool | None:
        """Get a tool by name."""
        return self._tools.get(name)

    def has(self, name: str) -> bool:
        """Check if tool is registered."""
        return name in self._tools

    def get_definitions(self) -> list[dict[str, Any]]:
        """Get tool definitions in MCP ``tools/list`` shape."""
        return [tool.definition.to_mcp_schema() for tool in self._tools.values()]

    async def execute(self, name: str, arguments: dict[str, Any] | None = None) -> ToolResult:
        """Validate arguments, run a tool and wrap the outcome.

        Args:
            name: Tool name.
            arguments: Raw argument payload from the caller.

        Returns:
            ToolResult with the rendered text, or an error kind and message.
        """
        tool = self._tools.get(name)
        if not tool:
            return ToolResult.failure(ErrorKind.UNKNOWN_TOOL, f"Unknown tool: {name}")

        try:
            args = tool.validate(arguments)
        except ValidationError as e:
            message = f"Invalid arguments for {name}: {_format_validation_error(e)}"
            logger.info("%s", message)
            return ToolResult.failure(ErrorKind.INVALID_ARGUMENTS, message)

        logger.debug("Executing %s", name)
        try:
            text = await tool.run(args)
        except InvalidArgumentsError as e:
            return ToolResult.failure(ErrorKind.INVALID_ARGUMENTS, f"Invalid arguments for {name}: {e}")
        except NotAuthenticatedError as e:
            return ToolResult.failure(ErrorKind.NOT_AUTHENTICATED, str(e))
        except RemoteAPIError as e:
            logger.warning("%s failed: %s", name, e)
            return ToolResult.failure(ErrorKind.REMOTE_FAILURE, str(e))
        except httpx.HTTPError as e:
            return ToolResult.failure(
                ErrorKind.TRANSPORT, f"Request to the NAS failed: {describe_http_error(e)}"
            )
        except Exception as e:
            logger.error("%s failed: %s", name, e, exc_info=True)
            return ToolResult.failure(ErrorKind.INTERNAL, f"Error executing {name}: {e}")

        log_result = text[:200] + "..." if len(text) > 200 else text
        logger.debug("%s result: %s", name, log_result)
        return ToolResult.ok(text)

    @property
    def tool_names(self) -> list[str]:
        """Get list of registered tool names."""
        return list(self._tools.keys())

    def __len__(self) -> int:
        return len(self._tools)
