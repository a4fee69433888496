"""Built-in tools."""

from synolink.integrations.filestation import FileStationClient
from synolink.tools.builtin.filestation import ALL_TOOLS
from synolink.tools.registry import ToolRegistry


def create_filestation_registry(client: FileStationClient) -> ToolRegistry:
    """Build a registry holding every FileStation tool, all sharing ``client``."""
    registry = ToolRegistry()
    for tool_cls in ALL_TOOLS:
        registry.register(tool_cls(client))
    return registry


__all__ = ["create_filestation_registry"]
