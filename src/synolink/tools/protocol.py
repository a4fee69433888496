# Tool protocol - pydantic-validated tools with tagged results.
# Created: 2026-10-12


from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class ErrorKind(str, Enum):
    """Why a tool invocation failed."""

    INVALID_ARGUMENTS = "invalid_arguments"
    NOT_AUTHENTICATED = "not_authenticated"
    REMOTE_FAILURE = "remote_failure"
    TRANSPORT = "transport"
    UNKNOWN_TOOL = "unknown_tool"
    INTERNAL = "internal"


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one tool invocation: text plus an optional error kind."""

    text: str
    error: ErrorKind | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @classmethod
    def ok(cls, text: str) -> "ToolResult":
        return cls(text=text)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "ToolResult":
        return cls(text=f"Error: {message}", error=kind)


@dataclass
class ToolDefinition:
    """Tool definition as published in the MCP tool catalog."""

    name: str
    description: str
    parameters: dict[str, Any]  # JSON Schema

    def to_mcp_schema(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.parameters,
        }


class NoArgs(BaseModel):
    """Argument model for tools that take no input."""

    model_config = ConfigDict(extra="ignore")


class BaseTool(ABC):
    """Base class for tools with common functionality."""

    #: Pydantic model describing (and validating) the tool input.
    args_model: type[BaseModel] = NoArgs

    @property
    @abstractmethod
    def name(self) -> str:
        """Tool name."""
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        """Tool description for the agent."""
        ...

    @property
    def parameters(self) -> dict[str, Any]:
        """JSON Schema generated from ``args_model``."""
        return self.args_model.model_json_schema()

    @property
    def definition(self) -> ToolDefinition:
        """Get the tool definition."""
        return ToolDefinition(
            name=self.name,
            description=self.description,
            parameters=self.parameters,
        )

    def validate(self, arguments: dict[str, Any] | None) -> BaseModel:
        """Validate raw arguments. Raises ``pydantic.ValidationError``."""
        return self.args_model.model_validate(arguments or {})

    @abstractmethod
    async def run(self, args: Any) -> str:
        """Execute the tool with validated arguments and render the text response.

        Errors are raised, not returned; the registry turns them into results.
        """
        ...
