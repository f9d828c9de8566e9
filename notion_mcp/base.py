"""
MCP Tool Base Classes and Errors

Provides the tool contract, required-field validation, and the error taxonomy
shared by the Notion client, the dispatcher, and the protocol front-end.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolParameter:
    """Definition of a tool parameter."""
    name: str
    type: str
    description: str
    required: bool = True
    default: Any = None


@dataclass(frozen=True)
class ToolDefinition:
    """Complete definition of an MCP tool."""
    name: str
    description: str
    parameters: List[ToolParameter] = field(default_factory=list)
    handler: Optional[Callable[..., Awaitable[Any]]] = None

    @property
    def input_schema(self) -> Dict[str, Any]:
        """JSON Schema describing the tool arguments."""
        properties: Dict[str, Dict[str, Any]] = {}
        required: List[str] = []

        for param in self.parameters:
            prop: Dict[str, Any] = {
                "type": param.type,
                "description": param.description,
            }
            if param.default is not None:
                prop["default"] = param.default
            properties[param.name] = prop
            if param.required:
                required.append(param.name)

        schema: Dict[str, Any] = {"type": "object", "properties": properties}
        if required:
            schema["required"] = required
        return schema

    def to_descriptor(self) -> Dict[str, Any]:
        """Catalog entry as sent to MCP clients."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


class MCPToolError(Exception):
    """Base exception for MCP tool errors."""

    error_type = "execution"

    def __init__(self, message: str, tool_name: str = None, details: Dict = None):
        self.message = message
        self.tool_name = tool_name
        self.details = details or {}
        super().__init__(self.message)


class UnknownToolError(MCPToolError):
    """Raised when a requested tool name is not in the dispatch table."""

    error_type = "unknown_tool"

    def __init__(self, tool_name: str):
        super().__init__(f"Unknown tool: {tool_name}", tool_name=tool_name)


class ValidationError(MCPToolError):
    """Raised when tool input validation fails."""

    error_type = "invalid_arguments"


InvalidArgumentsError = ValidationError


class NotionAPIError(MCPToolError):
    """Raised when the Notion API answers with an error status."""

    error_type = "api_error"

    def __init__(
        self,
        message: str,
        status_code: int = None,
        code: str = None,
        tool_name: str = None,
    ):
        details = {}
        if status_code is not None:
            details["status_code"] = status_code
        if code:
            details["code"] = code
        super().__init__(message, tool_name=tool_name, details=details)
        self.status_code = status_code
        self.code = code


class UnauthorizedError(NotionAPIError):
    """The Notion credential is missing, invalid or expired."""

    error_type = "unauthorized"


class NotFoundError(NotionAPIError):
    """Notion has no object for the given id (or it is not shared)."""

    error_type = "not_found"


class NetworkError(NotionAPIError):
    """The Notion API could not be reached."""

    error_type = "network"


class ConfigurationError(Exception):
    """Raised when process configuration is missing or malformed."""


class MCPTool(ABC):
    """
    Abstract base class for MCP tools.

    All tools must inherit from this class and implement:
    - name: Tool identifier
    - description: What the tool does
    - parameters: List of ToolParameter definitions
    - execute(): The actual tool logic
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for the tool."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what the tool does."""
        pass

    @property
    def parameters(self) -> List[ToolParameter]:
        """List of parameters the tool accepts."""
        return []

    def validate(self, arguments: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Validate input arguments against the declared parameters.
        Returns validated/normalized arguments.
        Raises ValidationError if a required field is missing or blank.
        """
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise ValidationError(
                "Arguments must be an object",
                tool_name=self.name
            )

        validated = {}

        for param in self.parameters:
            value = arguments.get(param.name)

            if value is None:
                if param.required:
                    raise ValidationError(
                        f"Missing required parameter: {param.name}",
                        tool_name=self.name,
                        details={"parameter": param.name},
                    )
                value = param.default
            elif param.type == "string":
                if not isinstance(value, str):
                    raise ValidationError(
                        f"Parameter {param.name} must be a string",
                        tool_name=self.name,
                        details={"parameter": param.name},
                    )
                if param.required and not value.strip():
                    raise ValidationError(
                        f"Parameter {param.name} must not be empty",
                        tool_name=self.name,
                        details={"parameter": param.name},
                    )

            validated[param.name] = value

        return validated

    @abstractmethod
    async def execute(self, **kwargs) -> Any:
        """
        Execute the tool with validated parameters.
        This method should contain the actual tool logic.
        """
        pass

    async def run(self, arguments: Optional[Dict[str, Any]] = None) -> Any:
        """Validate, then execute. Errors propagate to the caller."""
        validated = self.validate(arguments)
        return await self.execute(**validated)

    def to_definition(self) -> ToolDefinition:
        """Convert tool to ToolDefinition for registry."""
        return ToolDefinition(
            name=self.name,
            description=self.description,
            parameters=self.parameters,
            handler=self.run,
        )
