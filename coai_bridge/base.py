"""
MCP Tool Base Classes

Provides the common tool definition, argument defaults, result types and
error handling for the tools exposed by the bridge.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from mcp import types

logger = logging.getLogger(__name__)


@dataclass
class ToolParameter:
    """Definition of a tool parameter."""
    name: str
    type: str
    description: str
    required: bool = True
    default: Any = None


class MCPToolError(Exception):
    """Base exception for MCP tool errors."""
    def __init__(self, message: str, tool_name: str = None, details: Dict = None):
        self.message = message
        self.tool_name = tool_name
        self.details = details or {}
        super().__init__(self.message)


class ToolNotFoundError(MCPToolError):
    """Raised when a call names a tool that is not registered."""
    pass


class ExecutionError(MCPToolError):
    """Raised when tool execution fails."""
    pass


@dataclass(frozen=True)
class ToolSuccess:
    """Tool finished normally; text is returned to the caller."""
    text: str
    is_error = False


@dataclass(frozen=True)
class ToolFailure:
    """Tool failed at runtime; reported to the caller as an isError result."""
    text: str
    reason: str = ""
    is_error = True


ToolOutcome = Union[ToolSuccess, ToolFailure]


def to_call_tool_result(outcome: ToolOutcome) -> types.CallToolResult:
    """Wrap an outcome into a single-text-block CallToolResult."""
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=outcome.text)],
        isError=outcome.is_error,
    )


class MCPTool(ABC):
    """
    Abstract base class for MCP tools.

    All tools must inherit from this class and implement:
    - name: Tool identifier
    - description: What the tool does
    - parameters: List of ToolParameter definitions
    - execute(): The actual tool logic, returning the output text

    execute() signals runtime failures by raising ExecutionError; invoke()
    turns those into a ToolFailure whose text starts with failure_label.
    """

    failure_label = "Tool Failed"

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

    def apply_defaults(self, arguments: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Pick the declared parameters out of the call arguments.

        Optional parameters that are missing get their default. Required ones
        are passed through untouched (possibly None); the remote side owns
        content validation.
        """
        arguments = arguments or {}
        resolved = {}

        for param in self.parameters:
            value = arguments.get(param.name)
            if value is None and not param.required:
                value = param.default
            resolved[param.name] = value

        return resolved

    @abstractmethod
    async def execute(self, **kwargs) -> str:
        """
        Execute the tool with given parameters.
        This method should contain the actual tool logic.
        """
        pass

    async def invoke(self, arguments: Optional[Dict[str, Any]]) -> ToolOutcome:
        try:
            text = await self.execute(**self.apply_defaults(arguments))
        except ExecutionError as e:
            return ToolFailure(text=f"{self.failure_label}: {e.message}", reason=e.message)
        return ToolSuccess(text=text)

    async def run(self, arguments: Optional[Dict[str, Any]]) -> types.CallToolResult:
        """
        Public entry point: apply defaults, execute and wrap the outcome.
        """
        outcome = await self.invoke(arguments)
        if outcome.is_error:
            logger.error(f"Execution error in {self.name}: {outcome.reason}")
        return to_call_tool_result(outcome)

    def input_schema(self) -> Dict[str, Any]:
        """JSON schema advertised for the tool's arguments."""
        properties: Dict[str, Dict[str, Any]] = {}
        required: List[str] = []

        for param in self.parameters:
            prop: Dict[str, Any] = {
                "type": param.type,
                "description": param.description
            }
            if param.default is not None:
                prop["default"] = param.default

            properties[param.name] = prop

            if param.required:
                required.append(param.name)

        return {
            "type": "object",
            "properties": properties,
            "required": required
        }

    def to_tool(self) -> types.Tool:
        """Convert tool to the MCP Tool descriptor."""
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema()
        )
