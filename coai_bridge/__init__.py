"""
CoAI MCP Bridge

Exposes the CoAI (CodeNose) code analysis service as an MCP tool over stdio.
"""

from .base import MCPTool, ToolFailure, ToolNotFoundError, ToolParameter, ToolSuccess
from .config import BridgeConfig
from .registry import ToolRegistry, build_registry

__version__ = "0.1.0"

__all__ = [
    "BridgeConfig",
    "MCPTool",
    "ToolFailure",
    "ToolNotFoundError",
    "ToolParameter",
    "ToolRegistry",
    "ToolSuccess",
    "build_registry",
]
