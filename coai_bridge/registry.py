"""
MCP Tool Registry

Single place where the bridge's tools are collected and looked up by name.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from mcp import types

from .base import MCPTool, ToolNotFoundError
from .config import BridgeConfig
from .tools.analyze import AnalyzeCodeTool

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Name -> tool mapping served over MCP."""

    def __init__(self):
        self._tools: Dict[str, MCPTool] = {}

    def register(self, tool: MCPTool) -> None:
        if tool.name in self._tools:
            raise ValueError(f"Tool already registered: {tool.name}")
        self._tools[tool.name] = tool
        logger.info(f"Registered tool: {tool.name}")

    def get(self, name: str) -> Optional[MCPTool]:
        """
        Get a specific tool by name.
        Returns None if tool not found.
        """
        return self._tools.get(name)

    def require(self, name: str) -> MCPTool:
        tool = self.get(name)
        if tool is None:
            raise ToolNotFoundError("Tool not found", tool_name=name)
        return tool

    def names(self) -> List[str]:
        return list(self._tools.keys())

    def list_tools(self) -> List[types.Tool]:
        return [tool.to_tool() for tool in self._tools.values()]

    async def call(self, name: str, arguments: Optional[Dict[str, Any]]) -> types.CallToolResult:
        """
        Execute a tool by name.
        Unknown names raise ToolNotFoundError; runtime failures come back as
        isError results.
        """
        return await self.require(name).run(arguments)


def build_registry(
    config: BridgeConfig,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ToolRegistry:
    """Registry holding the CoAI analysis tool bound to the given config."""
    registry = ToolRegistry()
    registry.register(AnalyzeCodeTool(config, transport=transport))
    logger.info(f"Tool registration complete. Total tools: {len(registry.names())}")
    return registry
