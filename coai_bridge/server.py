#!/usr/bin/env python3
"""
MCP Server Entrypoint

Stdio MCP server that exposes the CoAI code analysis tool.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv
from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from .base import ToolNotFoundError
from .config import BridgeConfig
from .registry import ToolRegistry, build_registry

logger = logging.getLogger(__name__)

SERVER_NAME = "codenose-analysis-server"
SERVER_VERSION = "0.1.0"


def create_server(registry: ToolRegistry) -> Server:
    """Build the MCP server around the given registry."""
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        """List the tools in the registry."""
        return registry.list_tools()

    async def call_tool(req: types.CallToolRequest) -> types.ServerResult:
        name = req.params.name
        try:
            result = await registry.call(name, req.params.arguments)
        except ToolNotFoundError as e:
            logger.warning(f"Call for unknown tool: {name}")
            raise McpError(types.ErrorData(code=types.INVALID_PARAMS, message=e.message)) from e
        return types.ServerResult(result)

    # Registered directly: the call_tool() decorator would fold a raised
    # ToolNotFoundError into an isError result instead of a JSON-RPC error.
    server.request_handlers[types.CallToolRequest] = call_tool

    return server


async def serve(server: Server) -> None:
    """Run the MCP server over stdio until the client closes the stream."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options()
        )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="coai-mcp-bridge",
        description="MCP stdio bridge to the CoAI code analysis service",
    )
    parser.add_argument("--server-url", help="Analysis endpoint (overrides COAI_SERVER_URL)")
    parser.add_argument("--user-id", help="User id sent with each request (overrides COAI_USER_ID)")
    parser.add_argument("--timeout", type=float, help="HTTP timeout in seconds (overrides COAI_TIMEOUT)")
    parser.add_argument("--log-level", help="Logging level (overrides COAI_LOG_LEVEL)")
    return parser.parse_args(argv)


def load_config(argv: Optional[List[str]] = None) -> BridgeConfig:
    """Environment (.env included) first, then command-line overrides."""
    load_dotenv()
    args = parse_args(argv)
    return BridgeConfig.from_env().with_overrides(
        server_url=args.server_url,
        user_id=args.user_id,
        timeout=args.timeout,
        log_level=args.log_level,
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Run the MCP server."""
    config = load_config(argv)

    # stdout carries the protocol, logs go to stderr
    logging.basicConfig(
        level=config.log_level_value,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    logger.info(
        f"Starting {SERVER_NAME} {SERVER_VERSION}: endpoint={config.server_url}, "
        f"user_id={config.user_id}, tls_verify={config.verify_tls}"
    )
    if not config.verify_tls:
        logger.warning("TLS certificate validation disabled for local endpoint")

    server = create_server(build_registry(config))

    try:
        asyncio.run(serve(server))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    logger.info("MCP Server shutting down")


if __name__ == "__main__":
    main()
