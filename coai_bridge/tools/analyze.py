"""
CoAI Code Analysis Tool

Forwards source code to the CoAI (CodeNose) analysis endpoint and returns the
engine's report as tool output.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from ..base import ExecutionError, MCPTool, ToolParameter
from ..config import BridgeConfig

logger = logging.getLogger(__name__)

TOOL_NAME = "analyze_code_with_coai"
DEFAULT_LANGUAGE = "java"
TOKEN_HEADER = "X-MCP-Token"


def format_result(result: Any) -> str:
    """Strings pass through verbatim, anything else becomes indented JSON."""
    if isinstance(result, str):
        return result
    return json.dumps(result, indent=2, ensure_ascii=False)


def _server_error(response: httpx.Response) -> Optional[str]:
    """The backend's own `error` message, if the body carries one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return None


class AnalyzeCodeTool(MCPTool):
    """
    Analyze code with the CoAI engine.

    One POST per call, no retries. HTTP, network and decoding failures are
    raised as ExecutionError and reach the caller as an isError result.
    """

    failure_label = "Analysis Failed"

    def __init__(
        self,
        config: BridgeConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self._transport = transport

    @property
    def name(self) -> str:
        return TOOL_NAME

    @property
    def description(self) -> str:
        return "Analyze code using the Coai (CodeNose) AI engine to find bugs, mistakes, and improvements."

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="code",
                type="string",
                description="The source code content to analyze",
                required=True
            ),
            ToolParameter(
                name="language",
                type="string",
                description="The programming language of the code (e.g., java, python, js)",
                required=False,
                default=DEFAULT_LANGUAGE
            )
        ]

    def build_payload(self, code: Any, language: Optional[str]) -> Dict[str, Any]:
        # userId always comes from configuration, never from the caller
        return {
            "code": code,
            "language": language or DEFAULT_LANGUAGE,
            "userId": self.config.user_id
        }

    def headers(self) -> Dict[str, str]:
        return {
            TOKEN_HEADER: self.config.token,
            "Content-Type": "application/json"
        }

    def client_options(self) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            "verify": self.config.verify_tls,
            "timeout": self.config.timeout,
            "follow_redirects": True
        }
        if self._transport is not None:
            options["transport"] = self._transport
        return options

    async def execute(self, code: Any = None, language: Optional[str] = None) -> str:
        payload = self.build_payload(code, language)
        code_length = len(code) if isinstance(code, str) else 0
        logger.info(
            f"Analysis request: language={payload['language']}, "
            f"code_length={code_length}, endpoint={self.config.server_url}"
        )

        try:
            async with httpx.AsyncClient(**self.client_options()) as client:
                response = await client.post(
                    self.config.server_url,
                    json=payload,
                    headers=self.headers()
                )
                response.raise_for_status()
                body = response.json()

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            message = _server_error(e.response) or f"HTTP {status} {e.response.reason_phrase}"
            logger.error(f"Analysis endpoint returned HTTP {status}: {message}")
            raise ExecutionError(message, tool_name=self.name, details={"status_code": status})
        except httpx.TimeoutException as e:
            message = str(e) or "Request timed out"
            logger.error(f"Analysis request timed out after {self.config.timeout}s")
            raise ExecutionError(message, tool_name=self.name)
        except httpx.RequestError as e:
            message = str(e) or type(e).__name__
            logger.error(f"Cannot reach analysis endpoint {self.config.server_url}: {message}")
            raise ExecutionError(message, tool_name=self.name)
        except ValueError as e:
            logger.error(f"Analysis endpoint returned a non-JSON body: {e}")
            raise ExecutionError(f"Invalid response from analysis server: {e}", tool_name=self.name)

        result = body.get("result") if isinstance(body, dict) else None
        text = format_result(result)
        logger.info(f"Analysis completed: {len(text)} characters")
        return text
