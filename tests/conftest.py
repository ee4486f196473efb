"""
Shared fixtures: a fake CoAI endpoint built on httpx.MockTransport.
"""

import json
from typing import Callable, Dict, List

import httpx
import pytest

from coai_bridge.config import BridgeConfig
from coai_bridge.tools.analyze import AnalyzeCodeTool

TEST_URL = "https://coai.test/api/mcp/analyze"


class FakeAnalysisServer:
    """Records outgoing requests and answers with a canned handler."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def last_body(self) -> Dict:
        return json.loads(self.requests[-1].content)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def respond_json(status_code: int, body) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(status_code, json=body)


@pytest.fixture
def config() -> BridgeConfig:
    return BridgeConfig(
        server_url=TEST_URL,
        token="test-token",
        user_id="42",
        timeout=5.0,
    )


@pytest.fixture
def make_tool(config):
    """Build an AnalyzeCodeTool wired to a FakeAnalysisServer."""
    def _make(handler):
        fake = FakeAnalysisServer(handler)
        return AnalyzeCodeTool(config, transport=fake.transport()), fake
    return _make
