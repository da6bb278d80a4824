"""
Shared fixtures: the FastAPI app wired to an in-memory upstream gateway.
"""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from defectlens_api.api.analyze import get_engine
from defectlens_api.config import settings
from defectlens_api.engines.gateway_engine import AIGatewayEngine
from defectlens_api.main import app
from defectlens_api.services.metrics_service import MetricsService

GATEWAY_URL = "https://gateway.test/v1/chat/completions"

SAMPLE_ANALYSIS = {
    "healthScore": 72,
    "riskLevel": "medium",
    "summary": "ok",
    "defects": [
        {
            "id": "d1",
            "category": "accessibility",
            "severity": "high",
            "title": "Images have no descriptions",
            "location": "Homepage hero",
            "description": "Screen readers cannot describe the pictures.",
            "impact": "Blind visitors miss key content.",
            "fix": "Add a short description to every image.",
            "isFuturePrediction": False,
        },
        {
            "id": "d2",
            "category": "future-risk",
            "severity": "medium",
            "title": "Outdated copyright year",
            "location": "Footer",
            "description": "The footer still shows last year.",
            "impact": "Visitors may think the site is abandoned.",
            "fix": "Update the year automatically.",
            "isFuturePrediction": True,
        },
    ],
    "priorityFixes": ["Add descriptions to your images so blind users can understand them"],
    "preventiveMeasures": [
        {"title": "Monthly review", "description": "Check the site once a month.", "importance": "high"}
    ],
    "metrics": {
        "securityScore": 80,
        "accessibilityScore": 70,
        "performanceScore": 75,
        "seoScore": 60,
        "codeQualityScore": 65,
    },
}


def tool_call_response(arguments, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code,
        json={
            "choices": [
                {
                    "message": {
                        "role": "assistant",
                        "tool_calls": [
                            {
                                "id": "call_1",
                                "type": "function",
                                "function": {
                                    "name": "website_defect_analysis",
                                    "arguments": arguments if isinstance(arguments, str) else json.dumps(arguments),
                                },
                            }
                        ],
                    }
                }
            ]
        },
    )


class UpstreamRecorder:
    """MockTransport handler that records requests; swap ``handler`` per test."""

    def __init__(self):
        self.requests = []
        self.handler = lambda request: tool_call_response(SAMPLE_ANALYSIS)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def last_payload(self):
        return json.loads(self.requests[-1].content)

    @property
    def last_user_prompt(self) -> str:
        return self.last_payload["messages"][1]["content"]


@pytest.fixture
def upstream():
    return UpstreamRecorder()


@pytest.fixture
def engine_factory(upstream):
    def factory(**kwargs):
        kwargs.setdefault("api_key", "test-key")
        kwargs.setdefault("base_url", GATEWAY_URL)
        return AIGatewayEngine(transport=httpx.MockTransport(upstream), **kwargs)

    return factory


@pytest.fixture
def client(engine_factory, monkeypatch):
    """TestClient whose analysis engine talks to the recorder instead of the network."""
    monkeypatch.setattr(settings, "AI_GATEWAY_API_KEY", "test-key")
    app.dependency_overrides[get_engine] = lambda: engine_factory()
    MetricsService.reset()
    yield TestClient(app)
    app.dependency_overrides.clear()
