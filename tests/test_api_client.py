"""
Tests for the dashboard's GatewayClient against a mocked API.
"""

import httpx
import pytest

from defectlens_dashboard.services.api_client import AnalysisRequestError, GatewayClient

from conftest import SAMPLE_ANALYSIS


def make_client(handler) -> GatewayClient:
    return GatewayClient(base_url="http://api.test", transport=httpx.MockTransport(handler))


def test_analyze_posts_bundle_and_parses_result():
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        seen["body"] = request.content
        return httpx.Response(200, json={"success": True, "analysis": SAMPLE_ANALYSIS})

    result = make_client(handler).analyze({"markdown": "Hello"}, "https://example.com")

    assert seen["path"] == "/analyze-website"
    assert b'"websiteData"' in seen["body"]
    assert result.health_score == 72
    assert [d.id for d in result.current_defects] == ["d1"]
    assert [d.id for d in result.predicted_defects] == ["d2"]


def test_error_envelope_message_is_raised():
    client = make_client(lambda request: httpx.Response(429, json={"success": False, "error": "Rate limit exceeded. Please try again later."}))

    with pytest.raises(AnalysisRequestError) as exc_info:
        client.analyze({"markdown": "Hello"}, "x")

    assert exc_info.value.message == "Rate limit exceeded. Please try again later."
    assert exc_info.value.status_code == 429


def test_unsuccessful_body_with_ok_status_is_an_error():
    client = make_client(lambda request: httpx.Response(200, json={"success": False}))

    with pytest.raises(AnalysisRequestError) as exc_info:
        client.analyze({}, "x")

    assert exc_info.value.message == "Failed to analyze website"


def test_non_json_error_falls_back_to_default_message():
    client = make_client(lambda request: httpx.Response(502, text="Bad Gateway"))

    with pytest.raises(AnalysisRequestError, match="Failed to analyze website"):
        client.analyze({}, "x")


def test_connection_failure_is_wrapped():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(AnalysisRequestError, match="connection refused"):
        make_client(handler).analyze({}, "x")


def test_health_when_unreachable():
    def handler(request):
        raise httpx.ConnectError("down", request=request)

    assert make_client(handler).health() == {"status": "unreachable"}


def test_health_passthrough():
    client = make_client(lambda request: httpx.Response(200, json={"status": "healthy"}))
    assert client.health()["status"] == "healthy"


def test_null_fields_fall_back_to_defaults():
    analysis = {"healthScore": None, "riskLevel": None, "metrics": None, "defects": [{"title": "x", "severity": None}]}
    client = make_client(lambda request: httpx.Response(200, json={"success": True, "analysis": analysis}))

    result = client.analyze({"markdown": "Hello"}, "x")

    assert result.health_score == 0
    assert result.risk_level == "low"
    assert result.metrics.scores() == {}
    assert result.defects[0].severity == "low"


def test_unreadable_analysis_is_a_request_error():
    client = make_client(lambda request: httpx.Response(200, json={"success": True, "analysis": [1, 2]}))

    with pytest.raises(AnalysisRequestError) as exc_info:
        client.analyze({"markdown": "Hello"}, "x")

    assert exc_info.value.status_code == 200
