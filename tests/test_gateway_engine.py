"""
Unit tests for AIGatewayEngine request building and response extraction.
"""

import httpx
import pytest

from defectlens_api.core.errors import AnalysisParseError, UpstreamCreditsError, UpstreamFailureError, UpstreamRateLimitError
from defectlens_api.engines.analysis_tool import TOOL_NAME
from defectlens_api.schemas.internal_models import DefectCategory
from defectlens_api.schemas.request_schema import WebsiteData
from defectlens_api.services.metrics_service import MetricsService

from conftest import GATEWAY_URL, SAMPLE_ANALYSIS, tool_call_response


class TestPayload:
    def test_system_prompt_is_loaded_from_template(self, engine_factory):
        engine = engine_factory()
        assert engine.system_prompt.startswith("You are an expert website and content analyzer.")
        assert "Maximum 15 words each" in engine.system_prompt

    def test_payload_uses_configured_model(self, engine_factory):
        engine = engine_factory(model="google/test-model")
        payload = engine.build_payload(WebsiteData(markdown="Hello"), "https://example.com")
        assert payload["model"] == "google/test-model"

    def test_tool_schema_covers_every_category_and_social_scores(self, engine_factory):
        payload = engine_factory().build_payload(WebsiteData(), "x")
        params = payload["tools"][0]["function"]["parameters"]
        categories = params["properties"]["defects"]["items"]["properties"]["category"]["enum"]
        assert set(categories) == {c.value for c in DefectCategory}
        assert len(categories) == 11
        metrics = params["properties"]["metrics"]["properties"]
        assert {"engagementScore", "brandSafetyScore", "contentQualityScore", "codeQualityScore"} <= set(metrics)
        assert params["required"] == [
            "healthScore", "riskLevel", "summary", "defects", "priorityFixes", "preventiveMeasures", "metrics"
        ]
        assert payload["tool_choice"]["function"]["name"] == TOOL_NAME

    def test_missing_url_gets_a_readable_source(self, engine_factory):
        prompt = engine_factory().build_user_prompt(WebsiteData(markdown="Hi"), None)
        assert prompt.startswith("Analyze this website (Unknown source) for defects:")

    def test_metadata_is_serialized_as_indented_json(self, engine_factory):
        data = WebsiteData(metadata={"title": "Café", "isSocialMedia": True})
        prompt = engine_factory().build_user_prompt(data, "x")
        assert '{\n  "title": "Café",\n  "isSocialMedia": true\n}' in prompt


class TestAnalyze:
    async def test_returns_parsed_arguments(self, engine_factory, upstream):
        result = await engine_factory().analyze(WebsiteData(markdown="Hello"), "x")
        assert result == SAMPLE_ANALYSIS
        assert str(upstream.requests[0].url) == GATEWAY_URL

    async def test_accepts_object_arguments(self, engine_factory, upstream):
        upstream.handler = lambda request: httpx.Response(
            200, json={"choices": [{"message": {"tool_calls": [{"function": {"arguments": {"healthScore": 5}}}]}}]}
        )
        assert await engine_factory().analyze(WebsiteData(), "x") == {"healthScore": 5}

    @pytest.mark.parametrize(
        "status, error",
        [(429, UpstreamRateLimitError), (402, UpstreamCreditsError), (500, UpstreamFailureError), (400, UpstreamFailureError)],
    )
    async def test_status_codes_raise_typed_errors(self, engine_factory, upstream, status, error):
        upstream.handler = lambda request: httpx.Response(status, text="nope")
        with pytest.raises(error):
            await engine_factory().analyze(WebsiteData(), "x")

    async def test_failure_keeps_upstream_details(self, engine_factory, upstream):
        upstream.handler = lambda request: httpx.Response(503, text="overloaded")
        with pytest.raises(UpstreamFailureError) as exc_info:
            await engine_factory().analyze(WebsiteData(), "x")
        assert exc_info.value.upstream_status == 503
        assert exc_info.value.upstream_body == "overloaded"
        assert exc_info.value.status_code == 500

    async def test_empty_arguments_are_a_parse_error(self, engine_factory, upstream):
        upstream.handler = lambda request: tool_call_response("")
        with pytest.raises(AnalysisParseError):
            await engine_factory().analyze(WebsiteData(), "x")

    async def test_makes_exactly_one_call_without_retry(self, engine_factory, upstream):
        upstream.handler = lambda request: httpx.Response(429)
        with pytest.raises(UpstreamRateLimitError):
            await engine_factory().analyze(WebsiteData(), "x")
        assert len(upstream.requests) == 1

    async def test_malformed_arguments_count_as_upstream_failure(self, engine_factory, upstream):
        MetricsService.reset()
        upstream.handler = lambda request: tool_call_response("{not json")
        with pytest.raises(ValueError):
            await engine_factory().analyze(WebsiteData(), "x")
        report = MetricsService.get_health_report()["ai_gateway"]
        assert report["sample_size"] == 1
        assert report["error_rate"] == "100.0%"

    async def test_non_object_arguments_are_returned_as_parsed(self, engine_factory, upstream):
        upstream.handler = lambda request: tool_call_response("[1, 2]")
        assert await engine_factory().analyze(WebsiteData(), "x") == [1, 2]
