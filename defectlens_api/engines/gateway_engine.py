import json
import logging
import os
import time
from typing import Dict, Any, Optional

import httpx

from defectlens_api.config import settings
from defectlens_api.core.content_preprocessing import preprocess_content
from defectlens_api.core.errors import (
    UpstreamRateLimitError, UpstreamCreditsError, UpstreamFailureError, AnalysisParseError
)
from defectlens_api.engines.analysis_tool import analysis_tool, forced_tool_choice
from defectlens_api.schemas.request_schema import WebsiteData
from defectlens_api.services.metrics_service import MetricsService

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
ENGINE_LABEL = "ai_gateway"
logger = logging.getLogger(__name__)

USER_PROMPT_TEMPLATE = """Analyze this website ({url}) for defects:

**HTML Content (truncated):**
{html}

**Markdown Content:**
{markdown}

**Links Found ({link_count}):**
{links_json}

**Page Metadata:**
{metadata_json}

Provide a comprehensive defect analysis with current issues, their locations, and preventive measures for future defects."""

class AIGatewayEngine:
    """Single-shot defect analysis through an OpenAI-compatible chat completion gateway.

    One call per analysis: no retries, no caching, no circuit breaker. The
    function-call arguments are handed back as parsed JSON without any local
    validation, so schema conformance is whatever the model delivers.
    """

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url or settings.AI_GATEWAY_URL
        self.model = model or settings.AI_MODEL
        self.timeout = timeout
        self.transport = transport
        self.system_prompt = self._load_prompt()

    def _load_prompt(self) -> str:
        prompt_path = os.path.join(BASE_DIR, "prompt_template.txt")
        with open(prompt_path, "r", encoding="utf-8") as f:
            return f.read().strip()

    def build_user_prompt(self, data: WebsiteData, url: Optional[str]) -> str:
        content = preprocess_content(data)
        return USER_PROMPT_TEMPLATE.format(url=url or "Unknown source", **content)

    def build_payload(self, data: WebsiteData, url: Optional[str]) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": self.system_prompt},
                {"role": "user", "content": self.build_user_prompt(data, url)}
            ],
            "tools": [analysis_tool()],
            "tool_choice": forced_tool_choice()
        }

    async def analyze(self, data: WebsiteData, url: Optional[str]) -> Any:
        payload = self.build_payload(data, url)
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        start = time.time()
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.base_url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            MetricsService.record_error(ENGINE_LABEL, type(e).__name__)
            raise
        finally:
            MetricsService.record_latency(ENGINE_LABEL, time.time() - start)

        if not response.is_success:
            self._raise_for_status(response)

        body = response.json()
        logger.info("AI response received")
        return self._extract_analysis(body)

    def _raise_for_status(self, response: httpx.Response):
        status = response.status_code
        MetricsService.record_error(ENGINE_LABEL, f"HTTP_{status}")
        if status == 429:
            raise UpstreamRateLimitError()
        if status == 402:
            raise UpstreamCreditsError()
        logger.error(f"AI gateway error: {status} {response.text}")
        raise UpstreamFailureError(status, response.text)

    def _extract_analysis(self, body: Dict[str, Any]) -> Any:
        choices = body.get("choices") or []
        message = (choices[0] or {}).get("message") or {} if choices else {}
        tool_calls = message.get("tool_calls") or []
        function = (tool_calls[0] or {}).get("function") or {} if tool_calls else {}
        arguments = function.get("arguments")

        if not arguments:
            MetricsService.record_error(ENGINE_LABEL, "NO_TOOL_CALL")
            raise AnalysisParseError()

        if isinstance(arguments, str):
            try:
                analysis = json.loads(arguments)
            except ValueError:
                # surfaces as the decoder's own message
                MetricsService.record_error(ENGINE_LABEL, "MALFORMED_ARGUMENTS")
                raise
        else:
            analysis = arguments

        MetricsService.record_success(ENGINE_LABEL)
        return analysis
