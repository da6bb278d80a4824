import httpx
import os
import logging
from typing import Optional, Dict, Any
from pydantic import ValidationError

from defectlens_api.schemas.internal_models import AnalysisResult

logger = logging.getLogger("APIClient")

API_BASE = os.getenv("API_BASE_URL", "http://localhost:8000")
DEFAULT_ERROR = "Failed to analyze website"

class AnalysisRequestError(Exception):
    """The gateway answered with an error envelope, or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

class GatewayClient:
    def __init__(self, base_url: str = API_BASE, timeout: Optional[float] = None,
                 transport: Optional[httpx.BaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        # analyses can take a while; no client-side timeout by default
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(base_url=self.base_url, timeout=self.timeout, transport=self.transport)

    def health(self) -> Dict[str, Any]:
        try:
            with self._client() as client:
                data = client.get("/health", timeout=5).json()
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return {"status": "unreachable"}
        return data if isinstance(data, dict) else {"status": "unreachable"}

    def analyze(self, website_data: Dict[str, Any], url: str) -> AnalysisResult:
        try:
            with self._client() as client:
                response = client.post("/analyze-website", json={"websiteData": website_data, "url": url})
        except httpx.HTTPError as e:
            logger.error(f"Analysis request failed: {e}")
            raise AnalysisRequestError(str(e) or DEFAULT_ERROR) from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if not response.is_success or not body.get("success"):
            message = body.get("error") or DEFAULT_ERROR
            logger.error(f"Analysis error ({response.status_code}): {message}")
            raise AnalysisRequestError(message, response.status_code)

        try:
            return AnalysisResult.model_validate(body.get("analysis") or {})
        except ValidationError as e:
            logger.error(f"Unreadable analysis: {e}")
            raise AnalysisRequestError("Received an analysis in an unexpected format", response.status_code) from e
