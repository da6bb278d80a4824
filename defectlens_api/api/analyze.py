from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from typing import Optional
import logging
from defectlens_api.config import settings
from defectlens_api.core.errors import GatewayError, MissingWebsiteDataError, ServiceNotConfiguredError
from defectlens_api.engines.gateway_engine import AIGatewayEngine
from defectlens_api.middleware.observability import get_correlation_id
from defectlens_api.schemas.request_schema import AnalyzeWebsiteRequest
from defectlens_api.schemas.response_schema import success_envelope
from defectlens_api.services.metrics_service import MetricsService

router = APIRouter()
logger = logging.getLogger("AnalyzeAPI")

def get_engine() -> Optional[AIGatewayEngine]:
    """Build the upstream engine, or None when no API key is configured."""
    if not settings.AI_GATEWAY_API_KEY:
        return None
    return AIGatewayEngine(
        api_key=settings.AI_GATEWAY_API_KEY,
        base_url=settings.AI_GATEWAY_URL,
        model=settings.AI_MODEL,
        timeout=settings.AI_GATEWAY_TIMEOUT,
    )

@router.post("/analyze-website")
async def analyze_website(request: Request, engine: Optional[AIGatewayEngine] = Depends(get_engine)) -> JSONResponse:
    correlation_id = get_correlation_id(request)
    try:
        # parsed by hand so malformed bodies share the error envelope
        payload = await request.json()
        data = AnalyzeWebsiteRequest.model_validate(payload if isinstance(payload, dict) else {})

        if not data.has_website_data:
            raise MissingWebsiteDataError()

        if engine is None:
            logger.error("AI_GATEWAY_API_KEY not configured")
            raise ServiceNotConfiguredError()

        logger.info(f"[{correlation_id}] Analyzing website: {data.url}")
        analysis = await engine.analyze(data.bundle(), data.url)
        body = success_envelope(analysis)
    except GatewayError as e:
        MetricsService.record_request(e.status_code)
        raise
    except Exception as e:
        logger.error(f"[{correlation_id}] Error analyzing website: {e}", exc_info=True)
        MetricsService.record_request(500)
        raise GatewayError(str(e) or "Analysis failed") from e

    MetricsService.record_request(200)
    return JSONResponse(body)
