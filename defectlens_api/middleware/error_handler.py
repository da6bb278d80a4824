from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
from defectlens_api.core.errors import GatewayError
from defectlens_api.middleware.cors import CORS_HEADERS
from defectlens_api.schemas.response_schema import error_envelope

logger = logging.getLogger("ErrorHandler")

def register_exception_handlers(app: FastAPI):
    @app.exception_handler(GatewayError)
    async def gateway_exception_handler(request: Request, exc: GatewayError):
        logger.warning(f"Gateway Error ({exc.status_code}): {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=error_envelope(exc.message))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.warning(f"HTTP Exception: {exc.detail}")
        return JSONResponse(status_code=exc.status_code, content=error_envelope(str(exc.detail)))

    # Runs outside the middleware stack, so the CORS headers are attached here.
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Global Exception: {exc}", exc_info=True)
        return JSONResponse(status_code=500, content=error_envelope(str(exc) or "Analysis failed"), headers=CORS_HEADERS)
