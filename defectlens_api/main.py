from defectlens_api.middleware.logging_middleware import setup_logging
setup_logging()

from fastapi import FastAPI
from defectlens_api.api.analyze import router as analyze_router
from defectlens_api.config import settings
from defectlens_api.middleware.cors import CorsHeadersMiddleware
from defectlens_api.middleware.error_handler import register_exception_handlers
from defectlens_api.middleware.logging_middleware import logging_middleware
from defectlens_api.middleware.observability import TracingMiddleware
from defectlens_api.services.metrics_service import MetricsService, metrics_endpoint

app = FastAPI(
    title="DefectLens Content Analysis API",
    version=settings.VERSION_MANIFEST["api"],
    docs_url="/docs"
)

register_exception_handlers(app)

# last added runs first: tracing wraps CORS so preflights carry a correlation id
app.add_middleware(CorsHeadersMiddleware)
app.add_middleware(TracingMiddleware)
app.middleware("http")(logging_middleware)

@app.get("/health")
def health_check():
    return {
        "status": "healthy",
        "version": settings.VERSION_MANIFEST["api"],
        "ai_configured": bool(settings.AI_GATEWAY_API_KEY),
        "upstream": MetricsService.get_health_report()
    }

@app.get("/metrics")
def get_metrics():
    return metrics_endpoint()

app.include_router(analyze_router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
