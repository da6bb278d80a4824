import logging
import time
from fastapi import Request
from pythonjsonlogger.json import JsonFormatter
from defectlens_api.config import settings

def setup_logging():
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(settings.LOG_LEVEL)

async def logging_middleware(request: Request, call_next):
    start_time = time.time()
    logger = logging.getLogger("Middleware")
    logger.info(f"Incoming Request: {request.method} {request.url}")
    try:
        response = await call_next(request)
        process_time = time.time() - start_time
        logger.info(f"Request Completed: {response.status_code} (Time: {process_time:.4f}s)")
        return response
    except Exception as e:
        logger.error(f"Request Failed: {e}")
        raise
