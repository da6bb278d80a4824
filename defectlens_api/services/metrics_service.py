from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response
import time
import logging
from typing import Dict, Any

logger = logging.getLogger("MetricsService")

REQUEST_COUNT = Counter(
    "defectlens_requests_total",
    "Total content analysis requests",
    ["method", "endpoint", "status"]
)

LATENCY_HISTOGRAM = Histogram(
    "defectlens_upstream_latency_seconds",
    "Latency of upstream AI calls in seconds",
    ["engine"]
)

ERROR_COUNT = Counter(
    "defectlens_errors_total",
    "Total upstream AI errors",
    ["engine", "error_type"]
)

HEALTH_WINDOW_SECONDS = 600
MIN_SAMPLES = 10
UNHEALTHY_RATE = 0.1

class MetricsService:
    _failure_history = {}

    @staticmethod
    def record_latency(engine: str, duration: float):
        LATENCY_HISTOGRAM.labels(engine=engine).observe(duration)

    @staticmethod
    def record_error(engine: str, error_type: str):
        ERROR_COUNT.labels(engine=engine, error_type=error_type).inc()
        MetricsService._track_health(engine, success=False)

    @staticmethod
    def record_request(status: int, endpoint: str = "/analyze-website"):
        REQUEST_COUNT.labels(method="POST", endpoint=endpoint, status=status).inc()

    @staticmethod
    def record_success(engine: str):
        MetricsService._track_health(engine, success=True)

    @classmethod
    def _track_health(cls, engine: str, success: bool):
        now = time.time()
        history = cls._failure_history.setdefault(engine, [])
        history.append((now, success))
        cls._failure_history[engine] = [x for x in history if now - x[0] < HEALTH_WINDOW_SECONDS]

        data = cls._failure_history[engine]
        if len(data) >= MIN_SAMPLES:
            failures = len([x for x in data if not x[1]])
            rate = failures / len(data)
            if rate > UNHEALTHY_RATE:
                logger.critical(f"UPSTREAM_ALERT: {engine} failure rate is {rate*100:.1f}%!")

    @classmethod
    def get_health_report(cls) -> Dict[str, Any]:
        report = {}
        for engine, data in cls._failure_history.items():
            if not data: continue
            failures = len([x for x in data if not x[1]])
            report[engine] = {
                "status": "UNHEALTHY" if (failures / len(data)) > UNHEALTHY_RATE else "HEALTHY",
                "error_rate": f"{(failures / len(data)) * 100:.1f}%",
                "sample_size": len(data)
            }
        return report

    @classmethod
    def reset(cls):
        cls._failure_history = {}

def metrics_endpoint():
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)
