import os
from dotenv import load_dotenv

load_dotenv()

def _optional_float(name: str):
    raw = os.getenv(name, "").strip()
    return float(raw) if raw else None

class Config:
    AI_GATEWAY_API_KEY = os.getenv("AI_GATEWAY_API_KEY", "")
    AI_GATEWAY_URL = os.getenv("AI_GATEWAY_URL", "https://ai.gateway.lovable.dev/v1/chat/completions")
    AI_MODEL = os.getenv("AI_MODEL", "google/gemini-3-flash-preview")
    # None keeps the upstream call unbounded
    AI_GATEWAY_TIMEOUT = _optional_float("AI_GATEWAY_TIMEOUT")
    ENV = os.getenv("ENV", "development")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    VERSION_MANIFEST = {
        "api": "1.0.0",
        "analysis_tool": "website_defect_analysis",
        "build_id": os.getenv("BUILD_ID", "DEV")
    }

settings = Config()
