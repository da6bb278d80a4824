import html
from typing import Dict, Iterable
from defectlens_api.schemas.internal_models import Defect

RISK_CONFIG = {
    "low": {
        "emoji": "🟢",
        "color": "#64748b",
        "bg": "rgba(100,116,139,0.15)",
        "numeric": 1,
    },
    "medium": {
        "emoji": "🟡",
        "color": "#eab308",
        "bg": "rgba(234,179,8,0.15)",
        "numeric": 2,
    },
    "high": {
        "emoji": "🟠",
        "color": "#f97316",
        "bg": "rgba(249,115,22,0.15)",
        "numeric": 3,
    },
    "critical": {
        "emoji": "🚨",
        "color": "#dc2626",
        "bg": "rgba(220,38,38,0.25)",
        "numeric": 4,
    },
}

CATEGORY_ICONS = {
    "security": "🛡️",
    "accessibility": "🎯",
    "performance": "⚡",
    "seo": "🔎",
    "ux": "🧭",
    "code-quality": "🧾",
    "functionality": "🐞",
    "future-risk": "📉",
    "engagement": "📈",
    "brand-safety": "🛡️",
    "content-quality": "📝",
}


def _config(level: str) -> Dict:
    return RISK_CONFIG.get((level or "").lower(), RISK_CONFIG["low"])


def risk_badge(level: str) -> str:
    cfg = _config(level)
    return (
        f'<span style="'
        f"display:inline-block;padding:6px 16px;border-radius:20px;"
        f"background:{cfg['bg']};color:{cfg['color']};"
        f"font-weight:700;font-size:14px;letter-spacing:0.5px;"
        f"border:1px solid {cfg['color']};"
        f'">{cfg["emoji"]} {html.escape(str(level or "").upper())}</span>'
    )


def risk_numeric(level: str) -> int:
    return _config(level)["numeric"]


def category_icon(category: str) -> str:
    return CATEGORY_ICONS.get(category, "🐞")


def health_color(score: float) -> str:
    if score >= 80: return "#16A34A"
    if score >= 60: return "#F59E0B"
    if score >= 40: return "#F97316"
    return "#DC2626"


def severity_counts(defects: Iterable[Defect]) -> Dict[str, int]:
    """Defects per severity, most severe first."""
    counts = {level: 0 for level in sorted(RISK_CONFIG, key=risk_numeric, reverse=True)}
    for defect in defects:
        key = defect.severity.lower() if defect.severity.lower() in counts else "low"
        counts[key] += 1
    return counts
