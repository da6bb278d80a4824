"""Function-calling schema that forces the model to answer with an analysis report."""
from typing import Dict, Any
from defectlens_api.schemas.internal_models import RiskLevel, Importance, DefectCategory

TOOL_NAME = "website_defect_analysis"

_LEVELS = [level.value for level in RiskLevel]

_SCORE = {"type": "number"}

DEFECT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "id": {"type": "string"},
        "category": {"type": "string", "enum": [c.value for c in DefectCategory]},
        "severity": {"type": "string", "enum": _LEVELS},
        "title": {"type": "string"},
        "location": {"type": "string"},
        "description": {"type": "string"},
        "impact": {"type": "string"},
        "fix": {"type": "string"},
        "isFuturePrediction": {"type": "boolean"}
    },
    "required": [
        "id", "category", "severity", "title", "location",
        "description", "impact", "fix", "isFuturePrediction"
    ]
}

PREVENTIVE_MEASURE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "description": {"type": "string"},
        "importance": {"type": "string", "enum": [i.value for i in Importance]}
    },
    "required": ["title", "description", "importance"]
}

METRICS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "securityScore": _SCORE,
        "accessibilityScore": _SCORE,
        "performanceScore": _SCORE,
        "seoScore": _SCORE,
        "codeQualityScore": _SCORE,
        # social media content only
        "engagementScore": _SCORE,
        "brandSafetyScore": _SCORE,
        "contentQualityScore": _SCORE
    }
}

ANALYSIS_PARAMETERS: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "healthScore": {"type": "number", "description": "Overall health score 0-100"},
        "riskLevel": {"type": "string", "enum": _LEVELS},
        "summary": {"type": "string", "description": "Brief summary of website health"},
        "defects": {"type": "array", "items": DEFECT_SCHEMA},
        "priorityFixes": {
            "type": "array",
            "items": {"type": "string"},
            "description": (
                "Top 5 priority fixes in simple everyday language. Start with action words. "
                "Max 15 words each. No technical jargon."
            )
        },
        "preventiveMeasures": {"type": "array", "items": PREVENTIVE_MEASURE_SCHEMA},
        "metrics": METRICS_SCHEMA
    },
    "required": ["healthScore", "riskLevel", "summary", "defects", "priorityFixes", "preventiveMeasures", "metrics"]
}

def analysis_tool() -> Dict[str, Any]:
    return {
        "type": "function",
        "function": {
            "name": TOOL_NAME,
            "description": "Return comprehensive website defect analysis",
            "parameters": ANALYSIS_PARAMETERS
        }
    }

def forced_tool_choice() -> Dict[str, Any]:
    return {"type": "function", "function": {"name": TOOL_NAME}}
