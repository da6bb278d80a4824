from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional, Dict

class RiskLevel(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

class Importance(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"

class DefectCategory(str, Enum):
    SECURITY = "security"
    ACCESSIBILITY = "accessibility"
    PERFORMANCE = "performance"
    SEO = "seo"
    UX = "ux"
    CODE_QUALITY = "code-quality"
    FUNCTIONALITY = "functionality"
    FUTURE_RISK = "future-risk"
    ENGAGEMENT = "engagement"
    BRAND_SAFETY = "brand-safety"
    CONTENT_QUALITY = "content-quality"

class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _nulls_take_defaults(cls, data):
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

# Field types below are plain strings on purpose: results are shown as the model
# sent them, unknown enum values included.
class Defect(_CamelModel):
    id: Optional[str] = None
    category: str = DefectCategory.FUNCTIONALITY.value
    severity: str = RiskLevel.LOW.value
    title: str = ""
    location: str = ""
    description: str = ""
    impact: str = ""
    fix: str = ""
    is_future_prediction: bool = False

class PreventiveMeasure(_CamelModel):
    title: str = ""
    description: str = ""
    importance: str = Importance.MEDIUM.value

METRIC_LABELS = {
    "security_score": "Security",
    "accessibility_score": "Accessibility",
    "performance_score": "Performance",
    "seo_score": "SEO",
    "code_quality_score": "Code Quality",
    "engagement_score": "Engagement",
    "brand_safety_score": "Brand Safety",
    "content_quality_score": "Content Quality",
}

class AnalysisMetrics(_CamelModel):
    security_score: Optional[float] = None
    accessibility_score: Optional[float] = None
    performance_score: Optional[float] = None
    seo_score: Optional[float] = None
    code_quality_score: Optional[float] = None
    engagement_score: Optional[float] = None
    brand_safety_score: Optional[float] = None
    content_quality_score: Optional[float] = None

    def scores(self) -> Dict[str, float]:
        """Labelled scores, skipping the ones the model left out."""
        return {
            label: getattr(self, field)
            for field, label in METRIC_LABELS.items()
            if getattr(self, field) is not None
        }

class AnalysisResult(_CamelModel):
    health_score: float = 0
    risk_level: str = RiskLevel.LOW.value
    summary: str = ""
    defects: List[Defect] = Field(default_factory=list)
    priority_fixes: List[str] = Field(default_factory=list)
    preventive_measures: List[PreventiveMeasure] = Field(default_factory=list)
    metrics: AnalysisMetrics = Field(default_factory=AnalysisMetrics)

    @property
    def current_defects(self) -> List[Defect]:
        return [d for d in self.defects if not d.is_future_prediction]

    @property
    def predicted_defects(self) -> List[Defect]:
        return [d for d in self.defects if d.is_future_prediction]
