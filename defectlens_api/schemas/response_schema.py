from pydantic import BaseModel
from typing import Dict, Any, Optional

class AnalyzeResponse(BaseModel):
    success: bool
    analysis: Any = None
    error: Optional[str] = None

    def envelope(self) -> Dict[str, Any]:
        # analysis is relayed untouched, so no exclude_none on the nested dict
        body: Dict[str, Any] = {"success": self.success}
        if self.success:
            body["analysis"] = self.analysis
        else:
            body["error"] = self.error
        return body

def success_envelope(analysis: Any) -> Dict[str, Any]:
    return AnalyzeResponse(success=True, analysis=analysis).envelope()

def error_envelope(message: str) -> Dict[str, Any]:
    return AnalyzeResponse(success=False, error=message).envelope()
