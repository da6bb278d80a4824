"""Gateway error hierarchy.

Each error carries the HTTP status and the fixed message that ends up in the
``{"success": false, "error": ...}`` envelope.
"""

from typing import Optional


class GatewayError(Exception):
    """Base class for every failure the analysis endpoint reports."""

    status_code = 500
    default_message = "Analysis failed"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None) -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code


class MissingWebsiteDataError(GatewayError):
    status_code = 400
    default_message = "Website data is required"


class ServiceNotConfiguredError(GatewayError):
    status_code = 500
    default_message = "AI service not configured"


class UpstreamRateLimitError(GatewayError):
    status_code = 429
    default_message = "Rate limit exceeded. Please try again later."


class UpstreamCreditsError(GatewayError):
    status_code = 402
    default_message = "AI credits depleted. Please add more credits."


class UpstreamFailureError(GatewayError):
    """Any other non-2xx answer from the AI gateway."""

    status_code = 500
    default_message = "AI analysis failed"

    def __init__(self, upstream_status: int, upstream_body: str = "") -> None:
        super().__init__()
        self.upstream_status = upstream_status
        self.upstream_body = upstream_body


class AnalysisParseError(GatewayError):
    """The upstream answer did not contain a function call."""

    status_code = 500
    default_message = "Failed to parse AI analysis"
