"""Error taxonomy shared by the planning services and the HTTP layer."""
from __future__ import annotations


class DreamPathError(Exception):
    """Base error carrying the HTTP status and machine-readable code to report."""

    status_code: int = 500
    code: str = "GENERATION_ERROR"
    default_message: str = "Failed to generate response"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InputValidationError(DreamPathError):
    status_code = 400
    code = "VALIDATION_ERROR"
    default_message = "Invalid request body"


class UpstreamError(DreamPathError):
    """Failure reported by the completion service."""

    default_message = "AI service request failed"


class UpstreamQuotaError(UpstreamError):
    status_code = 503
    code = "QUOTA_EXCEEDED"
    default_message = "AI service temporarily unavailable. Please try again later."


class UpstreamRateLimitError(UpstreamError):
    status_code = 429
    code = "RATE_LIMITED"
    default_message = "Too many requests. Please wait a moment and try again."


class UpstreamAuthError(UpstreamError):
    status_code = 500
    code = "AUTH_ERROR"
    default_message = "API authentication failed"


class ResponseParseError(DreamPathError):
    default_message = "Completion service returned malformed JSON"


class ResponseStructureError(DreamPathError):
    default_message = "Invalid response structure: missing required fields"
