"""Error taxonomy shared by the store, the Gemini gateway and the API layer.

Every error knows its HTTP status and a stable machine-readable code so the
API layer can turn it into an envelope without string matching.
"""
from typing import Any, Dict, Optional


class PixoraError(Exception):
    status_code = 500
    code = "INTERNAL_ERROR"
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        if code:
            self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def as_payload(self) -> Dict[str, Any]:
        payload = {"success": False, "message": self.message, "error": self.code}
        payload.update(self.details)
        return payload


class ValidationError(PixoraError):
    status_code = 400
    code = "VALIDATION_ERROR"
    default_message = "Invalid request"


class MissingField(ValidationError):
    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"{field} is required", details={"field": field})


class NotFoundError(PixoraError):
    status_code = 404
    code = "NOT_FOUND"
    default_message = "Not found"


class PromptNotFound(NotFoundError):
    def __init__(self, prompt_id: str, diagnostics: Optional[Dict[str, Any]] = None):
        self.prompt_id = prompt_id
        super().__init__(
            "No prompt found with the provided promptId",
            details={"debug": {"searchedFor": prompt_id, **(diagnostics or {})}},
        )


class ConfigurationError(PixoraError):
    code = "CONFIGURATION_ERROR"
    default_message = "Service is not configured"


class GatewayError(PixoraError):
    """A classified Gemini failure surfaced to the caller."""

    def __init__(self, failure):
        self.failure = failure
        details = {}
        if failure.hint:
            details["suggestion"] = failure.hint
        super().__init__(failure.message, code=failure.kind.value, details=details)


class StoreError(PixoraError):
    code = "STORE_ERROR"
    default_message = "Database operation failed"


class NotConnected(StoreError):
    code = "STORE_NOT_CONNECTED"
    default_message = "Database not connected. Call open() first."
