from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class FailureKind(str, Enum):
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
    MODEL_NOT_FOUND = "MODEL_NOT_FOUND"
    UNKNOWN = "UNKNOWN_ERROR"


QUOTA_MARKERS = ("429", "quota")
NOT_FOUND_MARKERS = ("404", "not found")

QUOTA_HINT = "Please set up billing in Google AI Studio or wait for quota reset."
MODEL_HINT = "Please check available models or contact support."


@dataclass
class GatewayFailure:
    kind: FailureKind
    message: str
    detail: str
    hint: Optional[str] = None


def classify_failure(error: Union[BaseException, str]) -> GatewayFailure:
    """Map a provider error onto a FailureKind by its message."""
    detail = str(error)

    if any(marker in detail for marker in QUOTA_MARKERS):
        return GatewayFailure(
            kind=FailureKind.QUOTA_EXCEEDED,
            message=f"Quota exceeded: {detail}. Please check your billing and quota limits.",
            detail=detail,
            hint=QUOTA_HINT,
        )
    if any(marker in detail for marker in NOT_FOUND_MARKERS):
        return GatewayFailure(
            kind=FailureKind.MODEL_NOT_FOUND,
            message=f"Model not found: {detail}",
            detail=detail,
            hint=MODEL_HINT,
        )
    return GatewayFailure(
        kind=FailureKind.UNKNOWN,
        message=f"Image generation failed: {detail}",
        detail=detail,
    )
