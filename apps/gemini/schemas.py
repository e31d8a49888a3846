from dataclasses import dataclass, field
from typing import List, Optional

from .failures import GatewayFailure


@dataclass
class ImagePart:
    data: str  # base64
    mime_type: str


@dataclass
class GenerationResult:
    success: bool
    images: List[ImagePart] = field(default_factory=list)
    text: str = ""
    model: Optional[str] = None
    failure: Optional[GatewayFailure] = None

    @property
    def image(self) -> Optional[ImagePart]:
        return self.images[0] if self.images else None


@dataclass
class ConnectionStatus:
    connected: bool
    message: str
    model: Optional[str] = None
    response_text: Optional[str] = None
    available_models: List[str] = field(default_factory=list)
    error: Optional[str] = None

    def as_dict(self):
        return {
            "connected": self.connected,
            "message": self.message,
            "model": self.model,
            "testResponse": self.response_text,
            "availableModels": self.available_models,
            "error": self.error,
        }
