import threading

from django.apps import AppConfig
from django.conf import settings


class GenerationConfig(AppConfig):
    """
    Owns the process-wide store and gateway. Both are built and the store
    opened on first use, then shared read-only by every request.
    """

    name = 'apps.generation'
    label = 'generation'

    def ready(self):
        self._lock = threading.Lock()
        self._store = None
        self._gateway = None

    def get_store(self):
        from apps.store.store import ArtifactStore

        with self._lock:
            if self._store is None:
                self._store = ArtifactStore(settings.PIXORA_STORE_ALIAS).open()
        return self._store

    def get_gateway(self):
        from apps.gemini.client import GeminiGateway

        with self._lock:
            if self._gateway is None:
                self._gateway = GeminiGateway(
                    api_key=settings.GEMINI_API_KEY,
                    model_priority=settings.GEMINI_MODEL_PRIORITY,
                )
        return self._gateway

    def get_orchestrator(self):
        from .engine import GenerationOrchestrator

        return GenerationOrchestrator(self.get_store(), self.get_gateway())

    def get_library(self):
        from .library import PromptLibrary

        return PromptLibrary(self.get_store())

