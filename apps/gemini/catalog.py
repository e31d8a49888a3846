import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional

logger = logging.getLogger(__name__)

VISION = "vision"
TEXT = "text"
# model can return image parts; it must then be asked for IMAGE output
IMAGE_OUTPUT = "image_output"


@dataclass(frozen=True)
class ModelSpec:
    name: str
    capabilities: FrozenSet[str]

    def supports(self, task: str) -> bool:
        return task in self.capabilities


MODEL_CATALOG: Dict[str, ModelSpec] = {
    spec.name: spec for spec in [
        ModelSpec("gemini-2.0-flash-preview-image-generation", frozenset({VISION, TEXT, IMAGE_OUTPUT})),
        ModelSpec("gemini-2.5-flash", frozenset({VISION, TEXT})),
        ModelSpec("gemini-2.0-flash", frozenset({VISION, TEXT})),
        ModelSpec("gemini-1.5-flash", frozenset({VISION, TEXT})),
        ModelSpec("gemini-1.5-pro", frozenset({VISION, TEXT})),
        ModelSpec("gemini-pro", frozenset({TEXT})),
    ]
}

MODEL_PRIORITY = {
    VISION: [
        "gemini-2.0-flash-preview-image-generation",
        "gemini-1.5-flash",
        "gemini-1.5-pro",
        "gemini-pro",
    ],
    TEXT: ["gemini-1.5-flash", "gemini-1.5-pro", "gemini-pro"],
}

FALLBACK_MODEL = "gemini-pro"


def select_model(task: str, priority: Optional[Dict[str, Iterable[str]]] = None,
                 catalog: Dict[str, ModelSpec] = MODEL_CATALOG) -> str:
    """
    Pick the first model in the task's priority list that the catalog says
    can handle the task. This does not contact the provider; a model picked
    here can still be refused at generation time.
    """
    priority = {**MODEL_PRIORITY, **(priority or {})}
    if task not in priority:
        task = TEXT
    candidates = priority[task]

    for name in candidates:
        spec = catalog.get(name)
        if spec is None:
            logger.debug("Model %s has no catalog entry, skipping", name)
            continue
        if spec.supports(task):
            logger.debug("Selected model %s for task %s", name, task)
            return name
        logger.debug("Model %s does not support %s", name, task)

    logger.warning("No models found in priority list for %s, using %s as fallback", task, FALLBACK_MODEL)
    return FALLBACK_MODEL


def response_modalities(model_name: str, task: str,
                        catalog: Dict[str, ModelSpec] = MODEL_CATALOG) -> List[str]:
    """Output modalities to request: IMAGE only for vision calls on image-capable models."""
    spec = catalog.get(model_name)
    if task == VISION and spec is not None and spec.supports(IMAGE_OUTPUT):
        return ["TEXT", "IMAGE"]
    return ["TEXT"]
