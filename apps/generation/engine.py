import logging
import uuid
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.utils import timezone

from apps.errors import GatewayError, MissingField, PromptNotFound, ValidationError

logger = logging.getLogger(__name__)

IMAGES = 'images'
GENERATED_IMAGES = 'generated_images'
TEXT_PROMPT_NAME = 'Text Prompt'


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _require_text(value, field: str) -> str:
    if _is_blank(value):
        raise MissingField(field)
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string", details={'field': field})
    return value


class GenerationOrchestrator:
    """
    Request-to-artifact pipeline: validate, resolve the prompt, call the
    gateway, persist the artifact.

    Nothing here is locked. Two concurrent calls for the same promptId both
    read the same prompt and both insert their own artifact. A failed insert
    after a successful generation fails the whole call.
    """

    def __init__(self, store, gateway):
        self.store = store
        self.gateway = gateway

    def resolve_prompt(self, prompt_id: str) -> Dict[str, Any]:
        """
        Return the authoritative PromptRecord for a promptId.

        Several uploads may share a promptId; the first one inserted wins.
        """
        records = self.store.find(IMAGES, {'prompt_id': prompt_id})
        logger.info("Found %d image(s) for promptId %s", len(records), prompt_id)
        if not records:
            raise PromptNotFound(prompt_id, self._lookup_diagnostics())
        return records[0]

    def generate_from_reference(self, prompt_id: Optional[str], reference_image: Optional[str],
                                mime_type: Optional[str] = None) -> Dict[str, Any]:
        _require_text(prompt_id, 'promptId')
        _require_text(reference_image, 'referenceImage')
        mime_type = mime_type or 'image/jpeg'

        record = self.resolve_prompt(prompt_id)
        prompt_text = record['prompt_text']
        prompt_name = record['prompt_name']
        if _is_blank(prompt_text):
            raise ValidationError(f"Prompt {prompt_id} has no prompt text")

        logger.info("Generating image for prompt '%s' (%s)", prompt_name, prompt_id)
        result = self.gateway.generate(prompt_text, reference_image, mime_type)
        if not result.success:
            raise GatewayError(result.failure)

        return self._persist(result, prompt_id, prompt_name, prompt_text, 'ai-generated-image.jpg')

    def generate_from_text(self, prompt_text: Optional[str]) -> Dict[str, Any]:
        _require_text(prompt_text, 'prompt')

        logger.info("Generating image from text prompt")
        result = self.gateway.generate(prompt_text)
        if not result.success:
            raise GatewayError(result.failure)

        return self._persist(result, None, TEXT_PROMPT_NAME, prompt_text, 'ai-text-generated-image.jpg')

    def _persist(self, result, prompt_id, prompt_name, prompt_text, file_name) -> Dict[str, Any]:
        image = result.image
        document = {
            'artifact_id': str(uuid.uuid4()),
            'prompt_id': prompt_id,
            'prompt_name': prompt_name,
            'prompt_text': prompt_text,
            'result_image_data': image.data,
            'original_file_name': file_name,
            'byte_size': len(image.data),
            'mime_type': image.mime_type,
            'model_name': result.model or '',
            'response_text': result.text or '',
            'source_type': 'generated',
            'created_at': timezone.now(),
        }
        self.store.insert(GENERATED_IMAGES, document)
        logger.info("Generated image saved with ID %s", document['artifact_id'])
        return document

    def list_prompts(self) -> List[Dict[str, Any]]:
        """One entry per distinct promptId, in first-seen order."""
        prompts = []
        seen = set()
        for record in self.store.find(IMAGES):
            prompt_id = record['prompt_id']
            if not prompt_id or prompt_id in seen:
                continue
            seen.add(prompt_id)
            prompts.append(record)
        return prompts

    def list_generated_artifacts(self) -> List[Dict[str, Any]]:
        return self.store.find(GENERATED_IMAGES)

    def _lookup_diagnostics(self) -> Dict[str, Any]:
        records = self.store.find(IMAGES)
        logger.info("Total images in database: %d", len(records))
        sample = None
        if records:
            sample = {'promptId': records[0]['prompt_id'], 'promptName': records[0]['prompt_name']}
        return {
            'totalImages': len(records),
            'collections': self.store.collections(),
            'sampleImage': sample,
        }

    def get_diagnostics(self) -> Dict[str, Any]:
        records = self.store.find(IMAGES)
        sample = None
        if records:
            first = records[0]
            sample = {
                'promptId': first['prompt_id'],
                'promptName': first['prompt_name'],
                'prompt': (first['prompt_text'] or '')[:100] + '...',
            }
        connection = self.gateway.test_connection()
        return {
            'database': {
                'collections': self.store.collections(),
                'totalImages': len(records),
                'totalGeneratedImages': self.store.count(GENERATED_IMAGES),
                'sampleImage': sample,
            },
            'gemini': connection.as_dict(),
            'environment': {
                'hasGeminiKey': self.gateway.configured,
                'debug': settings.DEBUG,
            },
        }
