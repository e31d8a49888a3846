import base64
import logging
from typing import Any, Dict, List, Optional

from django.utils import timezone

from apps.errors import NotFoundError, ValidationError
from apps.gemini.client import data_url_mime_type, decode_image_data
from . import image_hygiene
from .engine import IMAGES

logger = logging.getLogger(__name__)


def _decoded_size(data: str) -> int:
    try:
        return len(decode_image_data(data))
    except ValidationError:
        return 0


class PromptLibrary:
    """Uploaded reference images and the prompts attached to them."""

    def __init__(self, store):
        self.store = store

    def upload(self, prompt_id: Optional[str], prompt_name: Optional[str], prompt_text: Optional[str],
               image_file=None, image_data: Optional[str] = None) -> Dict[str, Any]:
        if not prompt_id or not prompt_name or not prompt_text:
            raise ValidationError(
                'Missing required fields: promptId, promptName, and prompt are required'
            )
        if not all(isinstance(value, str) for value in (prompt_id, prompt_name, prompt_text)):
            raise ValidationError('promptId, promptName, and prompt must be strings')

        if image_file is not None:
            raw = image_file.read()
            mime_type = image_hygiene.check_upload(raw, image_file.name, image_file.content_type)
            encoded = base64.b64encode(raw).decode('utf-8')
            data = f"data:{mime_type};base64,{encoded}"
            original_name = image_file.name
            size = len(raw)
        elif image_data:
            if not isinstance(image_data, str):
                raise ValidationError('aiImage must be a base64 string')
            data = image_data
            original_name = 'uploaded-image'
            size = _decoded_size(image_data)
            mime_type = data_url_mime_type(image_data)
        else:
            raise ValidationError('No image data provided (either file upload or base64)', code='NO_IMAGE_ERROR')

        document = {
            'prompt_id': prompt_id,
            'prompt_name': prompt_name,
            'prompt_text': prompt_text,
            'reference_image_data': data,
            'original_file_name': original_name,
            'byte_size': size,
            'mime_type': mime_type,
            'uploaded_at': timezone.now(),
        }
        document['image_id'] = self.store.insert(IMAGES, document)
        logger.info("Image saved to database: %s", document['image_id'])
        return document

    def list_images(self) -> List[Dict[str, Any]]:
        return self.store.find(IMAGES)

    def get_image(self, image_id: str) -> Dict[str, Any]:
        records = self.store.find(IMAGES, {'image_id': image_id})
        if not records:
            raise NotFoundError('Image not found')
        return records[0]

    def images_for_prompt(self, prompt_id: str) -> List[Dict[str, Any]]:
        if not prompt_id:
            raise ValidationError('promptId parameter is required', code='MISSING_PARAMETER')
        records = self.store.find(IMAGES, {'prompt_id': prompt_id})
        if not records:
            raise NotFoundError('No images found for the provided promptId')
        return records

    def delete_image(self, image_id: str) -> int:
        removed = self.store.remove(IMAGES, {'image_id': image_id})
        if removed == 0:
            raise NotFoundError('Image not found')
        logger.info("Deleted %d image record(s) with id %s", removed, image_id)
        return removed
