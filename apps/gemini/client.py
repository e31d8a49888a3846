import google.generativeai as genai
import base64
import binascii
import logging
from typing import Dict, Iterable, List, Optional

from apps.errors import ConfigurationError, ValidationError
from .catalog import TEXT, VISION, response_modalities, select_model
from .failures import classify_failure
from .prompt_template import CONNECTION_CHECK_PROMPT, TEXT_PROMPT, VISION_PROMPT
from .schemas import ConnectionStatus, GenerationResult, ImagePart

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = 'image/jpeg'
TEXT_PLACEHOLDER = 'text-generated-description'


def decode_image_data(data: str) -> bytes:
    """Decode base64 image data, accepting an optional `data:<mime>;base64,` prefix."""
    if not isinstance(data, str):
        raise ValidationError("Image data must be a base64 string")
    if data.startswith('data:') and ',' in data:
        data = data.split(',', 1)[1]
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError(f"referenceImage is not valid base64: {e}")


def data_url_mime_type(data: str, default: str = DEFAULT_MIME_TYPE) -> str:
    """MIME type from a `data:<mime>;base64,` prefix, or `default` when there is none."""
    if isinstance(data, str) and data.startswith('data:') and ';' in data:
        return data[5:data.index(';')] or default
    return default


class GeminiGateway:
    """
    Wraps Gemini calls. Model names come from a priority list so provider
    renames only touch the catalog; failures come back classified instead of
    raised.
    """

    def __init__(self, api_key: Optional[str], model_priority: Optional[Dict[str, Iterable[str]]] = None):
        self.api_key = api_key
        self.model_priority = model_priority

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def select_model(self, task: str) -> str:
        return select_model(task, self.model_priority)

    def _model(self, model_name: str):
        if not self.api_key:
            raise ConfigurationError("GEMINI_API_KEY is not set in environment variables")
        genai.configure(api_key=self.api_key)
        return genai.GenerativeModel(model_name)

    def generate(self, prompt_text: str, reference_image: Optional[str] = None,
                 mime_type: Optional[str] = None) -> GenerationResult:
        """
        Generate content for a prompt, optionally guided by a base64 reference image.

        The provider may only analyse the reference rather than produce a new
        image. In that case the returned image is the reference itself
        (or a text placeholder when there was no reference), so callers must
        not assume the output differs from the input.
        """
        if not self.api_key:
            raise ConfigurationError("GEMINI_API_KEY is not set in environment variables")

        mime_type = mime_type or DEFAULT_MIME_TYPE
        task = VISION if reference_image else TEXT
        if reference_image:
            parts = [
                VISION_PROMPT.format(prompt=prompt_text),
                {'mime_type': mime_type, 'data': decode_image_data(reference_image)},
            ]
        else:
            parts = [TEXT_PROMPT.format(prompt=prompt_text)]

        model_name = self.select_model(task)
        logger.info("Using %s model for %s generation", model_name, task)

        try:
            model = self._model(model_name)
            response = model.generate_content(
                parts,
                generation_config={'response_modalities': response_modalities(model_name, task)},
            )
            text, images = self._parse_response(response)
        except ConfigurationError:
            raise
        except Exception as e:
            failure = classify_failure(e)
            logger.error("Gemini generation failed (%s): %s", failure.kind.value, failure.detail)
            return GenerationResult(success=False, model=model_name, failure=failure)

        if images:
            logger.info("Gemini generated %d image(s)", len(images))
        elif reference_image:
            logger.info("Gemini response contains text only, returning reference image")
            images = [ImagePart(data=reference_image, mime_type=mime_type)]
        else:
            logger.info("Gemini response contains text only, returning description placeholder")
            images = [ImagePart(data=TEXT_PLACEHOLDER, mime_type='text/plain')]

        return GenerationResult(success=True, images=images, text=text, model=model_name)

    @staticmethod
    def _parse_response(response):
        text_chunks = []
        images = []
        for part in getattr(response, 'parts', None) or []:
            if getattr(part, 'text', None):
                text_chunks.append(part.text)
            else:
                inline = getattr(part, 'inline_data', None)
                if inline and inline.data:
                    images.append(ImagePart(
                        data=base64.b64encode(inline.data).decode('utf-8'),
                        mime_type=inline.mime_type or DEFAULT_MIME_TYPE,
                    ))
        return "\n".join(text_chunks).strip(), images

    def list_models(self) -> List[str]:
        if not self.api_key:
            raise ConfigurationError("GEMINI_API_KEY is not set in environment variables")
        genai.configure(api_key=self.api_key)
        return [
            m.name for m in genai.list_models()
            if 'generateContent' in (getattr(m, 'supported_generation_methods', None) or [])
        ]

    def test_connection(self) -> ConnectionStatus:
        """Minimal round trip for health and debug pages. Never raises."""
        if not self.api_key:
            return ConnectionStatus(
                connected=False,
                message='Gemini API connection failed',
                error='GEMINI_API_KEY is not set in environment variables',
            )

        model_name = self.select_model(TEXT)
        try:
            available = self.list_models()
            response = self._model(model_name).generate_content(CONNECTION_CHECK_PROMPT)
            text, _ = self._parse_response(response)
        except Exception as e:
            logger.error("Gemini connection test failed: %s", e)
            return ConnectionStatus(
                connected=False,
                message='Gemini API connection failed',
                model=model_name,
                error=classify_failure(e).message,
            )

        return ConnectionStatus(
            connected=True,
            message='Gemini AI service is ready',
            model=model_name,
            response_text=text,
            available_models=available,
        )
