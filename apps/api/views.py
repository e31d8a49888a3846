import base64
import logging
from collections.abc import Mapping

from django.apps import apps
from django.utils import timezone
from rest_framework import status
from rest_framework.views import APIView

from apps.errors import ValidationError
from apps.gemini.client import data_url_mime_type

from .responses import failure_response, success_response
from .serializers import (
    GeneratedImageSerializer,
    GenerationSerializer,
    ImageSerializer,
    ImageSummarySerializer,
    PromptSerializer,
    TextGenerationSerializer,
)

logger = logging.getLogger(__name__)


class PipelineView(APIView):
    """Base view; orchestrator and library can be injected through as_view()."""

    orchestrator = None
    library = None

    def get_orchestrator(self):
        return self.orchestrator or apps.get_app_config('generation').get_orchestrator()

    def get_library(self):
        return self.library or apps.get_app_config('generation').get_library()

    def request_payload(self, request):
        if not isinstance(request.data, Mapping):
            raise ValidationError('Request body must be a JSON object')
        return request.data


class GenerateView(PipelineView):
    def post(self, request):
        data = self.request_payload(request)
        prompt_id = data.get('promptId') or data.get('promptid')
        reference_image = data.get('referenceImage')
        mime_type = data.get('mimeType') or data_url_mime_type(reference_image)

        # form-data clients may send the reference image as a file under any field name
        upload = next(iter(request.FILES.values()), None)
        if upload is not None:
            reference_image = base64.b64encode(upload.read()).decode('utf-8')
            mime_type = upload.content_type or mime_type

        logger.info("Generating image with promptId: %s", prompt_id)
        artifact = self.get_orchestrator().generate_from_reference(prompt_id, reference_image, mime_type)
        return success_response('Image generated successfully', GenerationSerializer(artifact).data)


class GenerateTextView(PipelineView):
    def post(self, request):
        artifact = self.get_orchestrator().generate_from_text(self.request_payload(request).get('prompt'))
        return success_response(
            'Image generated successfully from text', TextGenerationSerializer(artifact).data
        )


class ConnectionTestView(PipelineView):
    def get(self, request):
        connection = self.get_orchestrator().gateway.test_connection()
        if connection.connected:
            return success_response('Gemini API connection successful', {'connected': True})
        return failure_response(
            'Gemini API connection failed', 'CONNECTION_FAILED',
            data={'connected': False}, detail=connection.error,
        )


class PromptListView(PipelineView):
    def get(self, request):
        prompts = self.get_orchestrator().list_prompts()
        return success_response('Prompts retrieved successfully', PromptSerializer(prompts, many=True).data)


class GeneratedImageListView(PipelineView):
    def get(self, request):
        artifacts = self.get_orchestrator().list_generated_artifacts()
        return success_response(
            'Generated images retrieved successfully',
            GeneratedImageSerializer(artifacts, many=True).data,
            count=len(artifacts),
        )


class DebugView(PipelineView):
    def get(self, request):
        return success_response('Debug information retrieved', self.get_orchestrator().get_diagnostics())


class ImageUploadView(PipelineView):
    def post(self, request):
        data = self.request_payload(request)
        document = self.get_library().upload(
            prompt_id=data.get('promptId'),
            prompt_name=data.get('promptName'),
            prompt_text=data.get('prompt'),
            image_file=request.FILES.get('aiImage'),
            image_data=data.get('aiImage') if 'aiImage' not in request.FILES else None,
        )
        return success_response(
            'Image uploaded and converted to base64 successfully',
            ImageSummarySerializer(document).data,
            status_code=status.HTTP_201_CREATED,
        )


class ImageListView(PipelineView):
    def get(self, request):
        images = self.get_library().list_images()
        # parallel arrays, not a list of records
        return success_response(
            'Images retrieved successfully',
            promptId=[img['prompt_id'] for img in images],
            aiImage=[img['reference_image_data'] for img in images],
            count=len(images),
        )


class ImageDetailView(PipelineView):
    def get(self, request, image_id):
        image = self.get_library().get_image(image_id)
        return success_response('Image retrieved successfully', ImageSerializer(image).data)

    def delete(self, request, image_id):
        self.get_library().delete_image(image_id)
        return success_response('Image deleted successfully')


class PromptImagesView(PipelineView):
    def get(self, request, prompt_id):
        images = self.get_library().images_for_prompt(prompt_id)
        return success_response(
            'Images retrieved successfully by promptId',
            ImageSerializer(images, many=True).data,
            count=len(images),
        )


class HealthView(PipelineView):
    def get(self, request):
        database = self.get_library().store.ping()
        payload = {'status': 'OK', 'timestamp': timezone.now().isoformat(), 'database': database}
        if database['status'] == 'healthy':
            return success_response('Service healthy', payload)
        payload['status'] = 'ERROR'
        return failure_response('Service unhealthy', 'UNHEALTHY', data=payload)
