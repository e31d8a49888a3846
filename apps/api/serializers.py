from rest_framework import serializers


class ImageSummarySerializer(serializers.Serializer):
    """Stored reference image without its payload."""

    id = serializers.CharField(source='image_id')
    promptId = serializers.CharField(source='prompt_id')
    promptName = serializers.CharField(source='prompt_name')
    prompt = serializers.CharField(source='prompt_text')
    originalName = serializers.CharField(source='original_file_name')
    size = serializers.IntegerField(source='byte_size')
    mimetype = serializers.CharField(source='mime_type')
    uploadedAt = serializers.DateTimeField(source='uploaded_at')


class ImageSerializer(ImageSummarySerializer):
    base64Image = serializers.CharField(source='reference_image_data')


class PromptSerializer(serializers.Serializer):
    id = serializers.CharField(source='prompt_id')
    promptName = serializers.CharField(source='prompt_name')
    prompt = serializers.CharField(source='prompt_text')
    createdAt = serializers.DateTimeField(source='uploaded_at')


class GeneratedImageSerializer(serializers.Serializer):
    id = serializers.CharField(source='artifact_id')
    promptId = serializers.CharField(source='prompt_id', allow_null=True)
    promptName = serializers.CharField(source='prompt_name')
    prompt = serializers.CharField(source='prompt_text')
    base64Image = serializers.CharField(source='result_image_data')
    originalName = serializers.CharField(source='original_file_name')
    size = serializers.IntegerField(source='byte_size')
    mimetype = serializers.CharField(source='mime_type')
    model = serializers.CharField(source='model_name')
    responseText = serializers.CharField(source='response_text')
    type = serializers.CharField(source='source_type')
    createdAt = serializers.DateTimeField(source='created_at')


class GenerationSerializer(serializers.Serializer):
    imageId = serializers.CharField(source='artifact_id')
    promptId = serializers.CharField(source='prompt_id')
    promptName = serializers.CharField(source='prompt_name')
    base64Image = serializers.CharField(source='result_image_data')
    createdAt = serializers.DateTimeField(source='created_at')


class TextGenerationSerializer(serializers.Serializer):
    imageId = serializers.CharField(source='artifact_id')
    prompt = serializers.CharField(source='prompt_text')
    base64Image = serializers.CharField(source='result_image_data')
    createdAt = serializers.DateTimeField(source='created_at')
