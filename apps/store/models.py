from django.db import models
from django.utils import timezone
import uuid


def new_identity():
    return str(uuid.uuid4())


class ReferenceImage(models.Model):
    """An uploaded reference image and the prompt it belongs to (`images`)."""

    seq = models.BigAutoField(primary_key=True)
    image_id = models.CharField(max_length=64, default=new_identity, db_index=True)
    prompt_id = models.CharField(max_length=255, db_index=True)
    prompt_name = models.CharField(max_length=255)
    prompt_text = models.TextField()
    reference_image_data = models.TextField()  # base64 or data: URL
    original_file_name = models.CharField(max_length=255, default='uploaded-image')
    byte_size = models.PositiveIntegerField(default=0)
    mime_type = models.CharField(max_length=100, default='image/jpeg')
    uploaded_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'images'
        ordering = ['seq']

    def __str__(self):
        return f"{self.image_id} - {self.prompt_id}"


class GeneratedImage(models.Model):
    """An image produced by a generation call (`generated_images`)."""

    seq = models.BigAutoField(primary_key=True)
    artifact_id = models.CharField(max_length=64, default=new_identity, unique=True)
    prompt_id = models.CharField(max_length=255, null=True, blank=True, db_index=True)
    prompt_name = models.CharField(max_length=255)
    prompt_text = models.TextField()
    result_image_data = models.TextField()
    original_file_name = models.CharField(max_length=255, default='ai-generated-image.jpg')
    byte_size = models.PositiveIntegerField(default=0)
    mime_type = models.CharField(max_length=100, default='image/jpeg')
    model_name = models.CharField(max_length=100, blank=True, default='')
    response_text = models.TextField(blank=True, default='')
    source_type = models.CharField(max_length=20, default='generated', editable=False)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'generated_images'
        ordering = ['seq']

    def __str__(self):
        return f"{self.artifact_id} - {self.prompt_name}"
