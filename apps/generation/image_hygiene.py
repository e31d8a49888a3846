from PIL import Image, UnidentifiedImageError
import io
import os
from django.conf import settings
from apps.errors import ValidationError

ALLOWED_EXTENSIONS = {'.jpeg', '.jpg', '.png', '.gif', '.webp'}
ALLOWED_FORMATS = {'JPEG', 'PNG', 'GIF', 'WEBP'}


def check_upload(image_bytes: bytes, filename: str, content_type: str) -> str:
    """Check an uploaded reference image (size, type, decodable). Returns its MIME type."""

    if len(image_bytes) > settings.PIXORA_MAX_UPLOAD_BYTES:
        limit_mb = settings.PIXORA_MAX_UPLOAD_BYTES // (1024 * 1024)
        raise ValidationError(f"File too large. Maximum size is {limit_mb}MB", code="FILE_SIZE_ERROR")

    extension = os.path.splitext(filename or '')[1].lower()
    subtype = (content_type or '').split('/')[-1].lower()
    if extension not in ALLOWED_EXTENSIONS or f'.{subtype}' not in ALLOWED_EXTENSIONS:
        raise ValidationError("Only image files (JPEG, PNG, GIF, WebP) are allowed!", code="INVALID_FILE_TYPE")

    try:
        img = Image.open(io.BytesIO(image_bytes))
        img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ValidationError(f"Invalid image: {e}", code="INVALID_FILE_TYPE")

    if img.format not in ALLOWED_FORMATS:
        raise ValidationError("Only image files (JPEG, PNG, GIF, WebP) are allowed!", code="INVALID_FILE_TYPE")

    return Image.MIME.get(img.format, content_type)
