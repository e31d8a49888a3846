from django.urls import path
from .views import (
    ConnectionTestView,
    DebugView,
    GeneratedImageListView,
    GenerateTextView,
    GenerateView,
    ImageDetailView,
    ImageListView,
    ImageUploadView,
    PromptImagesView,
    PromptListView,
)

urlpatterns = [
    path('images/upload', ImageUploadView.as_view(), name='image-upload'),
    path('images', ImageListView.as_view(), name='image-list'),
    path('images/getAllImages', ImageListView.as_view(), name='image-list-all'),
    path('images/prompt/<str:prompt_id>', PromptImagesView.as_view(), name='prompt-images'),
    path('images/<str:image_id>', ImageDetailView.as_view(), name='image-detail'),
    path('gemini/generate', GenerateView.as_view(), name='generate'),
    path('gemini/generate-text', GenerateTextView.as_view(), name='generate-text'),
    path('gemini/test', ConnectionTestView.as_view(), name='gemini-test'),
    path('gemini/prompts', PromptListView.as_view(), name='prompts'),
    path('gemini/generated-images', GeneratedImageListView.as_view(), name='generated-images'),
    path('gemini/debug', DebugView.as_view(), name='debug'),
]
