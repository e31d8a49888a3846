from django.urls import include, path
from apps.api.views import HealthView

urlpatterns = [
    path('health', HealthView.as_view(), name='health'),
    path('api/', include('apps.api.urls')),
]

handler404 = 'apps.api.exceptions.not_found'
handler500 = 'apps.api.exceptions.server_error'
