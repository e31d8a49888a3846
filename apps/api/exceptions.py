import logging

from django.http import JsonResponse
from rest_framework.views import exception_handler

from apps.errors import PixoraError
from .responses import error_response, failure_response

logger = logging.getLogger(__name__)


def envelope_exception_handler(exc, context):
    """
    DRF EXCEPTION_HANDLER. Every failure leaves as a JSON envelope; tracebacks
    go to the log only.
    """
    view = context.get('view')
    view_name = type(view).__name__ if view else 'unknown view'

    if isinstance(exc, PixoraError):
        log = logger.warning if exc.status_code < 500 else logger.error
        log("%s failed with %s: %s", view_name, exc.code, exc.message)
        return error_response(exc)

    response = exception_handler(exc, context)
    if response is not None:
        code = getattr(exc, 'default_code', 'error').upper()
        detail = getattr(exc, 'detail', None)
        message = str(detail) if isinstance(detail, str) else str(exc)
        return failure_response(message, code, status_code=response.status_code)

    logger.exception("Unhandled error in %s", view_name)
    return failure_response('Internal server error', 'INTERNAL_ERROR')


def not_found(request, exception=None):
    return JsonResponse(
        {'success': False, 'message': 'Route not found', 'error': 'NOT_FOUND'}, status=404
    )


def server_error(request):
    return JsonResponse(
        {'success': False, 'message': 'Internal server error', 'error': 'INTERNAL_ERROR'}, status=500
    )
