from rest_framework import status
from rest_framework.response import Response


def success_response(message, data=None, status_code=status.HTTP_200_OK, **extra):
    payload = {"success": True, "message": message}
    if data is not None:
        payload["data"] = data
    payload.update(extra)
    return Response(payload, status=status_code)


def failure_response(message, code, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, **extra):
    payload = {"success": False, "message": message, "error": code}
    payload.update(extra)
    return Response(payload, status=status_code)


def error_response(exc):
    """Envelope for a PixoraError; the code is what clients branch on."""
    return Response(exc.as_payload(), status=exc.status_code)
