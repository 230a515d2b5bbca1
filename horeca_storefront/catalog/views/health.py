# catalog/views/health.py

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from catalog.services.api_client import get_client
from catalog.services.exceptions import StorefrontServiceError


@extend_schema(
    tags=["Storefront"],
    responses={
        200: {
            "type": "object",
            "properties": {
                "status": {"type": "string"},
                "backend": {"type": "string"},
            },
        },
        503: {
            "type": "object",
            "properties": {
                "status": {"type": "string"},
                "backend": {"type": "string"},
                "error": {"type": "string"},
            },
        },
    },
)
@api_view(["GET"])
@permission_classes([AllowAny])
@throttle_classes([])
def health_check(request):
    """
    Minimal operational endpoint:
    - Confirms the storefront is responding
    - Confirms the backend REST API answers its own health check
    """
    try:
        get_client().health_check()
        return Response({"status": "ok", "backend": "ok"})
    except StorefrontServiceError as e:
        return Response(
            {"status": "degraded", "backend": "down", "error": str(e)}, status=503
        )
