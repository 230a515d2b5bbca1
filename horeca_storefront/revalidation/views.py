# revalidation/views.py

from __future__ import annotations

import logging

from django.utils import timezone
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

from revalidation.services.webhook import (
    InvalidPayloadError,
    UnknownEventError,
    WebhookConfigError,
    handle_event,
    parse_event,
    verify_signature,
)

logger = logging.getLogger(__name__)


def _server_error():
    return Response(
        {"error": "Internal server error"},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


class WebhookThrottle(AnonRateThrottle):
    scope = "webhook"


class RevalidateWebhookView(APIView):
    """
    POST /api/revalidate/   signed catalog change event
    GET  /api/revalidate/   liveness check
    """

    permission_classes = [AllowAny]
    throttle_classes = [WebhookThrottle]

    @extend_schema(
        tags=["Revalidation"],
        request=None,
        responses={
            200: OpenApiResponse(description="Cache invalidated"),
            400: OpenApiResponse(description="Invalid payload / unknown event type"),
            401: OpenApiResponse(description="Invalid signature"),
        },
    )
    def post(self, request, *args, **kwargs):
        raw_body = getattr(request, "body", b"") or b""
        signature = request.headers.get("x-webhook-signature")

        try:
            verified = verify_signature(raw_body=raw_body, signature=signature)
        except WebhookConfigError:
            logger.exception("Webhook secret is not configured")
            return _server_error()

        if not verified:
            logger.warning("Invalid webhook signature")
            return Response({"error": "Invalid signature"}, status=status.HTTP_401_UNAUTHORIZED)

        try:
            event = parse_event(raw_body)
        except InvalidPayloadError:
            logger.warning("Invalid webhook payload")
            return Response({"error": "Invalid payload"}, status=status.HTTP_400_BAD_REQUEST)

        logger.info("Webhook received", extra={"event_type": event.type})

        try:
            paths = handle_event(event)
        except UnknownEventError:
            logger.warning("Unknown event type", extra={"event_type": event.type})
            return Response({"error": "Unknown event type"}, status=status.HTTP_400_BAD_REQUEST)
        except Exception:
            logger.exception("Webhook error", extra={"event_type": event.type})
            return _server_error()

        return Response(
            {
                "success": True,
                "message": f"Cache invalidated for {event.type}",
                "revalidated": timezone.now().isoformat(),
                "paths": paths,
            },
            status=status.HTTP_200_OK,
        )

    @extend_schema(tags=["Revalidation"])
    def get(self, request, *args, **kwargs):
        return Response(
            {
                "status": "ok",
                "message": "Revalidation webhook endpoint is active",
                "timestamp": timezone.now().isoformat(),
            }
        )
