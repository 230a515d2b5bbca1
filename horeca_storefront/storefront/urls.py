# storefront/urls.py
"""
PROJECT URLS

Storefront pages (server-rendered):
- catalog:   /, /category/<slug>/, /product/<slug>/, /search/
- cart:      /cart/..., /favorites/...
- accounts:  /login/, /account/, /dashboard/, /auth/callback/, password reset
- checkout:  /checkout/, /checkout/success/, /checkout/cancel/
- pages:     /about/, /services/, /privacy/, /terms/, /contact/

JSON routes live under /api/:
- cart + favorites, revalidation webhook, health, OpenAPI schema + docs
"""

from __future__ import annotations

from django.urls import include, path
from drf_spectacular.utils import extend_schema
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from catalog.views import health_check


# ------------------ API ROOT (PUBLIC) ------------------
@extend_schema(
    responses={
        200: {
            "type": "object",
            "properties": {
                "message": {"type": "string"},
                "docs": {"type": "object"},
                "endpoints": {"type": "object"},
            },
        }
    },
)
@api_view(["GET"])
@permission_classes([AllowAny])
def api_root(request):
    return Response(
        {
            "message": "HORECA Storefront API is running",
            "docs": {
                "swagger": "/api/docs/",
                "schema": "/api/schema/",
            },
            "endpoints": {
                "health": "/api/health/",
                "cart": "/api/cart/",
                "favorites": "/api/favorites/",
                "revalidate": "/api/revalidate/",
            },
        }
    )


# ------------------ API ROUTES (ALL UNDER /api/) ------------------
api_urlpatterns = [
    path("", api_root, name="api-root"),
    path("health/", health_check, name="health-check"),
    # OpenAPI / Swagger
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    # Cookie cart + favorites
    path("", include("cart.api_urls")),
    # Cache invalidation webhook
    path("", include("revalidation.urls")),
]

urlpatterns = [
    path("i18n/", include("django.conf.urls.i18n")),
    path("api/", include(api_urlpatterns)),
    path("", include("catalog.urls")),
    path("", include("cart.urls")),
    path("", include("accounts.urls")),
    path("", include("checkout.urls")),
    path("", include("pages.urls")),
]
