# backend/urls.py
"""
PROJECT URLS

All API routes live under /api/

Public storefront endpoints (AllowAny, throttled):
- /api/checkout/, /api/orders/..., /api/track/...
- /api/coupons/<code>/ (validation)
- /api/payments/mercadopago/webhook/ (signed by Mercado Pago)

Staff endpoints (JWT, is_staff):
- /api/admin/orders/..., /api/admin/stats/, /api/coupons/

Ops:
- /api/health/ (AllowAny) pings the default database.
- Django admin is mounted at ADMIN_PATH, outside /api/.
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.contrib import admin
from django.db import connections
from django.db.utils import DatabaseError, OperationalError
from django.urls import include, path
from django.views.generic import RedirectView
from drf_spectacular.utils import extend_schema
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from orders.views.checkout import CheckoutView
from orders.views.order import OrderTrackView

logger = logging.getLogger("backend")


# ------------------ API ROOT (PUBLIC) ------------------
@extend_schema(
    responses={
        200: {
            "type": "object",
            "properties": {
                "message": {"type": "string"},
                "auth": {"type": "object"},
                "docs": {"type": "object"},
                "modules": {"type": "object"},
            },
        }
    },
)
@api_view(["GET"])
@permission_classes([AllowAny])
def api_root(request):
    return Response(
        {
            "message": "Storefront Backend API is running",
            "auth": {
                "jwt_create": "/api/auth/jwt/create/",
                "jwt_refresh": "/api/auth/jwt/refresh/",
            },
            "docs": {
                "swagger": "/api/docs/",
                "schema": "/api/schema/",
            },
            "modules": {
                "checkout": "/api/checkout/",
                "orders": "/api/orders/",
                "track": "/api/track/<order_number>/",
                "coupons": "/api/coupons/",
                "admin": "/api/admin/",
                "payments": "/api/payments/",
            },
        }
    )


# ------------------ HEALTH CHECK (PUBLIC) ------------------
@extend_schema(
    responses={
        200: {
            "type": "object",
            "properties": {
                "status": {"type": "string"},
                "db": {"type": "string"},
            },
        },
        503: {
            "type": "object",
            "properties": {
                "status": {"type": "string"},
                "db": {"type": "string"},
                "error": {"type": "string"},
            },
        },
    },
)
@api_view(["GET"])
@permission_classes([AllowAny])
def health_check(request):
    """Liveness plus a `SELECT 1` against the default database."""
    try:
        with connections["default"].cursor() as cursor:
            cursor.execute("SELECT 1;")
            cursor.fetchone()
    except OperationalError as exc:
        logger.warning("Health check: database unreachable", extra={"error": str(exc)})
        return Response({"status": "degraded", "db": "down", "error": str(exc)}, status=503)
    except DatabaseError as exc:
        logger.exception("Health check: database query failed")
        return Response({"status": "degraded", "db": "error", "error": str(exc)}, status=503)
    return Response({"status": "ok", "db": "ok"})


# ------------------ DJANGO ADMIN ------------------
# ADMIN_PATH comes from the environment; /api/admin/ is the staff API, not this.
ADMIN_PATH = settings.ADMIN_PATH.rstrip("/") + "/"


# ------------------ API ROUTES (ALL UNDER /api/) ------------------
api_urlpatterns = [
    # Health check / root
    path("", api_root, name="api-root"),
    path("health/", health_check, name="health-check"),
    # OpenAPI / Swagger
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    path("docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    # JWT (SimpleJWT)
    path("auth/jwt/create/", TokenObtainPairView.as_view(), name="jwt-create"),
    path("auth/jwt/refresh/", TokenRefreshView.as_view(), name="jwt-refresh"),
    # Storefront
    path("checkout/", CheckoutView.as_view(), name="checkout"),
    path("orders/", include("orders.urls")),
    path("track/<str:order_number>/", OrderTrackView.as_view(), name="order-track"),
    path("coupons/", include("coupons.urls")),
    # Mercado Pago
    path("payments/", include("payments.urls")),
    # Staff
    path("admin/", include("orders.admin_urls")),
]

urlpatterns = [
    # Django admin (ADMIN_PATH)
    path(ADMIN_PATH, admin.site.urls),
    # Root convenience: visiting / takes you to Swagger docs
    path("", RedirectView.as_view(url="/api/docs/", permanent=False), name="root"),
    path("api/", include(api_urlpatterns)),
]
