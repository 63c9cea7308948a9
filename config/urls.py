"""URL configuration for the challan tracker.

Versioned API routes live under ``/api/v1/``; schema and Swagger UI under ``/api/``.
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from .health import health

admin.site.site_header = "Challan Tracker Admin"
admin.site.index_title = "Admin"


class ScopedTokenObtainPairView(TokenObtainPairView):
    throttle_scope = "token"


urlpatterns = [
    path("admin/", admin.site.urls),
    # API schema and Swagger UI
    path("api/schema/", SpectacularAPIView.as_view(), name="api-schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="api-schema"), name="api-docs"),
    # Healthcheck
    path("health/", health, name="health"),
    # JWT for write endpoints
    path("api/v1/auth/token/", ScopedTokenObtainPairView.as_view(), name="token-obtain"),
    path("api/v1/auth/token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),
    # Versioned v1 routes only
    path("api/v1/locations/", include("locations.urls")),
    path("api/v1/challans/", include("challans.urls")),
    path("api/v1/inventory/", include("inventory.urls")),
    path("api/v1/documents/", include("documents.urls")),
    path("api/v1/tickets/", include("tickets.urls")),
]
