"""
URL configuration for the impression service.

    /                      service index
    /api/v1/impressions/   record (POST) and list (GET) impressions
    /api/schema/           OpenAPI schema
    /api/docs/             Swagger UI
"""

from django.urls import path
from django.urls import include
from django.http import JsonResponse
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView


def home_view(request):
    return JsonResponse({
        "message": "Ad Impression Service API",
        "status": "running",
        "endpoints": {
            "impressions": "/api/v1/impressions/",
            "docs": "/api/docs/",
            "schema": "/api/schema/"
        }
    })


urlpatterns = [
    path("", home_view, name="home"),
    path("api/v1/", include("apps.impressions.urls")),
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
]
