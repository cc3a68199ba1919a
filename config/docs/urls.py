"""Swagger and ReDoc documentation endpoints."""

import os

from django.urls import path, re_path
from drf_yasg import openapi
from drf_yasg.views import get_schema_view
from rest_framework import permissions

schema_view = get_schema_view(
    openapi.Info(
        title="Metacache API",
        default_version="v1",
        description="""
        # Metacache API Documentation

        Database-backed cache of product page metadata (title, description,
        image, price, currency, platform) keyed by normalized URL.

        ## API Organization

        ### Metadata
        - **Metadata** - Look up metadata for a URL, extracting and caching it on a miss

        ### URL cache (staff only)
        - **URL cache** - List, inspect, refresh and delete entries; statistics,
          cleanup, warming of popular entries and clear-all

        ### Export
        - **Export** - Export filtered cache entries to CSV
        """,
        license=openapi.License(name="BSD License"),
    ),
    url=os.getenv("SWAGGER_DEFAULT_API_URL", "http://localhost"),
    public=True,
    permission_classes=[permissions.AllowAny],
)

urlpatterns = [
    path("api/doc/", schema_view.with_ui("swagger", cache_timeout=0), name="schema-swagger-ui"),
    path("api/redoc/", schema_view.with_ui("redoc", cache_timeout=0), name="schema-redoc"),
    re_path(r"^api/doc(?P<format>\.json|\.yaml)$", schema_view.without_ui(cache_timeout=0), name="schema-json"),
]
