import logging
import os

from django.conf import settings
from django.http import FileResponse
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django_filters.rest_framework import DjangoFilterBackend
from drf_yasg import openapi
from drf_yasg.inspectors import SwaggerAutoSchema
from drf_yasg.utils import swagger_auto_schema
from rest_framework import filters, generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

import pandas as pd

from core.enums import CacheSort, Platform
from core.exceptions import (
    ConfirmationRequiredError,
    ExtractionExecutionError,
    ExtractorConfigurationError,
)

from .filters import UrlMetadataCacheFilter
from .models import UrlMetadataCache
from .pagination import CachePagination
from .serializers import (
    CleanupRequestSerializer,
    ClearCacheRequestSerializer,
    MetadataRequestSerializer,
    UrlMetadataCacheDetailSerializer,
    UrlMetadataCacheSerializer,
)
from .services import cache as cache_service
from .services.metadata import get_metadata

logger = logging.getLogger(__name__)

ORDERING_FIELDS = ["hit_count", "last_accessed_at", "expires_at", "created_at", "platform"]


class CacheListSchema(SwaggerAutoSchema):
    def get_query_parameters(self):
        params = list(super().get_query_parameters())

        ordering_enum = []
        for field in getattr(self.view, "ordering_fields", []) or []:
            ordering_enum.append(field)
            ordering_enum.append(f"-{field}")

        updated = []
        for p in params:
            if p.name == "ordering":
                updated.append(
                    openapi.Parameter(
                        name="ordering",
                        in_=openapi.IN_QUERY,
                        type=openapi.TYPE_STRING,
                        description=p.description or "Ordering of results (overrides sort).",
                        required=False,
                        enum=ordering_enum or None,
                    )
                )
                continue

            if p.name == "platform":
                p.enum = [choice.value for choice in Platform]

            updated.append(p)

        updated.append(
            openapi.Parameter(
                name="sort",
                in_=openapi.IN_QUERY,
                type=openapi.TYPE_STRING,
                description="Preset sort: hits (default), recent, created.",
                required=False,
                enum=[choice.value for choice in CacheSort],
            )
        )
        return updated


class CacheQuerysetMixin:
    """Filtering and the ``sort`` presets shared by the listing and the CSV export."""

    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_class = UrlMetadataCacheFilter
    ordering_fields = ORDERING_FIELDS
    swagger_schema = CacheListSchema

    def get_queryset(self):
        queryset = UrlMetadataCache.objects.all()
        if getattr(self, "swagger_fake_view", False):
            return queryset.none()
        sort = CacheSort.from_string(self.request.query_params.get("sort"))
        if sort is CacheSort.RECENT:
            return queryset.recently_accessed()
        if sort is CacheSort.CREATED:
            return queryset.order_by("-created_at", "-id")
        return queryset.most_popular()


class UrlCacheListView(CacheQuerysetMixin, generics.ListAPIView):
    """
    Admin listing of cached URL metadata.

    Filtering:
    - /?platform=amazon
    - /?popular=true, /?expired=true, /?valid=true
    - /?search=query (normalized URL, URL, title)
    - /?min_hits=10

    Sorting:
    - /?sort=hits|recent|created
    - /?ordering=-expires_at (takes precedence over sort)
    """

    serializer_class = UrlMetadataCacheSerializer
    pagination_class = CachePagination
    permission_classes = [permissions.IsAdminUser]

    @swagger_auto_schema(
        operation_summary="List cache entries",
        operation_description="List cached URL metadata with filtering, sorting and pagination.",
        tags=["URL cache"],
        responses={200: UrlMetadataCacheSerializer(many=True)},
    )
    def get(self, *args, **kwargs):  # type: ignore[override]
        return super().get(*args, **kwargs)


class UrlCacheStatisticsView(APIView):
    permission_classes = [permissions.IsAdminUser]

    @swagger_auto_schema(
        operation_summary="Cache statistics",
        operation_description="Aggregate report over the whole cache table.",
        tags=["URL cache"],
        responses={200: "Statistics report"},
    )
    def get(self, request, *args, **kwargs):
        return Response(cache_service.statistics())


class UrlCacheDetailView(generics.RetrieveDestroyAPIView):
    queryset = UrlMetadataCache.objects.all()
    serializer_class = UrlMetadataCacheDetailSerializer
    permission_classes = [permissions.IsAdminUser]

    @swagger_auto_schema(
        operation_summary="Retrieve cache entry",
        operation_description="Retrieve one cache entry with its decoded metadata.",
        tags=["URL cache"],
        responses={200: UrlMetadataCacheDetailSerializer},
    )
    def get(self, *args, **kwargs):  # type: ignore[override]
        return super().get(*args, **kwargs)

    @swagger_auto_schema(
        operation_summary="Delete cache entry",
        tags=["URL cache"],
        responses={204: "Deleted"},
    )
    def delete(self, *args, **kwargs):  # type: ignore[override]
        return super().delete(*args, **kwargs)

    def perform_destroy(self, instance):
        url = instance.url
        super().perform_destroy(instance)
        logger.info("Cache entry deleted for %s", url)


class UrlCacheRefreshView(APIView):
    permission_classes = [permissions.IsAdminUser]

    @swagger_auto_schema(
        operation_summary="Refresh cache entry",
        operation_description="Queue a background re-extraction for one entry.",
        tags=["URL cache"],
        request_body=openapi.Schema(type=openapi.TYPE_OBJECT, properties={}),
        responses={202: "Refresh queued"},
    )
    def post(self, request, *args, **kwargs):
        entry = get_object_or_404(UrlMetadataCache, pk=kwargs["pk"])
        cache_service.refresh_entry(entry)
        return Response(
            {"detail": f"Cache refresh queued for {entry.url}", "id": entry.pk},
            status=status.HTTP_202_ACCEPTED,
        )


class UrlCacheCleanupView(APIView):
    permission_classes = [permissions.IsAdminUser]

    @swagger_auto_schema(
        operation_summary="Run cache cleanup",
        operation_description="Delete expired entries and evict the least popular ones above the size cap.",
        tags=["URL cache"],
        request_body=CleanupRequestSerializer,
        responses={200: "Removed entry counts"},
    )
    def post(self, request, *args, **kwargs):
        serializer = CleanupRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = cache_service.cleanup(max_size=serializer.validated_data.get("max_size"))
        return Response({"detail": "Cache cleanup completed", **result.to_dict()})


class UrlCacheWarmView(APIView):
    permission_classes = [permissions.IsAdminUser]

    @swagger_auto_schema(
        operation_summary="Warm popular cache entries",
        operation_description="Queue re-extraction of popular entries that have expired.",
        tags=["URL cache"],
        request_body=openapi.Schema(type=openapi.TYPE_OBJECT, properties={}),
        responses={202: "Number of queued entries"},
    )
    def post(self, request, *args, **kwargs):
        queued = cache_service.warm_popular_expired()
        return Response(
            {"detail": f"Warming {queued} popular cache entries", "queued": queued},
            status=status.HTTP_202_ACCEPTED,
        )


class UrlCacheClearView(APIView):
    permission_classes = [permissions.IsAdminUser]

    @swagger_auto_schema(
        operation_summary="Clear the whole cache",
        operation_description="Delete every cache entry. Requires confirm=true.",
        tags=["URL cache"],
        request_body=ClearCacheRequestSerializer,
        responses={200: "Number of removed entries", 400: "Confirmation required"},
    )
    def post(self, request, *args, **kwargs):
        serializer = ClearCacheRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            removed = cache_service.clear_all(confirm=serializer.validated_data["confirm"])
        except ConfirmationRequiredError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response({"detail": f"Cleared {removed} cache entries", "removed": removed})


class UrlCacheExportCsvView(CacheQuerysetMixin, generics.ListAPIView):
    """Export filtered cache entries to CSV."""

    serializer_class = UrlMetadataCacheSerializer
    permission_classes = [permissions.IsAdminUser]

    @swagger_auto_schema(
        operation_summary="Export cache entries to CSV",
        operation_description="Export cache entries to a CSV file (supports the same filters as listing).",
        tags=["Export"],
        responses={200: "CSV file"},
    )
    def get(self, request, *args, **kwargs):
        fields = [
            "id",
            "url",
            "normalized_url",
            "url_hash",
            "title",
            "price",
            "currency",
            "platform",
            "extraction_method",
            "hit_count",
            "extracted_at",
            "last_accessed_at",
            "expires_at",
            "created_at",
        ]

        queryset = self.filter_queryset(self.get_queryset()).values(*fields)
        records = []
        for entry in queryset:
            record = {}
            for field in fields:
                value = entry.get(field)
                if hasattr(value, "isoformat"):
                    value = value.isoformat()
                record[field] = value
            records.append(record)

        df = pd.DataFrame(records, columns=fields)

        timestamp = timezone.now().strftime("%Y%m%d_%H%M%S")
        file_name = f"url_cache_{timestamp}.csv"
        temp_file_path = os.path.join(settings.TEMP_DIR, file_name)

        df.to_csv(temp_file_path, index=False)

        file_handle = open(temp_file_path, "rb")
        return FileResponse(file_handle, as_attachment=True, filename=file_name)


class MetadataLookupView(generics.GenericAPIView):
    """Cache-aside metadata lookup used by the application."""

    serializer_class = MetadataRequestSerializer
    permission_classes = [permissions.IsAuthenticated]

    @swagger_auto_schema(
        operation_summary="Get URL metadata",
        operation_description="Return cached metadata for a URL, extracting and caching it on a miss.",
        tags=["Metadata"],
        request_body=MetadataRequestSerializer,
        responses={200: "Metadata", 400: "Invalid request", 502: "Extraction failed"},
    )
    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            metadata = get_metadata(
                serializer.validated_data["url"],
                force=serializer.validated_data["force"],
            )
        except ExtractorConfigurationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except ExtractionExecutionError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_502_BAD_GATEWAY)

        return Response(metadata, status=status.HTTP_200_OK)
