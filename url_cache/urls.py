from django.urls import path

from .views import (
    MetadataLookupView,
    UrlCacheCleanupView,
    UrlCacheClearView,
    UrlCacheDetailView,
    UrlCacheExportCsvView,
    UrlCacheListView,
    UrlCacheRefreshView,
    UrlCacheStatisticsView,
    UrlCacheWarmView,
)

urlpatterns = [
    path("metadata/", MetadataLookupView.as_view(), name="metadata-lookup"),
    path("admin/url-cache/", UrlCacheListView.as_view(), name="url-cache-list"),
    path("admin/url-cache/stats/", UrlCacheStatisticsView.as_view(), name="url-cache-stats"),
    path("admin/url-cache/cleanup/", UrlCacheCleanupView.as_view(), name="url-cache-cleanup"),
    path("admin/url-cache/warm/", UrlCacheWarmView.as_view(), name="url-cache-warm"),
    path("admin/url-cache/clear/", UrlCacheClearView.as_view(), name="url-cache-clear"),
    path("admin/url-cache/export-csv/", UrlCacheExportCsvView.as_view(), name="url-cache-export-csv"),
    path("admin/url-cache/<int:pk>/", UrlCacheDetailView.as_view(), name="url-cache-detail"),
    path("admin/url-cache/<int:pk>/refresh/", UrlCacheRefreshView.as_view(), name="url-cache-refresh"),
]
