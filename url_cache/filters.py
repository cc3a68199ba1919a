import django_filters
from django.db.models import Q

from .models import UrlMetadataCache


class UrlMetadataCacheFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method="filter_search")
    platform = django_filters.CharFilter(field_name="platform", lookup_expr="iexact")
    popular = django_filters.BooleanFilter(method="filter_popular")
    expired = django_filters.BooleanFilter(method="filter_expired")
    valid = django_filters.BooleanFilter(method="filter_valid")
    min_hits = django_filters.NumberFilter(field_name="hit_count", lookup_expr="gte")

    class Meta:
        model = UrlMetadataCache
        fields = {
            "currency": ["exact"],
            "extraction_method": ["exact"],
            "expires_at": ["gte", "lte"],
            "created_at": ["gte", "lte"],
        }

    def filter_search(self, queryset, name, value):
        """Search in URL and title."""
        return queryset.filter(
            Q(normalized_url__icontains=value) |
            Q(url__icontains=value) |
            Q(title__icontains=value)
        )

    def filter_popular(self, queryset, name, value):
        if value is True:
            return queryset.popular()
        return queryset

    def filter_expired(self, queryset, name, value):
        if value is True:
            return queryset.expired()
        return queryset

    def filter_valid(self, queryset, name, value):
        if value is True:
            return queryset.valid()
        return queryset
