from rest_framework import serializers

from core.serializers import BaseModelSerializer

from .models import UrlMetadataCache


class UrlMetadataCacheSerializer(BaseModelSerializer):
    is_popular = serializers.BooleanField(read_only=True)
    is_expired = serializers.BooleanField(read_only=True)

    class Meta(BaseModelSerializer.Meta):
        model = UrlMetadataCache
        fields = [
            "id",
            "url",
            "normalized_url",
            "url_hash",
            "title",
            "description",
            "image_url",
            "price",
            "currency",
            "platform",
            "extraction_method",
            "hit_count",
            "is_popular",
            "is_expired",
            "extracted_at",
            "last_accessed_at",
            "expires_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class UrlMetadataCacheDetailSerializer(UrlMetadataCacheSerializer):
    decoded_metadata = serializers.SerializerMethodField()

    class Meta(UrlMetadataCacheSerializer.Meta):
        fields = UrlMetadataCacheSerializer.Meta.fields + ["metadata", "decoded_metadata"]
        read_only_fields = fields

    def get_decoded_metadata(self, obj):
        return obj.to_metadata()


class ClearCacheRequestSerializer(serializers.Serializer):
    confirm = serializers.BooleanField(
        required=False,
        default=False,
        help_text="Must be true; the cache is left untouched otherwise.",
    )


class CleanupRequestSerializer(serializers.Serializer):
    max_size = serializers.IntegerField(
        required=False,
        min_value=0,
        help_text="Override the configured size cap for this run.",
    )


class MetadataRequestSerializer(serializers.Serializer):
    """Request payload for the metadata lookup endpoint."""

    url = serializers.CharField(
        max_length=2048,
        help_text="Product or page URL; the scheme may be omitted.",
    )
    force = serializers.BooleanField(
        required=False,
        default=False,
        help_text="Skip the cache and re-extract.",
    )

    def validate_url(self, value):
        if not value or not value.strip():
            raise serializers.ValidationError("URL must not be blank.")
        return value.strip()
