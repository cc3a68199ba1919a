from rest_framework import serializers


class BaseModelSerializer(serializers.ModelSerializer):
    """Model serializer with the bookkeeping columns locked down."""

    class Meta:
        read_only_fields = ("id", "created_at", "updated_at")
