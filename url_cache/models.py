from typing import Any, Dict

from django.core.serializers.json import DjangoJSONEncoder
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from core.models import TimeStampedModel

from . import conf


class UrlMetadataCacheQuerySet(models.QuerySet):
    def valid(self):
        return self.filter(expires_at__gt=timezone.now())

    def expired(self):
        return self.filter(expires_at__lte=timezone.now())

    def popular(self):
        return self.filter(hit_count__gte=conf.popularity_threshold())

    def by_platform(self, platform: str):
        return self.filter(platform=platform)

    def recently_accessed(self):
        return self.order_by(models.F("last_accessed_at").desc(nulls_last=True), "-id")

    def most_popular(self):
        return self.order_by("-hit_count", "-id")

    def eviction_order(self):
        """Least popular first, then least recently read (never-read rows first)."""
        return self.order_by(
            "hit_count",
            models.F("last_accessed_at").asc(nulls_first=True),
            "id",
        )


class UrlMetadataCache(TimeStampedModel):
    url = models.CharField(max_length=2048, db_index=True)
    normalized_url = models.CharField(max_length=2048, db_index=True)
    url_hash = models.CharField(max_length=64, unique=True)

    title = models.CharField(max_length=500, null=True, blank=True)
    description = models.TextField(null=True, blank=True)
    image_url = models.CharField(max_length=2048, null=True, blank=True)

    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
    )
    currency = models.CharField(max_length=3, null=True, blank=True)
    platform = models.CharField(max_length=50, null=True, blank=True, db_index=True)
    extraction_method = models.CharField(max_length=100, null=True, blank=True)

    metadata = models.JSONField(default=dict, blank=True, encoder=DjangoJSONEncoder)

    hit_count = models.PositiveIntegerField(default=0)
    extracted_at = models.DateTimeField(null=True, blank=True)
    last_accessed_at = models.DateTimeField(null=True, blank=True)
    expires_at = models.DateTimeField(null=True, blank=True, db_index=True)

    objects = UrlMetadataCacheQuerySet.as_manager()

    class Meta(TimeStampedModel.Meta):
        db_table = "url_metadata_caches"
        ordering = ["-hit_count", "-id"]
        indexes = [
            models.Index(
                fields=["hit_count", "last_accessed_at"],
                name="idx_url_caches_popularity",
            ),
            models.Index(fields=["url", "expires_at"], name="idx_url_caches_url_expiry"),
        ]

    def __str__(self) -> str:
        return self.normalized_url or self.url

    def save(self, *args, **kwargs):
        if self._state.adding:
            self._apply_creation_defaults()
        super().save(*args, **kwargs)

    def _apply_creation_defaults(self) -> None:
        now = timezone.now()
        if self.extracted_at is None:
            self.extracted_at = now
        if self.expires_at is None:
            self.expires_at = now + conf.default_duration()
        if self.hit_count is None:
            self.hit_count = 0

    @property
    def is_popular(self) -> bool:
        return (self.hit_count or 0) >= conf.popularity_threshold()

    @property
    def is_expired(self) -> bool:
        return self.expires_at is not None and self.expires_at <= timezone.now()

    @property
    def is_valid(self) -> bool:
        return self.expires_at is not None and self.expires_at > timezone.now()

    def to_metadata(self) -> Dict[str, Any]:
        """Projection returned to callers; typed columns win over the raw payload."""
        payload: Dict[str, Any] = dict(self.metadata or {})
        payload.update(
            {
                "title": self.title,
                "description": self.description,
                "image": self.image_url,
                "price": self.price,
                "currency": self.currency,
                "platform": self.platform,
                "cached": True,
                "cached_at": self.extracted_at,
                "cache_expires_at": self.expires_at,
            }
        )
        return payload
