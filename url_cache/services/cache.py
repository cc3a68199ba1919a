"""Database-backed URL metadata cache.

Callers look metadata up with :func:`fetch`; on a miss they run an extractor
and persist the result with :func:`store`. Coordination between concurrent
workers relies on the database only: hit counters use ``F()`` expressions,
the popularity TTL extension is a conditional ``UPDATE`` and racing inserts on
the unique ``url_hash`` fall back to updating the winner's row.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Optional

from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Avg, Count, F, Max, Min, Sum, TextField
from django.db.models.functions import Cast, Length
from django.utils import timezone

from core.exceptions import CacheValidationError, ConfirmationRequiredError
from core.schemas import coerce_decimal

from .. import conf
from ..models import UrlMetadataCache
from ..normalizer import generate_hash, normalize_url
from ..platforms import detect_platform, is_premium_platform

logger = logging.getLogger(__name__)

_BYTES_PER_MB = 1024 * 1024
TOP_URLS_LIMIT = 10
_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class CleanupResult:
    expired_removed: int = 0
    excess_removed: int = 0

    @property
    def total_removed(self) -> int:
        return self.expired_removed + self.excess_removed

    def to_dict(self) -> Dict[str, int]:
        return {
            "expired_removed": self.expired_removed,
            "excess_removed": self.excess_removed,
            "total_removed": self.total_removed,
        }


def fetch(url: Optional[str]) -> Optional[Dict[str, Any]]:
    """Return cached metadata for ``url`` or ``None`` on a miss."""
    normalized = normalize_url(url)
    if normalized is None:
        return None

    url_hash = generate_hash(normalized)
    entry = UrlMetadataCache.objects.valid().filter(url_hash=url_hash).first()
    if entry is None:
        logger.debug("Cache miss for %s", normalized)
        return None

    now = timezone.now()
    UrlMetadataCache.objects.filter(pk=entry.pk).update(
        hit_count=F("hit_count") + 1,
        last_accessed_at=now,
    )
    try:
        entry.refresh_from_db(fields=["hit_count", "last_accessed_at", "expires_at"])
    except UrlMetadataCache.DoesNotExist:
        # Evicted between the lookup and the counter update.
        return None

    if entry.is_popular:
        _extend_popular_entry(entry, now=now)

    logger.debug("Cache hit for %s (hits=%s)", normalized, entry.hit_count)
    return entry.to_metadata()


def _extend_popular_entry(entry: UrlMetadataCache, *, now) -> None:
    # Conditional update: expires_at only ever moves forward.
    threshold = now + conf.popular_extension_window()
    new_expiry = now + conf.premium_duration()
    extended = UrlMetadataCache.objects.filter(
        pk=entry.pk,
        expires_at__lt=threshold,
    ).update(expires_at=new_expiry)
    if extended:
        entry.expires_at = new_expiry
        logger.info("Extended popular cache entry %s until %s", entry.normalized_url, new_expiry)


def store(
    url: str,
    metadata: Optional[Mapping[str, Any]] = None,
    *,
    duration: Optional[timedelta] = None,
) -> UrlMetadataCache:
    """Create or overwrite the cache entry for ``url`` with extractor output.

    Raises :class:`CacheValidationError` when the entry cannot be persisted.
    """
    payload: Dict[str, Any] = dict(metadata or {})
    normalized = normalize_url(url)
    url_hash = generate_hash(normalized) if normalized else None

    platform = payload.get("platform") or detect_platform(url) or detect_platform(normalized)
    ttl = duration or conf.default_duration()
    if is_premium_platform(platform):
        ttl = conf.premium_duration()

    now = timezone.now()
    fields = {
        "url": url,
        "normalized_url": normalized,
        "title": payload.get("title"),
        "description": payload.get("description"),
        "image_url": payload.get("image"),
        "price": _coerce_price(payload.get("price")),
        "currency": payload.get("currency"),
        "platform": platform,
        "extraction_method": payload.get("extraction_method"),
        "metadata": payload,
        "extracted_at": now,
        "expires_at": now + ttl,
    }

    entry = UrlMetadataCache.objects.filter(url_hash=url_hash).first() if url_hash else None
    if entry is None:
        entry = UrlMetadataCache(url_hash=url_hash)
    for key, value in fields.items():
        setattr(entry, key, value)

    _validate(entry)

    try:
        with transaction.atomic():
            entry.save()
    except IntegrityError:
        if entry.pk is not None:
            raise
        # Lost an insert race on url_hash: overwrite the row that won.
        logger.info("Concurrent insert for %s, updating existing entry", normalized)
        entry = _update_existing(url_hash, fields)

    logger.info(
        "Stored cache entry for %s (platform=%s, expires_at=%s)",
        normalized,
        platform,
        entry.expires_at,
    )
    return entry


def _coerce_price(value: Any) -> Any:
    # Extractors emit floats, ints or strings; the column keeps two decimals.
    if value in (None, ""):
        return None
    price = coerce_decimal(value)
    if price is None or not price.is_finite():
        return value
    try:
        return price.quantize(_CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return value


def _validate(entry: UrlMetadataCache) -> None:
    try:
        entry.full_clean(validate_unique=False)
    except ValidationError as exc:
        errors = getattr(exc, "message_dict", {"__all__": exc.messages})
        logger.warning("Rejected cache entry for %s: %s", entry.url, errors)
        raise CacheValidationError("Cache entry is invalid.", errors=errors) from exc


def _update_existing(url_hash: str, fields: Mapping[str, Any]) -> UrlMetadataCache:
    entry = UrlMetadataCache.objects.get(url_hash=url_hash)
    for key, value in fields.items():
        setattr(entry, key, value)
    entry.save()
    return entry


def cleanup(*, max_size: Optional[int] = None) -> CleanupResult:
    """Delete expired entries, then evict the least valuable rows above the size cap."""
    cap = conf.max_cache_size() if max_size is None else max_size

    expired_removed = _delete_count(UrlMetadataCache.objects.expired().delete())

    excess_removed = 0
    remaining = UrlMetadataCache.objects.count()
    if remaining > cap:
        excess = remaining - cap
        victims = list(
            UrlMetadataCache.objects.eviction_order().values_list("pk", flat=True)[:excess]
        )
        excess_removed = _delete_count(UrlMetadataCache.objects.filter(pk__in=victims).delete())
        logger.info(
            "Cache cleanup: removed %s expired and %s excess entries",
            expired_removed,
            excess_removed,
        )
    else:
        logger.info("Cache cleanup: removed %s expired entries", expired_removed)

    return CleanupResult(expired_removed=expired_removed, excess_removed=excess_removed)


def _delete_count(result) -> int:
    deleted, _ = result
    return deleted


def warm_popular_expired() -> int:
    """Queue a cache-only re-extraction for every popular entry that has expired."""
    from ..tasks import enqueue_extraction

    queued = 0
    for entry in UrlMetadataCache.objects.popular().expired().only("id", "url").iterator():
        try:
            enqueue_extraction(entry.url, cache_only=True)
        except Exception:
            logger.exception("Failed to queue cache warming for %s", entry.url)
            continue
        queued += 1

    logger.info("Cache warming queued for %s popular entries", queued)
    return queued


def refresh_entry(entry: UrlMetadataCache) -> None:
    """Queue a forced re-extraction for a single entry."""
    from ..tasks import enqueue_extraction

    enqueue_extraction(entry.url, cache_only=True, cache_id=entry.pk)
    logger.info("Cache refresh queued for %s", entry.url)


def clear_all(*, confirm: bool = False) -> int:
    """Delete every cache entry. Refuses to run without ``confirm``."""
    if confirm is not True:
        raise ConfirmationRequiredError("Confirmation required to clear cache.")

    with transaction.atomic():
        removed = _delete_count(UrlMetadataCache.objects.all().delete())
    logger.warning("Cleared %s cache entries", removed)
    return removed


def statistics() -> Dict[str, Any]:
    """Aggregate report over the whole cache table, computed on every call."""
    queryset = UrlMetadataCache.objects.all()
    totals = queryset.aggregate(
        total_cached=Count("id"),
        total_hits=Sum("hit_count"),
        avg_hits=Avg("hit_count"),
        oldest_entry=Min("created_at"),
        newest_entry=Max("created_at"),
    )

    platforms = {
        row["platform"]: row["count"]
        for row in queryset.order_by()
        .values("platform")
        .annotate(count=Count("id"))
        .order_by("platform")
    }

    most_popular = [
        [normalized_url, hit_count]
        for normalized_url, hit_count in queryset.most_popular().values_list(
            "normalized_url", "hit_count"
        )[:TOP_URLS_LIMIT]
    ]

    return {
        "total_cached": totals["total_cached"] or 0,
        "valid_cached": queryset.valid().count(),
        "expired": queryset.expired().count(),
        "popular_items": queryset.popular().count(),
        "platforms": platforms,
        "total_hits": totals["total_hits"] or 0,
        "avg_hits_per_url": round(float(totals["avg_hits"] or 0), 2),
        "cache_size_mb": _metadata_size_mb(),
        "oldest_entry": totals["oldest_entry"],
        "newest_entry": totals["newest_entry"],
        "most_popular_urls": most_popular,
    }


def _metadata_size_mb() -> float:
    try:
        with transaction.atomic():
            size = UrlMetadataCache.objects.aggregate(
                size=Sum(Length(Cast("metadata", output_field=TextField())))
            )["size"]
    except DatabaseError:
        logger.warning("Metadata size estimate is not supported by this database", exc_info=True)
        return 0.0
    return round(float(size or 0) / _BYTES_PER_MB, 2)
