import logging
from typing import Any, Dict, Optional

from core.exceptions import CacheValidationError, ExtractorConfigurationError

from ..extractors import get_extractor
from ..normalizer import normalize_url
from .cache import fetch, store

logger = logging.getLogger(__name__)


def get_metadata(url: str, *, force: bool = False) -> Dict[str, Any]:
    """Cache-aside lookup: serve from the cache, otherwise extract and store.

    Extraction errors propagate to the caller. A failed cache write is logged
    and the freshly extracted data is still returned.
    """
    normalized: Optional[str] = normalize_url(url)
    if normalized is None:
        raise ExtractorConfigurationError("'url' must be provided.")

    if not force:
        cached = fetch(url)
        if cached is not None:
            logger.info("Using cached metadata for %s", normalized)
            return cached

    metadata = get_extractor().extract(normalized)
    payload = metadata.to_dict()

    try:
        entry = store(url, payload)
    except CacheValidationError as exc:
        logger.error("Failed to store metadata for %s: %s", normalized, exc.errors)
        payload["cached"] = False
        return payload

    result = entry.to_metadata()
    result["cached"] = False
    return result
