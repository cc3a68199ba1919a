"""Fire-and-forget metadata extraction on a process-wide worker pool."""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from threading import Lock
from typing import Any, Dict, Optional

from django.db import close_old_connections

from core.exceptions import CacheValidationError, ExtractionError

from . import conf
from .normalizer import normalize_url

logger = logging.getLogger(__name__)

_executor: Optional[ThreadPoolExecutor] = None
_executor_lock = Lock()


def _get_executor() -> ThreadPoolExecutor:
    global _executor
    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(
                max_workers=max(int(conf.get_setting("EXTRACTION_WORKERS")), 1),
                thread_name_prefix="url-cache-extract",
            )
        return _executor


def shutdown(wait: bool = True) -> None:
    global _executor
    with _executor_lock:
        if _executor is not None:
            _executor.shutdown(wait=wait)
            _executor = None


def enqueue_extraction(
    url: str,
    *,
    cache_only: bool = True,
    cache_id: Optional[int] = None,
) -> Future:
    """Schedule :func:`run_extraction` for ``url`` without waiting for it."""
    if conf.get_setting("EXTRACTION_EAGER"):
        future: Future = Future()
        future.set_result(run_extraction(url, cache_only=cache_only, cache_id=cache_id))
        return future

    logger.debug("Queueing extraction for %s (cache_id=%s)", url, cache_id)
    return _get_executor().submit(
        _run_in_worker, url, cache_only=cache_only, cache_id=cache_id
    )


def _run_in_worker(url: str, **kwargs: Any) -> Optional[Dict[str, Any]]:
    close_old_connections()
    try:
        return run_extraction(url, **kwargs)
    finally:
        close_old_connections()


def run_extraction(
    url: str,
    *,
    cache_only: bool = True,
    cache_id: Optional[int] = None,
) -> Optional[Dict[str, Any]]:
    """Extract metadata for ``url`` and write it to the cache.

    Failures are logged and reported as ``None``; one bad URL never affects
    other queued jobs.
    """
    from .extractors import get_extractor
    from .services.cache import store

    # Stored URLs may lack a scheme; the extractor needs a fetchable address.
    target = normalize_url(url) or url
    try:
        metadata = get_extractor().extract(target)
        entry = store(url, metadata.to_dict())
    except (ExtractionError, CacheValidationError) as exc:
        logger.warning("Background extraction failed for %s: %s", url, exc)
        return None
    except Exception:
        logger.exception("Unexpected error during background extraction for %s", url)
        return None

    logger.info(
        "Background extraction refreshed %s (cache_id=%s, entry=%s)",
        url,
        cache_id,
        entry.pk,
    )
    if cache_only:
        return None
    return entry.to_metadata()
