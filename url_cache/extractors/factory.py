from typing import Dict, Optional, Type

from django.utils.module_loading import import_string

from core.exceptions import ExtractorConfigurationError

from .. import conf
from .base import BaseMetadataExtractor

_EXTRACTOR_CACHE: Dict[str, Type[BaseMetadataExtractor]] = {}


def get_extractor(path: Optional[str] = None) -> BaseMetadataExtractor:
    """Return a new instance of the extractor configured in ``URL_CACHE['EXTRACTOR']``."""
    extractor_path = path or conf.get_setting("EXTRACTOR")
    extractor_cls = _EXTRACTOR_CACHE.get(extractor_path)
    if extractor_cls is None:
        try:
            extractor_cls = import_string(extractor_path)
        except ImportError as exc:
            raise ExtractorConfigurationError(
                f"Extractor '{extractor_path}' could not be imported."
            ) from exc
        if not (isinstance(extractor_cls, type) and issubclass(extractor_cls, BaseMetadataExtractor)):
            raise ExtractorConfigurationError(
                f"Extractor '{extractor_path}' is not a BaseMetadataExtractor subclass."
            )
        _EXTRACTOR_CACHE[extractor_path] = extractor_cls

    return extractor_cls()
