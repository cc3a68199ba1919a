from abc import ABC, abstractmethod

from core.exceptions import ExtractionExecutionError, ExtractorConfigurationError
from core.logging import configure_logger
from core.schemas import ExtractedMetadata

from ..platforms import detect_platform

_PRODUCT_URL_HINTS = (
    "/product",
    "/item",
    "/p/",
    "/dp/",
    "/tenis",
    "/shoes",
    "/clothing",
    "produto",
    "artigo",
    "loja",
    "shop",
    "store",
)


def looks_like_product_page(url: str) -> bool:
    lowered = url.lower()
    return any(hint in lowered for hint in _PRODUCT_URL_HINTS)


class BaseMetadataExtractor(ABC):
    """Shared behaviour for URL metadata extractors."""

    method_name = "unknown"

    def __init__(self) -> None:
        self.logger = configure_logger(f"extractor.{self.__class__.__name__}")

    def extract(self, url: str) -> ExtractedMetadata:
        if not url:
            raise ExtractorConfigurationError("'url' must be provided.")

        self.logger.info("Starting extraction. url=%s", url)
        try:
            metadata = self._extract(url)
        except ExtractorConfigurationError:
            raise
        except ExtractionExecutionError:
            self.logger.warning("Extraction failed for %s", url)
            raise
        except Exception as exc:
            self.logger.exception("Unexpected error during extraction")
            raise ExtractionExecutionError(str(exc)) from exc

        if metadata.is_empty:
            raise ExtractionExecutionError(f"No metadata could be extracted from {url}.")

        if not metadata.extraction_method:
            metadata.extraction_method = self.method_name
        if not metadata.platform:
            metadata.platform = detect_platform(url) or ""
        metadata.enhance(url)

        if not metadata.has_minimum_data(product_page=looks_like_product_page(url)):
            self.logger.info("Incomplete metadata for %s: %s", url, metadata.to_dict())

        self.logger.info("Extracted '%s' via %s", metadata.title, metadata.extraction_method)
        return metadata

    @abstractmethod
    def _extract(self, url: str) -> ExtractedMetadata:
        """Concrete extractors must return populated metadata."""
