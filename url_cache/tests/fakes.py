from decimal import Decimal
from urllib.parse import urlsplit

from core.exceptions import ExtractionExecutionError
from core.schemas import ExtractedMetadata
from url_cache.extractors.base import BaseMetadataExtractor


class StaticExtractor(BaseMetadataExtractor):
    """Returns deterministic metadata derived from the URL path, no network."""

    method_name = "static"
    calls: list = []

    def _extract(self, url: str) -> ExtractedMetadata:
        StaticExtractor.calls.append(url)
        path = urlsplit(url).path.strip("/") or "home"
        return ExtractedMetadata(
            title=f"Product {path}",
            description="A static product",
            image="https://cdn.example.com/image.jpg",
            price=Decimal("49.90"),
            currency="USD",
        )


class FailingExtractor(BaseMetadataExtractor):
    method_name = "failing"

    def _extract(self, url: str) -> ExtractedMetadata:
        raise ExtractionExecutionError(f"Upstream refused {url}")
