from .base import BaseMetadataExtractor
from .factory import get_extractor

__all__ = ["BaseMetadataExtractor", "get_extractor"]
