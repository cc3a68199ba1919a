class UrlCacheError(RuntimeError):
    """Base exception for all URL cache errors."""


class CacheValidationError(UrlCacheError):
    """Raised when a cache entry cannot be persisted because it is invalid."""

    def __init__(self, message: str, errors=None) -> None:
        super().__init__(message)
        self.errors = errors or {}


class ConfirmationRequiredError(UrlCacheError):
    """Raised when a destructive operation is attempted without confirmation."""


class ExtractionError(UrlCacheError):
    """Base exception for metadata extraction failures."""


class ExtractorConfigurationError(ExtractionError):
    """Raised when the metadata extractor is misconfigured."""


class ExtractionExecutionError(ExtractionError):
    """Raised when the metadata extractor fails during execution."""
