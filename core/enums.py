from enum import Enum
from typing import Optional


class Platform(Enum):
    """Known e-commerce platforms a product URL can belong to."""

    AMAZON = "amazon"
    MERCADOLIVRE = "mercadolivre"
    NIKE = "nike"
    ADIDAS = "adidas"
    SEPHORA = "sephora"
    MAGAZINELUIZA = "magazineluiza"
    SHOPIFY = "shopify"
    NUVEMSHOP = "nuvemshop"
    UNKNOWN = "unknown"

    @classmethod
    def from_string(cls, value: str) -> "Platform":
        try:
            return cls(value.lower())
        except ValueError as exc:
            allowed = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown platform '{value}'. Allowed values: {allowed}.") from exc


PREMIUM_PLATFORMS = frozenset(
    member.value
    for member in (
        Platform.AMAZON,
        Platform.MERCADOLIVRE,
        Platform.NIKE,
        Platform.ADIDAS,
        Platform.SEPHORA,
    )
)


class CacheSort(Enum):
    """Sort modes accepted by the admin cache listing."""

    HITS = "hits"
    RECENT = "recent"
    CREATED = "created"

    @classmethod
    def from_string(cls, value: Optional[str]) -> "CacheSort":
        if not value:
            return cls.HITS
        try:
            return cls(value.lower())
        except ValueError:
            return cls.HITS
