from typing import Optional, Sequence, Tuple
from urllib.parse import urlsplit

from core.enums import PREMIUM_PLATFORMS, Platform

# Ordered: the first pattern found in the host wins.
_HOST_PATTERNS: Sequence[Tuple[Tuple[str, ...], Platform]] = (
    (("amazon",), Platform.AMAZON),
    (("mercado",), Platform.MERCADOLIVRE),
    (("nike",), Platform.NIKE),
    (("adidas",), Platform.ADIDAS),
    (("sephora",), Platform.SEPHORA),
    (("magazineluiza", "magalu"), Platform.MAGAZINELUIZA),
    (("shopify", "myshopify"), Platform.SHOPIFY),
    (("nuvemshop", "tiendanube"), Platform.NUVEMSHOP),
)


def detect_platform(url: Optional[str]) -> Optional[str]:
    """Classify ``url`` by its host; ``None`` when no host can be extracted."""
    if url is None or not str(url).strip():
        return None

    try:
        host = urlsplit(str(url).strip()).hostname
    except ValueError:
        return None
    if not host:
        return None

    for needles, platform in _HOST_PATTERNS:
        if any(needle in host for needle in needles):
            return platform.value
    return Platform.UNKNOWN.value


def is_premium_platform(platform: Optional[str]) -> bool:
    return bool(platform) and str(platform).lower() in PREMIUM_PLATFORMS
