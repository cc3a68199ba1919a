import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlsplit

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 500
MAX_REASONABLE_PRICE = Decimal("1000000")
DEFAULT_CURRENCY = "USD"

# Checked in order; the first suffix the host ends with decides the currency.
_CURRENCY_BY_TLD = (
    (".com.br", "BRL"),
    (".br", "BRL"),
    (".co.uk", "GBP"),
    (".uk", "GBP"),
    (".de", "EUR"),
    (".fr", "EUR"),
    (".it", "EUR"),
    (".es", "EUR"),
    (".eu", "EUR"),
    (".ca", "CAD"),
    (".com.au", "AUD"),
    (".au", "AUD"),
    (".co.jp", "JPY"),
    (".jp", "JPY"),
    (".co.in", "INR"),
    (".in", "INR"),
    (".cn", "CNY"),
    (".kr", "KRW"),
    (".mx", "MXN"),
)

_TITLE_JUNK = re.compile(r"[^\w\s\-–—()\[\].,:;&!?'\"]", re.UNICODE)


@dataclass(slots=True)
class ExtractedMetadata:
    """Typed payload produced by metadata extractors."""

    title: str = ""
    description: str = ""
    image: str = ""
    price: Optional[Decimal] = None
    currency: str = ""
    platform: str = ""
    extraction_method: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "ExtractedMetadata":
        known = {
            "title",
            "description",
            "image",
            "price",
            "currency",
            "platform",
            "extraction_method",
        }
        return cls(
            title=_as_text(payload.get("title")),
            description=_as_text(payload.get("description")),
            image=_as_text(payload.get("image")),
            price=coerce_decimal(payload.get("price")),
            currency=_as_text(payload.get("currency")).upper(),
            platform=_as_text(payload.get("platform")).lower(),
            extraction_method=_as_text(payload.get("extraction_method")),
            extra={key: value for key, value in payload.items() if key not in known},
        )

    @property
    def is_empty(self) -> bool:
        return not (self.title or self.description or self.image or self.price is not None)

    def has_minimum_data(self, *, product_page: bool) -> bool:
        """Product pages need a title and a positive price, other pages a title or description."""
        if product_page:
            return bool(self.title) and self.price is not None and self.price > 0
        return bool(self.title or self.description)

    def enhance(self, url: str) -> "ExtractedMetadata":
        """Clean up text fields, drop implausible prices and fill in the currency."""
        self.title = clean_title(self.title)
        self.description = truncate_text(" ".join(self.description.split()), DESCRIPTION_MAX_LENGTH)
        self.price = validate_price(self.price)
        if not self.currency:
            self.currency = detect_currency(url) or DEFAULT_CURRENCY
        if not self.extraction_method:
            self.extraction_method = "unknown"
        return self

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = dict(self.extra)
        payload.update(
            {
                "title": self.title or None,
                "description": self.description or None,
                "image": self.image or None,
                "price": self.price,
                "currency": self.currency or None,
                "platform": self.platform or None,
                "extraction_method": self.extraction_method or None,
            }
        )
        return payload


def clean_title(title: str) -> str:
    collapsed = " ".join((title or "").split())
    return truncate_text(_TITLE_JUNK.sub("", collapsed).strip(), TITLE_MAX_LENGTH)


def truncate_text(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3].rstrip() + "..."


def validate_price(price: Optional[Decimal]) -> Optional[Decimal]:
    if price is None or not price.is_finite():
        return None
    if price <= 0 or price > MAX_REASONABLE_PRICE:
        return None
    return price.quantize(Decimal("0.01"))


def detect_currency(url: str) -> Optional[str]:
    try:
        host = (urlsplit(url).hostname or "").lower()
    except ValueError:
        return None
    if not host:
        return None
    if "brasil" in host or "brazil" in host:
        return "BRL"
    for suffix, currency in _CURRENCY_BY_TLD:
        if host.endswith(suffix):
            return currency
    return None


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def coerce_decimal(value: Any) -> Optional[Decimal]:
    if value in (None, ""):
        return None
    if isinstance(value, Decimal):
        return value
    try:
        raw = str(value).replace("\xa0", "").replace(" ", "")
        if "," in raw and "." not in raw:
            raw = raw.replace(",", ".")
        return Decimal(raw)
    except (InvalidOperation, TypeError, ValueError):
        return None
