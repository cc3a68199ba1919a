import json
from typing import Any, Dict, Iterable, List, Optional

from bs4 import BeautifulSoup

_PRODUCT_TYPES = {"Product", "ProductGroup", "IndividualProduct"}


def _json_ld_nodes(soup: BeautifulSoup) -> Iterable[Dict[str, Any]]:
    for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
        try:
            payload = json.loads(script.string or "{}")
        except json.JSONDecodeError:
            continue

        if isinstance(payload, dict) and "@graph" in payload:
            nodes: List[Any] = list(payload.get("@graph") or [])
        elif isinstance(payload, list):
            nodes = payload
        else:
            nodes = [payload]

        for node in nodes:
            if isinstance(node, dict):
                yield node


def extract_product_json_ld(soup: BeautifulSoup) -> Optional[Dict[str, Any]]:
    for node in _json_ld_nodes(soup):
        node_type = node.get("@type")
        types = set(node_type) if isinstance(node_type, list) else {node_type}
        if types & _PRODUCT_TYPES:
            return node
    return None


def extract_offer(product_json: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    offers = product_json.get("offers") if product_json else None
    if isinstance(offers, list):
        offers = offers[0] if offers else None
    if not isinstance(offers, dict):
        return {}

    price = offers.get("price")
    if price in (None, "") and offers.get("@type") == "AggregateOffer":
        price = offers.get("lowPrice")

    return {
        "price": price,
        "currency": offers.get("priceCurrency"),
        "availability": offers.get("availability"),
    }


def extract_image(product_json: Optional[Dict[str, Any]]) -> Optional[str]:
    image = product_json.get("image") if product_json else None
    if isinstance(image, list):
        image = image[0] if image else None
    if isinstance(image, dict):
        image = image.get("url")
    return image if isinstance(image, str) and image else None


def extract_brand_name(product_json: Optional[Dict[str, Any]]) -> Optional[str]:
    brand = product_json.get("brand") if product_json else None
    if isinstance(brand, dict):
        return brand.get("name")
    if isinstance(brand, str):
        return brand
    return None


def build_extra(product_json: Optional[Dict[str, Any]], offer: Dict[str, Any]) -> Dict[str, Any]:
    if not product_json:
        return {}

    extra: Dict[str, Any] = {
        "sku": product_json.get("sku"),
        "gtin": product_json.get("gtin") or product_json.get("gtin13"),
        "brand": extract_brand_name(product_json),
        "availability": offer.get("availability"),
    }
    return {key: value for key, value in extra.items() if value not in (None, "")}
