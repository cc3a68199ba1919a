import time
from typing import Optional
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup

from core.exceptions import ExtractionExecutionError
from core.schemas import ExtractedMetadata

from .. import conf
from .base import BaseMetadataExtractor
from .jsonld import build_extra, extract_image, extract_offer, extract_product_json_ld

BROWSER_EXTRA_HEADERS = {
    "Accept-Language": "en-US,en;q=0.9,pt-BR;q=0.8",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}


def download_html(url: str, *, user_agent: str, timeout: int) -> Optional[str]:
    headers = dict(BROWSER_EXTRA_HEADERS)
    headers["User-Agent"] = user_agent

    for attempt in range(2):
        try:
            response = requests.get(url, headers=headers, timeout=timeout, allow_redirects=True)
            response.raise_for_status()
        except requests.RequestException:
            if attempt == 0:
                time.sleep(0.4)
                continue
            raise
        if response.text:
            return response.text
    return None


def _meta_content(soup: BeautifulSoup, *names: str) -> str:
    for name in names:
        tag = soup.find("meta", attrs={"property": name}) or soup.find("meta", attrs={"name": name})
        if tag and tag.get("content"):
            return tag["content"].strip()
    return ""


class HtmlMetadataExtractor(BaseMetadataExtractor):
    """Reads JSON-LD product data, OpenGraph/Twitter tags and the document head."""

    method_name = "html"

    def __init__(self, *, html: Optional[str] = None) -> None:
        super().__init__()
        self._html = html

    def _extract(self, url: str) -> ExtractedMetadata:
        try:
            html = self._html or download_html(
                url,
                user_agent=conf.get_setting("USER_AGENT"),
                timeout=conf.get_setting("EXTRACTION_TIMEOUT"),
            )
        except requests.RequestException as exc:
            raise ExtractionExecutionError(f"Failed to download {url}: {exc}") from exc
        if not html:
            raise ExtractionExecutionError(f"Empty response from {url}.")

        soup = BeautifulSoup(html, "html.parser")
        product_json = extract_product_json_ld(soup)
        offer = extract_offer(product_json)

        title = (
            (product_json or {}).get("name")
            or _meta_content(soup, "og:title", "twitter:title")
            or (soup.title.get_text(" ", strip=True) if soup.title else "")
        )
        description = (
            (product_json or {}).get("description")
            or _meta_content(soup, "og:description", "twitter:description", "description")
        )
        image = extract_image(product_json) or _meta_content(soup, "og:image", "twitter:image")
        price = offer.get("price") or _meta_content(
            soup, "product:price:amount", "og:price:amount"
        )
        currency = offer.get("currency") or _meta_content(
            soup, "product:price:currency", "og:price:currency"
        )

        metadata = ExtractedMetadata.from_mapping(
            {
                "title": title,
                "description": description,
                "image": urljoin(url, image) if image else "",
                "price": price,
                "currency": currency,
                "extraction_method": "json_ld" if product_json else self.method_name,
            }
        )
        metadata.extra.update(build_extra(product_json, offer))
        return metadata
