from decimal import Decimal

import pytest
import requests

from core.exceptions import ExtractionExecutionError, ExtractorConfigurationError
from core.schemas import ExtractedMetadata, clean_title, detect_currency, validate_price
from url_cache.extractors import BaseMetadataExtractor, get_extractor
from url_cache.extractors.base import looks_like_product_page
from url_cache.extractors.html import HtmlMetadataExtractor
from url_cache.tests.fakes import StaticExtractor

PRODUCT_HTML = """
<html>
  <head>
    <title>Fallback title</title>
    <meta property="og:image" content="/og.jpg">
    <script type="application/ld+json">
      {
        "@context": "https://schema.org",
        "@type": "Product",
        "name": "Air Max 90",
        "description": "Classic   running\\n shoe",
        "image": ["/img/air-max.jpg"],
        "sku": "AM-90",
        "brand": {"@type": "Brand", "name": "Nike"},
        "offers": {
          "@type": "Offer",
          "price": "799.99",
          "priceCurrency": "BRL",
          "availability": "https://schema.org/InStock"
        }
      }
    </script>
  </head>
  <body></body>
</html>
"""

OPENGRAPH_HTML = """
<html>
  <head>
    <title>Document title</title>
    <meta property="og:title" content="OpenGraph title">
    <meta name="description" content="Plain description">
    <meta property="og:image" content="https://cdn.example.com/cover.jpg">
  </head>
</html>
"""

GRAPH_HTML = """
<html><head>
<script type="application/ld+json">not json at all</script>
<script type="application/ld+json">
{"@graph": [
  {"@type": "WebPage", "name": "Page"},
  {"@type": ["Product"], "name": "Desk lamp",
   "offers": [{"@type": "AggregateOffer", "lowPrice": "89.00", "priceCurrency": "USD"}]}
]}
</script>
</head></html>
"""


def test_json_ld_product_is_preferred():
    extractor = HtmlMetadataExtractor(html=PRODUCT_HTML)

    metadata = extractor.extract("https://www.nike.com.br/tenis/air-max-90")

    assert metadata.title == "Air Max 90"
    assert metadata.description == "Classic running shoe"
    assert metadata.image == "https://www.nike.com.br/img/air-max.jpg"
    assert metadata.price == Decimal("799.99")
    assert metadata.currency == "BRL"
    assert metadata.platform == "nike"
    assert metadata.extraction_method == "json_ld"

    payload = metadata.to_dict()
    assert payload["sku"] == "AM-90"
    assert payload["brand"] == "Nike"
    assert payload["availability"] == "https://schema.org/InStock"


def test_opengraph_tags_are_used_without_json_ld():
    extractor = HtmlMetadataExtractor(html=OPENGRAPH_HTML)

    metadata = extractor.extract("https://blog.example.de/post/1")

    assert metadata.title == "OpenGraph title"
    assert metadata.description == "Plain description"
    assert metadata.image == "https://cdn.example.com/cover.jpg"
    assert metadata.price is None
    assert metadata.currency == "EUR"
    assert metadata.platform == "unknown"
    assert metadata.extraction_method == "html"


def test_json_ld_graph_and_aggregate_offer():
    metadata = HtmlMetadataExtractor(html=GRAPH_HTML).extract("https://lamps.example.com/p/desk")

    assert metadata.title == "Desk lamp"
    assert metadata.price == Decimal("89.00")
    assert metadata.currency == "USD"


def test_page_without_metadata_fails():
    extractor = HtmlMetadataExtractor(html="<html><head></head><body></body></html>")

    with pytest.raises(ExtractionExecutionError):
        extractor.extract("https://empty.example.com/")


def test_download_errors_are_retried_then_reported(mocker):
    mocker.patch("url_cache.extractors.html.time.sleep")
    get = mocker.patch(
        "url_cache.extractors.html.requests.get",
        side_effect=requests.ConnectionError("connection refused"),
    )

    with pytest.raises(ExtractionExecutionError):
        HtmlMetadataExtractor().extract("https://down.example.com/p/1")

    assert get.call_count == 2


def test_downloaded_page_is_parsed(mocker, settings):
    response = mocker.Mock(text=OPENGRAPH_HTML)
    response.raise_for_status.return_value = None
    get = mocker.patch("url_cache.extractors.html.requests.get", return_value=response)

    metadata = HtmlMetadataExtractor().extract("https://blog.example.com/post/2")

    assert metadata.title == "OpenGraph title"
    assert metadata.currency == "USD"
    _, kwargs = get.call_args
    assert kwargs["headers"]["User-Agent"] == settings.URL_CACHE["USER_AGENT"]


def test_blank_url_is_a_configuration_error():
    with pytest.raises(ExtractorConfigurationError):
        StaticExtractor().extract("")


def test_unexpected_errors_are_wrapped():
    class BrokenExtractor(BaseMetadataExtractor):
        def _extract(self, url):
            raise ValueError("bad markup")

    with pytest.raises(ExtractionExecutionError, match="bad markup"):
        BrokenExtractor().extract("https://shop.example.com/p/1")


def test_factory_returns_configured_extractor(settings):
    settings.URL_CACHE = {**settings.URL_CACHE, "EXTRACTOR": "url_cache.tests.fakes.StaticExtractor"}

    assert isinstance(get_extractor(), StaticExtractor)
    assert isinstance(get_extractor("url_cache.extractors.html.HtmlMetadataExtractor"), HtmlMetadataExtractor)


@pytest.mark.parametrize(
    "path",
    ["url_cache.extractors.missing.Extractor", "not_a_dotted_path", "core.schemas.ExtractedMetadata"],
)
def test_factory_rejects_bad_paths(path):
    with pytest.raises(ExtractorConfigurationError):
        get_extractor(path)


def test_product_page_hints():
    assert looks_like_product_page("https://www.amazon.com/dp/B000")
    assert looks_like_product_page("https://loja.example.com.br/produto/123")
    assert not looks_like_product_page("https://news.example.org/article/1")


def test_enhance_cleans_fields_and_fills_currency():
    metadata = ExtractedMetadata.from_mapping(
        {"title": "  Fancy   Chair™ ", "description": "x" * 600, "price": "199,90"}
    )

    metadata.enhance("https://moveis.example.com.br/cadeira")

    assert metadata.title == "Fancy Chair"
    assert len(metadata.description) == 500
    assert metadata.description.endswith("...")
    assert metadata.price == Decimal("199.90")
    assert metadata.currency == "BRL"
    assert metadata.extraction_method == "unknown"


def test_enhance_keeps_declared_currency():
    metadata = ExtractedMetadata(title="Mug", currency="EUR")

    metadata.enhance("https://mugs.example.com/p/1")

    assert metadata.currency == "EUR"


@pytest.mark.parametrize(
    "price, expected",
    [
        (None, None),
        (Decimal("0"), None),
        (Decimal("-5"), None),
        (Decimal("1000000.01"), None),
        (Decimal("NaN"), None),
        (Decimal("10.006"), Decimal("10.01")),
        (Decimal("1000000"), Decimal("1000000.00")),
    ],
)
def test_validate_price(price, expected):
    assert validate_price(price) == expected


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://www.amazon.co.uk/dp/1", "GBP"),
        ("https://www.mercadolivre.com.br/p/1", "BRL"),
        ("https://lojabrasil.example.com/p/1", "BRL"),
        ("https://shop.example.jp/p/1", "JPY"),
        ("https://shop.example.com/p/1", None),
        ("not a url", None),
    ],
)
def test_detect_currency(url, expected):
    assert detect_currency(url) == expected


def test_clean_title_truncates_long_titles():
    title = clean_title("Lamp " * 100)

    assert len(title) == 200
    assert title.endswith("...")


def test_minimum_data_rules():
    product = ExtractedMetadata(title="Shoe", price=Decimal("10"))
    untitled = ExtractedMetadata(description="Only a description")

    assert product.has_minimum_data(product_page=True)
    assert not ExtractedMetadata(title="Shoe").has_minimum_data(product_page=True)
    assert untitled.has_minimum_data(product_page=False)
    assert not ExtractedMetadata().has_minimum_data(product_page=False)


def test_to_dict_named_fields_override_extra():
    metadata = ExtractedMetadata(title="Named", extra={"title": "Extra", "sku": "S-1"})

    payload = metadata.to_dict()

    assert payload["title"] == "Named"
    assert payload["sku"] == "S-1"
    assert payload["description"] is None
