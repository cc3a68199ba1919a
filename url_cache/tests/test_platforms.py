import pytest

from url_cache.platforms import detect_platform, is_premium_platform


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://www.amazon.com.br/dp/B01", "amazon"),
        ("https://produto.mercadolivre.com.br/MLB-1", "mercadolivre"),
        ("https://www.mercadolibre.com.ar/p/1", "mercadolivre"),
        ("https://www.nike.com/t/air-max", "nike"),
        ("https://www.adidas.com.br/tenis", "adidas"),
        ("https://www.sephora.com/product/1", "sephora"),
        ("https://www.magazineluiza.com.br/p/1", "magazineluiza"),
        ("https://m.magalu.com/p/1", "magazineluiza"),
        ("https://store.myshopify.com/products/1", "shopify"),
        ("https://loja.nuvemshop.com.br/p/1", "nuvemshop"),
        ("https://tienda.tiendanube.com/p/1", "nuvemshop"),
        ("https://unknown-shop.com/p/1", "unknown"),
    ],
)
def test_detect_platform(url, expected):
    assert detect_platform(url) == expected


def test_first_matching_pattern_wins():
    assert detect_platform("https://amazon-nike-deals.com/x") == "amazon"


def test_host_matching_is_case_insensitive():
    assert detect_platform("https://WWW.AMAZON.COM/dp/1") == "amazon"


@pytest.mark.parametrize("url", [None, "", "not a url", "amazon.com/dp/1", "http://[broken/"])
def test_no_host_means_no_platform(url):
    assert detect_platform(url) is None


def test_premium_platforms():
    assert is_premium_platform("amazon")
    assert is_premium_platform("Sephora")
    assert not is_premium_platform("shopify")
    assert not is_premium_platform("unknown")
    assert not is_premium_platform(None)
