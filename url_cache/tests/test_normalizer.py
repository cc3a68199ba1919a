import pytest

from url_cache.normalizer import TRACKING_PARAMS, generate_hash, normalize_url


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_blank_input_normalizes_to_none(raw):
    assert normalize_url(raw) is None


def test_missing_scheme_defaults_to_https():
    assert normalize_url("shop.example.com/item/1") == "https://shop.example.com/item/1"


def test_http_scheme_is_kept():
    assert normalize_url("http://shop.example.com/item") == "http://shop.example.com/item"


def test_tracking_parameters_do_not_change_the_key():
    with_tracking = normalize_url("https://X.com/p?utm_source=a&id=1")
    without_tracking = normalize_url("https://X.com/p?id=1")

    assert with_tracking == without_tracking == "https://x.com/p?id=1"
    assert generate_hash(with_tracking) == generate_hash(without_tracking)


def test_tracking_keys_match_case_insensitively():
    assert normalize_url("https://a.com/p?UTM_Campaign=x&Ref=y&color=Red") == "https://a.com/p?color=Red"


def test_query_is_dropped_when_only_tracking_parameters_remain():
    url = "https://a.com/p?" + "&".join(f"{key}=1" for key in sorted(TRACKING_PARAMS))
    assert normalize_url(url) == "https://a.com/p"


def test_blank_query_values_are_kept():
    assert normalize_url("https://a.com/p?size=&fbclid=abc") == "https://a.com/p?size="


def test_fragment_is_removed():
    assert normalize_url("https://a.com/p?id=2#reviews") == "https://a.com/p?id=2"


def test_only_the_host_is_lowercased():
    assert normalize_url("HTTP://Example.com/PATH") == normalize_url("http://example.com/PATH")
    assert normalize_url("HTTP://Example.com/PATH") == "http://example.com/PATH"
    assert normalize_url("https://Shop.COM/Item?Color=Blue") == "https://shop.com/Item?Color=Blue"


def test_port_and_userinfo_survive():
    assert normalize_url("https://User@Shop.com:8443/x") == "https://User@shop.com:8443/x"


def test_unparseable_url_falls_back_to_input():
    assert normalize_url("http://[not-an-ipv6/path") == "http://[not-an-ipv6/path"


def test_hash_is_deterministic_sha256_hex():
    normalized = normalize_url("https://shop.example.com/item?id=9")
    digest = generate_hash(normalized)

    assert digest == generate_hash(normalized)
    assert len(digest) == 64
    assert int(digest, 16) >= 0
    assert digest != generate_hash(normalize_url("https://shop.example.com/item?id=10"))
