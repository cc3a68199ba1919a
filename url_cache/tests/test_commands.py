import json
from datetime import timedelta
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from url_cache.models import UrlMetadataCache


@pytest.mark.django_db
def test_cleanup_command(cache_entry_factory):
    cache_entry_factory(expires_in=-timedelta(days=1))
    cache_entry_factory(hit_count=0)
    cache_entry_factory(hit_count=9)
    out = StringIO()

    call_command("cleanup_url_cache", "--max-size", "1", stdout=out)

    output = out.getvalue()
    assert "expired removed: 1" in output
    assert "excess removed:  1" in output
    assert UrlMetadataCache.objects.get().hit_count == 9


@pytest.mark.django_db
def test_cleanup_command_rejects_negative_cap():
    with pytest.raises(CommandError):
        call_command("cleanup_url_cache", "--max-size", "-5", stdout=StringIO())


@pytest.mark.django_db
def test_stats_command_json(cache_entry_factory):
    cache_entry_factory("https://www.adidas.com/p/1", hit_count=4)
    out = StringIO()

    call_command("url_cache_stats", "--json", stdout=out)

    report = json.loads(out.getvalue())
    assert report["total_cached"] == 1
    assert report["platforms"] == {"adidas": 1}
    assert report["most_popular_urls"] == [["https://www.adidas.com/p/1", 4]]


@pytest.mark.django_db
def test_stats_command_text(cache_entry_factory):
    cache_entry_factory("https://www.adidas.com/p/2", hit_count=12)
    out = StringIO()

    call_command("url_cache_stats", stdout=out)

    output = out.getvalue()
    assert "URL cache statistics:" in output
    assert "popular:  1" in output
    assert "adidas: 1" in output


@pytest.mark.django_db
def test_warm_command(static_extractor, cache_entry_factory):
    stale = cache_entry_factory(hit_count=10, expires_in=-timedelta(hours=3))
    out = StringIO()

    call_command("warm_url_cache", stdout=out)

    assert "Warming 1 popular cache entries" in out.getvalue()
    assert static_extractor.calls == [stale.url]
    stale.refresh_from_db()
    assert stale.is_valid
