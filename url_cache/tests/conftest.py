from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from url_cache.services.cache import store
from url_cache.tests.fakes import StaticExtractor


@pytest.fixture()
def api_client():
    return APIClient()


@pytest.fixture()
def admin_client(django_user_model):
    admin = django_user_model.objects.create_user(
        username="cache-admin",
        password="secret",
        is_staff=True,
    )
    client = APIClient()
    client.force_authenticate(user=admin)
    return client


@pytest.fixture()
def user_client(django_user_model):
    user = django_user_model.objects.create_user(username="shopper", password="secret")
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def static_extractor(settings):
    StaticExtractor.calls = []
    settings.URL_CACHE = {
        **settings.URL_CACHE,
        "EXTRACTOR": "url_cache.tests.fakes.StaticExtractor",
    }
    return StaticExtractor


@pytest.fixture()
def failing_extractor(settings):
    settings.URL_CACHE = {
        **settings.URL_CACHE,
        "EXTRACTOR": "url_cache.tests.fakes.FailingExtractor",
    }


@pytest.fixture()
def cache_entry_factory():
    """Store an entry, then force bookkeeping columns to the given values."""

    counter = {"value": 0}

    def _create(url=None, metadata=None, *, hit_count=None, expires_in=None, accessed_ago=None, **options):
        counter["value"] += 1
        url = url or f"https://shop.example.com/products/{counter['value']}"
        payload = {"title": f"Item {counter['value']}", "price": "10.00", "currency": "USD"}
        payload.update(metadata or {})
        entry = store(url, payload, **options)

        updates = {}
        now = timezone.now()
        if hit_count is not None:
            updates["hit_count"] = hit_count
        if expires_in is not None:
            updates["expires_at"] = now + expires_in
        if accessed_ago is not None:
            updates["last_accessed_at"] = now - accessed_ago
        if updates:
            type(entry).objects.filter(pk=entry.pk).update(**updates)
            entry.refresh_from_db()
        return entry

    return _create
