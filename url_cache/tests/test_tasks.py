import pytest

from url_cache import tasks
from url_cache.models import UrlMetadataCache


@pytest.mark.django_db
def test_run_extraction_returns_metadata_when_requested(static_extractor):
    result = tasks.run_extraction("https://shop.example.com/p/5", cache_only=False)

    assert result["cached"] is True
    assert result["extraction_method"] == "static"
    assert UrlMetadataCache.objects.get().normalized_url == "https://shop.example.com/p/5"


@pytest.mark.django_db
def test_run_extraction_cache_only_returns_nothing(static_extractor):
    assert tasks.run_extraction("https://shop.example.com/p/6") is None
    assert UrlMetadataCache.objects.count() == 1


@pytest.mark.django_db
def test_run_extraction_swallows_failures(failing_extractor):
    assert tasks.run_extraction("https://shop.example.com/p/7", cache_only=False) is None
    assert UrlMetadataCache.objects.count() == 0


@pytest.mark.django_db
def test_eager_enqueue_returns_completed_future(static_extractor):
    future = tasks.enqueue_extraction("https://shop.example.com/p/8", cache_only=False)

    assert future.done()
    assert future.result()["title"].startswith("Product")


def test_enqueue_uses_worker_pool_when_not_eager(settings, mocker):
    settings.URL_CACHE = {**settings.URL_CACHE, "EXTRACTION_EAGER": False}
    executor = mocker.Mock()
    mocker.patch.object(tasks, "_get_executor", return_value=executor)

    tasks.enqueue_extraction("https://shop.example.com/p/9", cache_id=3)

    executor.submit.assert_called_once_with(
        tasks._run_in_worker,
        "https://shop.example.com/p/9",
        cache_only=True,
        cache_id=3,
    )


@pytest.mark.django_db
def test_run_extraction_fetches_normalized_address(static_extractor):
    result = tasks.run_extraction("Shop.example.com/p/10?utm_campaign=x", cache_only=False)

    assert static_extractor.calls == ["https://shop.example.com/p/10"]
    assert result["cached"] is True
    entry = UrlMetadataCache.objects.get()
    assert entry.url == "Shop.example.com/p/10?utm_campaign=x"
    assert entry.normalized_url == "https://shop.example.com/p/10"
