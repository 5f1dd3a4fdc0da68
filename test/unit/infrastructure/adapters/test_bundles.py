import pytest

from free_images.core.exceptions import ConfigurationError
from free_images.infrastructure.adapters import (
    JsonFilePreferenceStore,
    MediaWikiImageSearch,
    UnsplashImageSearch,
)
from free_images.infrastructure.adapters.bundles.image_search import (
    close_shared_transport,
    get_image_search,
    get_repository_adapter_bundle,
    get_shared_transport,
)


@pytest.fixture(autouse=True)
def fresh_transport():
    close_shared_transport()
    yield
    close_shared_transport()


@pytest.mark.parametrize(
    "provider, cls",
    [("wikimedia", MediaWikiImageSearch), (" Unsplash ", UnsplashImageSearch)],
)
def test_get_image_search_by_name(provider, cls):
    assert isinstance(get_image_search(provider), cls)


def test_get_image_search_unknown_provider():
    with pytest.raises(ConfigurationError) as exc_info:
        get_image_search("flickr")
    assert exc_info.value.config_key == "provider"


def test_repository_bundle(tmp_path):
    bundle = get_repository_adapter_bundle(
        provider="wikimedia", preferences_path=str(tmp_path / "p.json")
    )
    assert isinstance(bundle.image_search, MediaWikiImageSearch)
    assert isinstance(bundle.preferences, JsonFilePreferenceStore)
    assert bundle.preferences.path == str(tmp_path / "p.json")


def test_adapters_share_one_transport():
    first = get_image_search("wikimedia")
    second = get_image_search("unsplash")
    assert first.transport is second.transport
    assert first.transport is get_shared_transport()


def test_close_shared_transport_closes_session(monkeypatch):
    transport = get_shared_transport()
    closed = []
    monkeypatch.setattr(transport.session, "close", lambda: closed.append(True))

    close_shared_transport()

    assert closed == [True]
    assert get_shared_transport() is not transport
