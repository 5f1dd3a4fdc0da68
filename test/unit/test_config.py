import pytest
from pydantic import ValidationError

from free_images.core.config import Settings


def test_provider_is_normalised():
    assert Settings(provider=" Unsplash ").provider == "unsplash"


def test_unknown_provider_is_rejected():
    with pytest.raises(ValidationError):
        Settings(provider="flickr")


def test_provider_api_url_follows_provider():
    s = Settings(provider="unsplash", unsplash_api_url="https://u.example/search/photos")
    assert s.provider_api_url == "https://u.example/search/photos"
    assert Settings(provider="wikimedia").provider_api_url == s.wikimedia_api_url


def test_commons_main_dir_gets_trailing_slash():
    s = Settings(commons_main_dir="https://upload.example.org/commons")
    assert s.commons_main_dir == "https://upload.example.org/commons/"
