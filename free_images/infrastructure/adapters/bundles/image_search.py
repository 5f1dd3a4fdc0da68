from __future__ import annotations

from types import SimpleNamespace
from typing import Optional

from free_images.application.interfaces import IHttpTransport, IImageSearch
from free_images.core.config import SUPPORTED_PROVIDERS, settings
from free_images.core.exceptions import ConfigurationError
from free_images.infrastructure.adapters import (
    JsonFilePreferenceStore,
    MediaWikiImageSearch,
    RequestsTransport,
    UnsplashImageSearch,
)

_shared_transport: Optional[RequestsTransport] = None


def get_shared_transport() -> RequestsTransport:
    """Process-wide transport, so requests reuse one connection pool."""
    global _shared_transport
    if _shared_transport is None:
        _shared_transport = RequestsTransport()
    return _shared_transport


def close_shared_transport() -> None:
    global _shared_transport
    if _shared_transport is not None:
        _shared_transport.close()
        _shared_transport = None


def get_image_search(
    provider: Optional[str] = None, transport: Optional[IHttpTransport] = None
) -> IImageSearch:
    """Build the search adapter for ``provider`` (defaults to settings.provider)."""
    name = (provider or settings.provider).strip().lower()
    transport = transport or get_shared_transport()
    if name == "wikimedia":
        return MediaWikiImageSearch(transport=transport)
    if name == "unsplash":
        return UnsplashImageSearch(transport=transport)
    raise ConfigurationError(
        f"Unknown provider '{provider}'. Supported: {', '.join(SUPPORTED_PROVIDERS)}",
        config_key="provider",
    )


def get_repository_adapter_bundle(
    *, provider: Optional[str] = None, preferences_path: Optional[str] = None
) -> SimpleNamespace:
    """Concrete adapters needed by FreeImagesRepository."""
    return SimpleNamespace(
        image_search=get_image_search(provider),
        preferences=JsonFilePreferenceStore(path=preferences_path),
    )
