from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Protocol

from free_images.core.schemas import ImageRecord


class IImageSearch(Protocol):
    """Adapter for searching a free image provider by keyword.

    Implementations may call Wikimedia Commons, Unsplash, etc. The repository
    layer should not know about concrete providers.
    """

    provider: str

    def build_search_params(
        self, keyword: str, page: int = 0, params: Optional[Mapping[str, Any]] = None
    ) -> Dict[str, Any]:
        """Return a fresh request parameter mapping for one search page."""
        ...

    def size_params(self, maxwidth: int, maxheight: int) -> Dict[str, Any]:
        """Return the overrides that ask the provider for images within the given size."""
        ...

    def search_images(
        self, keyword: str, page: int = 0, params: Optional[Mapping[str, Any]] = None
    ) -> List[ImageRecord]:
        """Return one page of records in provider ranking order, empty on any failure."""
        ...
