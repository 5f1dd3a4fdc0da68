from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import parse_qs, urlparse

from pydantic import ValidationError

from free_images.application.interfaces import IHttpTransport
from free_images.core.config import settings
from free_images.core.exceptions import ResponseFormatError, TransportError
from free_images.core.schemas import ImageRecord, UnsplashPhoto, parse_provider_response
from free_images.infrastructure.adapters.http_transport import RequestsTransport
from free_images.utils.time_utils import parse_timestamp

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_FORMAT = "jpg"


class UnsplashImageSearch:
    """IImageSearch implementation using the Unsplash photo search API.

    Records report ``settings.image_side_length`` as width and height rather
    than the photo's real dimensions.
    """

    provider = "unsplash"

    def __init__(
        self,
        client_id: Optional[str] = None,
        api_url: Optional[str] = None,
        transport: Optional[IHttpTransport] = None,
    ) -> None:
        self.client_id = client_id or settings.unsplash_client_id
        self.api_url = api_url or settings.unsplash_api_url
        self.transport = transport or RequestsTransport()

    def build_search_params(
        self, keyword: str, page: int = 0, params: Optional[Mapping[str, Any]] = None
    ) -> Dict[str, Any]:
        # page is sent as given; the API counts from 1
        query: Dict[str, Any] = {
            "query": keyword,
            "page": page,
            "per_page": settings.thumbs_per_page,
            "client_id": self.client_id,
        }
        if params:
            query.update(params)
        return query

    def size_params(self, maxwidth: int, maxheight: int) -> Dict[str, Any]:
        # Photo search takes no size hints
        return {}

    def search_images(
        self, keyword: str, page: int = 0, params: Optional[Mapping[str, Any]] = None
    ) -> List[ImageRecord]:
        if not self.client_id:
            logger.debug("UnsplashImageSearch: missing client id; returning []")
            return []

        query = self.build_search_params(keyword, page, params)
        try:
            payload = self.transport.get(self.api_url, query)
        except (TransportError, ResponseFormatError) as e:
            logger.warning("Unsplash search for %r failed: %s", keyword, e)
            return []

        try:
            response = parse_provider_response(self.provider, payload)
        except ValidationError as e:
            logger.warning("Unexpected Unsplash response: %s", e)
            return []

        records: List[ImageRecord] = []
        for raw in response.results:
            record = self.extract_image_attrs(raw)
            if record is not None:
                records.append(record)
        logger.info("Unsplash search %r page %d: %d records", keyword, page, len(records))
        return records

    def extract_image_attrs(self, raw: Any) -> Optional[ImageRecord]:
        """Map one search result to an ImageRecord, or None when it is unusable."""
        try:
            photo = UnsplashPhoto.model_validate(raw)
        except ValidationError:
            logger.debug("Skipping malformed Unsplash result")
            return None

        urls = photo.urls
        source = urls.raw or urls.small
        if not source or not urls.full:
            logger.debug("Skipping Unsplash photo %s: no usable URLs", photo.id)
            return None

        side = settings.image_side_length
        return ImageRecord(
            title=f"{photo.slug or photo.id}.{image_format(source)}",
            author=photo.user.name,
            source=source,
            url=urls.full,
            thumbnail=urls.thumb or source,
            thumbnail_width=settings.thumb_size,
            thumbnail_height=settings.thumb_size,
            realthumbnail=urls.thumb,
            realicon=urls.thumb,
            image_width=side,
            image_height=side,
            license=settings.image_license,
            datemodified=parse_timestamp(photo.updated_at),
        )


def image_format(url: str) -> str:
    """Return the image format named by the ``fm`` query parameter of an Unsplash URL.

    Falls back to ``DEFAULT_IMAGE_FORMAT`` when the URL carries none.
    """
    values = parse_qs(urlparse(url).query).get("fm")
    if values and values[0]:
        return values[0].lower()
    return DEFAULT_IMAGE_FORMAT
