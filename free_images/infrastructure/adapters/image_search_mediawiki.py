from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union
from urllib.parse import unquote

from pydantic import ValidationError

from free_images.application.interfaces import IHttpTransport
from free_images.core.config import settings
from free_images.core.exceptions import ResponseFormatError, TransportError
from free_images.core.schemas import (
    ImageRecord,
    MediaWikiImageInfo,
    MediaWikiPage,
    MediaWikiSession,
    parse_provider_response,
)
from free_images.infrastructure.adapters.http_transport import RequestsTransport
from free_images.utils.image_utils import (
    IconResolver,
    file_extension_icon,
    get_extension,
    is_image_mime,
    round_half_up,
)
from free_images.utils.time_utils import parse_timestamp

logger = logging.getLogger(__name__)

TITLE_PREFIX_LENGTH = len("File:")


class MediaWikiImageSearch:
    """IImageSearch implementation for Wikimedia Commons (MediaWiki action API).

    Every call builds its own parameter mapping; the instance only holds
    configuration, so one client can serve unrelated searches.
    """

    provider = "wikimedia"

    def __init__(
        self,
        api_url: Optional[str] = None,
        transport: Optional[IHttpTransport] = None,
        icon_resolver: Optional[IconResolver] = None,
    ) -> None:
        self.api_url = api_url or settings.wikimedia_api_url
        self.transport = transport or RequestsTransport()
        self.icon_resolver = icon_resolver or file_extension_icon

    @staticmethod
    def _base_params() -> Dict[str, Any]:
        return {"format": "json", "redirects": 1}

    def build_search_params(
        self, keyword: str, page: int = 0, params: Optional[Mapping[str, Any]] = None
    ) -> Dict[str, Any]:
        per_page = settings.thumbs_per_page
        query = self._base_params()
        query.update(
            {
                "action": "query",
                "generator": "search",
                "gsrsearch": keyword,
                "gsrnamespace": settings.file_namespace,
                "gsrlimit": per_page,
                "gsroffset": page * per_page,
                "prop": "imageinfo",
                "iiprop": "url|dimensions|mime|timestamp|size|user",
                "iiurlwidth": settings.image_side_length,
                "iiurlheight": settings.image_side_length,
            }
        )
        if params:
            query.update(params)
        return query

    def size_params(self, maxwidth: int, maxheight: int) -> Dict[str, Any]:
        return {"iiurlwidth": maxwidth, "iiurlheight": maxheight}

    def search_images(
        self, keyword: str, page: int = 0, params: Optional[Mapping[str, Any]] = None
    ) -> List[ImageRecord]:
        """Search File: pages for ``keyword`` and normalise one page of results."""
        query = self.build_search_params(keyword, page, params)
        # The search generator is only reliable over GET
        pages = self._fetch_pages("GET", query)
        records: List[ImageRecord] = []
        for wiki_page in pages:
            record = self.extract_image_attrs(wiki_page)
            if record is not None:
                records.append(record)
        logger.info(
            "Wikimedia search %r page %d: %d records", keyword, page, len(records)
        )
        return records

    def extract_image_attrs(self, page: MediaWikiPage) -> Optional[ImageRecord]:
        """Map one result page to an ImageRecord, or None when it lacks image or page URLs."""
        if (
            not page.imageinfo
            or not page.imageinfo[0].url
            or not page.imageinfo[0].descriptionurl
        ):
            logger.debug("Skipping %r: no imageinfo", page.title)
            return None

        info = page.imageinfo[0]
        title = page.title
        if is_image_mime(info.mime):
            is_svg = get_extension(title) == "svg"
            if is_svg:
                # Rendered as PNG
                title += ".png"
            attrs = self._image_attrs(info, is_svg)
        else:
            attrs = {"source": info.url}

        display_title = title[TITLE_PREFIX_LENGTH:]
        return ImageRecord(
            title=display_title,
            thumbnail=self.icon_resolver(display_title),
            thumbnail_width=settings.thumb_size,
            thumbnail_height=settings.thumb_size,
            license=settings.image_license,
            url=info.descriptionurl,
            **attrs,
        )

    def _image_attrs(self, info: MediaWikiImageInfo, is_svg: bool) -> Dict[str, Any]:
        thumb_size = settings.thumb_size
        icon_size = settings.icon_size

        if info.thumburl and info.thumbwidth is not None and info.thumbwidth < info.width:
            # The requested max size is smaller than the original: upload the scaled copy
            width = info.thumbwidth
            height = info.thumbheight or 0
            attrs: Dict[str, Any] = {
                "source": info.thumburl,
                "image_width": width,
                "image_height": height,
            }
            if width <= thumb_size and height <= thumb_size:
                attrs["realthumbnail"] = info.thumburl
            if width <= icon_size and height <= icon_size:
                attrs["realicon"] = info.thumburl
        else:
            attrs = {
                "image_width": info.width,
                "image_height": info.height,
                "size": info.size,
            }
            if is_svg:
                # SVG cannot be used directly, take a PNG rendering at original size
                attrs["source"] = self.get_thumb_url(
                    info.url, info.width, info.height, info.width, force=True
                )
            else:
                attrs["source"] = info.url

        attrs.setdefault(
            "realthumbnail",
            self.get_thumb_url(info.url, info.width, info.height, thumb_size),
        )
        attrs.setdefault(
            "realicon", self.get_thumb_url(info.url, info.width, info.height, icon_size)
        )
        attrs["author"] = info.user
        attrs["datemodified"] = parse_timestamp(info.timestamp)
        return attrs

    def get_thumb_url(
        self,
        image_url: str,
        orig_width: int,
        orig_height: int,
        thumb_width: int = 75,
        force: bool = False,
    ) -> str:
        """Build the Commons thumbnail URL for an original upload URL.

        Args:
            image_url: Original file URL under ``settings.commons_main_dir``
            orig_width: Original width in pixels
            orig_height: Original height in pixels
            thumb_width: Requested thumbnail width; scaled down for portrait images
            force: Build a thumbnail URL even when the original already fits

        Returns:
            Thumbnail URL, the original URL when no thumbnail is needed, the
            generic GIF icon for GIFs, or "" when ``image_url`` is empty.

        Example:
            >>> search.get_thumb_url(
            ...     "https://upload.wikimedia.org/wikipedia/commons/a/ab/Tower.jpg", 400, 800
            ... )
            'https://upload.wikimedia.org/wikipedia/commons/thumb/a/ab/Tower.jpg/38px-Tower.jpg'
        """
        if not force and orig_width <= thumb_width and orig_height <= thumb_width:
            return image_url
        if not image_url:
            return ""

        main_dir = settings.commons_main_dir
        short_path = image_url.replace(main_dir, "")
        extension = get_extension(short_path).lower()
        if extension == "gif":
            # Static thumbnails would drop the animation
            return self.icon_resolver(".gif")

        dir_parts = short_path.split("/")
        filename = dir_parts[-1]
        if orig_height > orig_width:
            thumb_width = round_half_up(thumb_width * orig_width / orig_height)

        thumb_url = f"{main_dir}thumb/{'/'.join(dir_parts)}/{thumb_width}px-{filename}"
        if extension == "svg":
            thumb_url += ".png"
        return thumb_url

    # -------------------- Authenticated / lookup actions --------------------
    def login(self, user: str, password: str) -> Optional[MediaWikiSession]:
        """Log in with a bot password; returns the session or None on failure."""
        data = self._base_params()
        data.update({"action": "login", "lgname": user, "lgpassword": password})
        try:
            payload = self.transport.post(self.api_url, data)
        except (TransportError, ResponseFormatError) as e:
            logger.warning("Wikimedia login for %r failed: %s", user, e)
            return None

        result = payload.get("login", {}) if isinstance(payload, dict) else {}
        if result.get("result") != "Success" and not result.get("sessionid"):
            logger.info("Wikimedia login for %r rejected: %s", user, result.get("result"))
            return None
        try:
            return MediaWikiSession(
                user_id=result.get("lguserid"),
                username=result.get("lgusername", user),
                token=result.get("lgtoken", ""),
            )
        except ValidationError:
            logger.warning("Wikimedia login for %r returned an incomplete session", user)
            return None

    def logout(self) -> None:
        data = self._base_params()
        data["action"] = "logout"
        try:
            self.transport.post(self.api_url, data)
        except (TransportError, ResponseFormatError) as e:
            logger.warning("Wikimedia logout failed: %s", e)

    def get_image_url(self, titles: Union[str, Sequence[str]]) -> List[str]:
        """Resolve one or more File: titles to their original image URLs."""
        if isinstance(titles, str):
            joined = unquote(titles)
        else:
            joined = "|".join(unquote(title) for title in titles)

        data = self._base_params()
        data.update(
            {"action": "query", "titles": joined, "prop": "imageinfo", "iiprop": "url"}
        )
        return [
            wiki_page.imageinfo[0].url
            for wiki_page in self._fetch_pages("POST", data)
            if wiki_page.imageinfo and wiki_page.imageinfo[0].url
        ]

    def get_images_by_page(self, title: str) -> Dict[str, str]:
        """Map each image used on the wiki page ``title`` to its URL."""
        data = self._base_params()
        data.update(
            {
                "action": "query",
                "generator": "images",
                "titles": unquote(title),
                "prop": "images|info|imageinfo",
                "iiprop": "url",
            }
        )
        return {
            wiki_page.title: wiki_page.imageinfo[0].url
            for wiki_page in self._fetch_pages("POST", data)
            if wiki_page.imageinfo
        }

    def _fetch_pages(self, method: str, params: Dict[str, Any]) -> List[MediaWikiPage]:
        """Run one query and return its pages in ranking order; [] on failure."""
        try:
            if method == "GET":
                payload = self.transport.get(self.api_url, params)
            else:
                payload = self.transport.post(self.api_url, params)
        except (TransportError, ResponseFormatError) as e:
            logger.warning("Wikimedia %s %s failed: %s", params.get("action"), method, e)
            return []

        try:
            response = parse_provider_response(self.provider, payload)
        except ValidationError as e:
            logger.warning("Unexpected Wikimedia response: %s", e)
            return []

        pages: List[MediaWikiPage] = []
        for page_id, raw in response.query.pages.items():
            try:
                pages.append(MediaWikiPage.model_validate(raw))
            except ValidationError:
                logger.debug("Skipping malformed page %s", page_id)

        # Pages are keyed by id; "index" carries the search rank when present
        return sorted(pages, key=lambda p: (p.index is None, p.index or 0))
