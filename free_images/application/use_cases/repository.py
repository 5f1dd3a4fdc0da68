from __future__ import annotations

import html
import logging
from typing import Any, Dict, List, Optional, Union

from free_images.application.interfaces import IImageSearch, IPreferenceStore
from free_images.core.config import settings
from free_images.core.schemas import FormField, Listing, LoginForm, LoginState

logger = logging.getLogger(__name__)

PREF_MAXWIDTH = "repository_free_images_maxwidth"
PREF_MAXHEIGHT = "repository_free_images_maxheight"

STRINGS = {
    "pluginname": "Free images",
    "keyword": "Search for",
    "maxwidth": "Max image width (px)",
    "maxheight": "Max image height (px)",
}


def _to_int(value: Any) -> int:
    """Lenient integer coercion for request values ("" and junk become 0)."""
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return 0


class FreeImagesRepository:
    """File picker repository backed by a free image provider.

    The last search keyword is not kept here: ``check_login`` returns the
    keyword to remember and callers pass it back as ``last_keyword`` when
    asking for further pages.
    """

    def __init__(self, image_search: IImageSearch, preferences: IPreferenceStore) -> None:
        self.image_search = image_search
        self.preferences = preferences

    def _size_preference(self, name: str, param: Any) -> int:
        requested = _to_int(param)
        pref = _to_int(self.preferences.get(name, settings.image_side_length))
        if requested > 0 and requested != pref:
            pref = requested
            self.preferences.set(name, pref)
        return pref

    def get_maxwidth(self, param: Any = 0) -> int:
        """Max image width from the search form, falling back to the stored preference."""
        return self._size_preference(PREF_MAXWIDTH, param)

    def get_maxheight(self, param: Any = 0) -> int:
        """Max image height from the search form, falling back to the stored preference."""
        return self._size_preference(PREF_MAXHEIGHT, param)

    def check_login(
        self,
        keyword: str = "",
        s: str = "",
        page: Any = "",
        last_keyword: Optional[str] = None,
    ) -> LoginState:
        """Resolve the keyword for this request.

        ``keyword`` wins, then ``s``; a page request without a keyword
        continues the previous search given by ``last_keyword``.
        """
        resolved = keyword or s or ""
        if not resolved and page and last_keyword:
            resolved = last_keyword
        return LoginState(keyword=resolved, authenticated=bool(resolved))

    def get_listing(
        self, keyword: str, page: Any = "", maxwidth: Any = 0, maxheight: Any = 0
    ) -> Listing:
        current = max(_to_int(page), 1)
        overrides = self.image_search.size_params(
            self.get_maxwidth(maxwidth), self.get_maxheight(maxheight)
        )
        records = self.image_search.search_images(keyword, current - 1, overrides)

        if records:
            pages = -1  # total unknown, the next page can always be requested
        elif current > 1:
            pages = current  # nothing on this page, it is the last one
        else:
            pages = 0

        return Listing(
            list=[record.to_listing_entry() for record in records],
            page=current,
            pages=pages,
        )

    def print_login(self, ajax: bool = True) -> Union[LoginForm, str]:
        keyword = FormField(
            label=STRINGS["keyword"] + ": ",
            id="input_text_keyword",
            name="free_images_keyword",
            value="",
        )
        if not ajax:
            return (
                "<table>\n<tr>\n"
                f"<td>{html.escape(keyword.label)}</td>"
                f'<td><input name="{keyword.name}" type="text" /></td>\n'
                "</tr>\n</table>\n"
                '<input type="submit" />\n'
            )

        maxwidth = FormField(
            label=STRINGS["maxwidth"] + ": ",
            name="free_images_maxwidth",
            value=self.preferences.get(PREF_MAXWIDTH, settings.image_side_length),
        )
        maxheight = FormField(
            label=STRINGS["maxheight"] + ": ",
            name="free_images_maxheight",
            value=self.preferences.get(PREF_MAXHEIGHT, settings.image_side_length),
        )
        return LoginForm(login=[keyword, maxwidth, maxheight])

    def global_search(self) -> bool:
        return False

    def search(self, search_text: str, page: Any = 0) -> Dict[str, List[Dict[str, Any]]]:
        records = self.image_search.search_images(search_text, _to_int(page))
        return {"list": [record.to_listing_entry() for record in records]}

    def get_file_source_info(self, url: str) -> str:
        return url

    def contains_private_data(self) -> bool:
        return False
