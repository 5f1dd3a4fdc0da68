from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class ImageRecord(BaseModel):
    """One picker entry.

    ``thumbnail`` is always the generic file-type icon; ``realthumbnail`` and
    ``realicon`` carry the provider's actual previews when known.
    """

    title: str
    source: str
    url: str
    thumbnail: str
    thumbnail_width: int
    thumbnail_height: int
    license: str
    author: Optional[str] = None
    realthumbnail: Optional[str] = None
    realicon: Optional[str] = None
    image_width: Optional[int] = None
    image_height: Optional[int] = None
    size: Optional[int] = None
    datemodified: Optional[int] = None

    def to_listing_entry(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


# -------------------- MediaWiki (Wikimedia Commons) --------------------
class MediaWikiImageInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    url: str = ""
    descriptionurl: str = ""
    width: int = 0
    height: int = 0
    thumburl: Optional[str] = None
    thumbwidth: Optional[int] = None
    thumbheight: Optional[int] = None
    mime: str = ""
    size: Optional[int] = None
    user: Optional[str] = None
    timestamp: Optional[str] = None


class MediaWikiPage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    pageid: Optional[int] = None
    ns: Optional[int] = None
    title: str = ""
    index: Optional[int] = None  # search rank when generator=search
    imageinfo: List[MediaWikiImageInfo] = Field(default_factory=list)


class MediaWikiQuery(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # Pages stay raw so that one malformed page only drops itself
    pages: Dict[str, Any] = Field(default_factory=dict)


class MediaWikiSearchResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    provider: Literal["wikimedia"] = "wikimedia"
    query: MediaWikiQuery = Field(default_factory=MediaWikiQuery)


class MediaWikiSession(BaseModel):
    user_id: int
    username: str
    token: str


# -------------------- Unsplash --------------------
class UnsplashUser(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""


class UnsplashUrls(BaseModel):
    model_config = ConfigDict(extra="ignore")

    raw: Optional[str] = None
    full: Optional[str] = None
    regular: Optional[str] = None
    small: Optional[str] = None
    thumb: Optional[str] = None


class UnsplashPhoto(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str = ""
    slug: Optional[str] = None
    user: UnsplashUser = Field(default_factory=UnsplashUser)
    urls: UnsplashUrls
    updated_at: Optional[str] = None


class UnsplashSearchResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    provider: Literal["unsplash"] = "unsplash"
    total: int = 0
    total_pages: int = 0
    results: List[Any] = Field(default_factory=list)


ProviderResponse = Annotated[
    Union[MediaWikiSearchResponse, UnsplashSearchResponse],
    Field(discriminator="provider"),
]

_provider_response_adapter = TypeAdapter(ProviderResponse)


def parse_provider_response(provider: str, payload: Any) -> ProviderResponse:
    """Validate a decoded provider body against the schema for ``provider``.

    Raises pydantic.ValidationError when the payload does not fit.
    """
    if isinstance(payload, dict):
        payload = {**payload, "provider": provider}
    return _provider_response_adapter.validate_python(payload)


# -------------------- Repository (picker) --------------------
class Listing(BaseModel):
    list: List[Dict[str, Any]] = Field(default_factory=list)
    page: int = 1
    pages: int = 0  # -1: unknown, keep paging; 0: no paging; N: last page
    nologin: bool = True
    norefresh: bool = True
    nosearch: bool = True


class LoginState(BaseModel):
    keyword: str = ""
    authenticated: bool = False


class FormField(BaseModel):
    label: str
    type: str = "text"
    name: str
    value: Union[str, int] = ""
    id: Optional[str] = None


class LoginForm(BaseModel):
    login: List[FormField]
    nologin: bool = True
    norefresh: bool = True
    nosearch: bool = True
    allowcaching: bool = False  # max width/height are dynamic
