"""
Image helpers shared by the provider adapters.

Covers MIME filtering, file extension handling, the generic file-type icon
lookup used when an image has no real preview, and the rounding rule used
when scaling thumbnail widths.
"""

import math
import posixpath
from typing import Callable, Dict

from free_images.core.config import settings

IMAGE_MIME_TYPES = ("image/jpeg", "image/png", "image/gif", "image/svg+xml")

# Extension -> icon name, following the usual "f/<type>" icon set of file pickers
_EXTENSION_ICONS: Dict[str, str] = {
    "jpg": "image",
    "jpeg": "image",
    "jpe": "image",
    "png": "image",
    "bmp": "image",
    "tif": "image",
    "tiff": "image",
    "webp": "image",
    "svg": "image",
    "gif": "gif",
    "pdf": "pdf",
    "ogg": "audio",
    "oga": "audio",
    "mp3": "mp3",
    "wav": "wav",
    "flac": "audio",
    "ogv": "video",
    "webm": "video",
    "mp4": "mpeg",
    "djvu": "document",
    "txt": "text",
}
_UNKNOWN_ICON = "unknown"

IconResolver = Callable[[str], str]


def is_image_mime(mime: str) -> bool:
    return mime in IMAGE_MIME_TYPES


def get_extension(path: str) -> str:
    """Return the extension of the last path component, without the dot.

    Mirrors ``pathinfo(PATHINFO_EXTENSION)``: text after the last dot of the
    basename, case preserved, empty when there is none.
    """
    basename = posixpath.basename(path)
    if "." not in basename:
        return ""
    return basename.rsplit(".", 1)[1]


def file_extension_icon(filename: str) -> str:
    """Return the generic icon URL for a file name (or a bare ``.ext``)."""
    extension = get_extension(filename).lower()
    icon = _EXTENSION_ICONS.get(extension, _UNKNOWN_ICON)
    return f"{settings.icon_base_url}{icon}{settings.icon_extension}"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (37.5 -> 38)."""
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))
