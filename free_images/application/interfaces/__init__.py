from .image_search import IImageSearch
from .transport import IHttpTransport
from .preferences import IPreferenceStore

__all__ = [
    "IImageSearch",
    "IHttpTransport",
    "IPreferenceStore",
]
