from .http_transport import RequestsTransport
from .image_search_mediawiki import MediaWikiImageSearch
from .image_search_unsplash import UnsplashImageSearch
from .preferences_file import JsonFilePreferenceStore

__all__ = [
    "RequestsTransport",
    "MediaWikiImageSearch",
    "UnsplashImageSearch",
    "JsonFilePreferenceStore",
]
