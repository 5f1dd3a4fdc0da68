"""
Test configuration/fixtures for the image search adapters and repository.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import pytest

from free_images.core.config import settings

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

COMMONS = "https://upload.wikimedia.org/wikipedia/commons/"


def pytest_configure(config):  # pylint: disable=unused-argument
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("free_images").setLevel(logging.DEBUG)


@pytest.fixture(autouse=True)
def log_test_name(request):
    """Log test name when test starts and finishes."""
    logger = logging.getLogger(request.node.nodeid)
    logger.info("Starting test: %s", request.node.name)
    start_time = datetime.now()

    def log_test_end():
        duration = (datetime.now() - start_time).total_seconds()
        logger.info("Finished in %.2fs", duration)

    request.addfinalizer(log_test_end)


@pytest.fixture(autouse=True)
def pinned_settings(monkeypatch, tmp_path):
    """Pin the values tests assert on, whatever the local .env says."""
    monkeypatch.setattr(settings, "thumbs_per_page", 24)
    monkeypatch.setattr(settings, "file_namespace", 6)
    monkeypatch.setattr(settings, "image_side_length", 1024)
    monkeypatch.setattr(settings, "thumb_size", 120)
    monkeypatch.setattr(settings, "icon_size", 24)
    monkeypatch.setattr(settings, "image_license", "cc-sa")
    monkeypatch.setattr(settings, "commons_main_dir", COMMONS)
    monkeypatch.setattr(settings, "icon_base_url", "/pix/f/")
    monkeypatch.setattr(settings, "icon_extension", ".png")
    monkeypatch.setattr(settings, "preferences_path", str(tmp_path / "prefs.json"))


class FakeTransport:
    """IHttpTransport double: records calls, returns a canned body or raises."""

    def __init__(self, payload: Any = None, error: Optional[Exception] = None):
        self.payload = payload
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def _respond(self, method: str, url: str, params: Dict[str, Any]) -> Any:
        self.calls.append({"method": method, "url": url, "params": dict(params)})
        if self.error is not None:
            raise self.error
        return self.payload

    def get(self, url, params):
        return self._respond("GET", url, params)

    def post(self, url, data):
        return self._respond("POST", url, data)


def make_imageinfo(
    path: str,
    width: int,
    height: int,
    mime: str = "image/jpeg",
    thumb: Optional[Dict[str, Any]] = None,
    **extra,
) -> Dict[str, Any]:
    """Build one MediaWiki imageinfo entry for a file under the Commons root."""
    filename = path.rsplit("/", 1)[-1]
    info = {
        "url": COMMONS + path,
        "descriptionurl": f"https://commons.wikimedia.org/wiki/File:{filename}",
        "width": width,
        "height": height,
        "mime": mime,
        "size": 123456,
        "user": "Uploader",
        "timestamp": "2019-03-01T12:00:00Z",
    }
    if thumb:
        info.update(thumb)
    info.update(extra)
    return info


def mediawiki_payload(*pages: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "batchcomplete": "",
        "query": {"pages": {str(p.get("pageid", i + 1)): p for i, p in enumerate(pages)}},
    }
