"""Integration tests for the picker HTTP API.

The real repository and MediaWiki adapter are wired together; only the
transport is faked.
"""

import pytest
from fastapi.testclient import TestClient

from conftest import COMMONS, FakeTransport, make_imageinfo, mediawiki_payload
from free_images.application.use_cases.repository import FreeImagesRepository
from free_images.core.exceptions import ConfigurationError, TransportError
from free_images.infrastructure.adapters import JsonFilePreferenceStore, MediaWikiImageSearch
from free_images.presentation.api.v1.dependencies.images import get_repository
from free_images.presentation.main import create_application


def _payload():
    info = make_imageinfo(
        "a/ab/Castle.jpg",
        2000,
        1500,
        thumb={
            "thumburl": COMMONS + "thumb/a/ab/Castle.jpg/800px-Castle.jpg",
            "thumbwidth": 800,
            "thumbheight": 600,
        },
    )
    return mediawiki_payload({"pageid": 7, "index": 1, "title": "File:Castle.jpg", "imageinfo": [info]})


@pytest.fixture
def transport():
    return FakeTransport(payload=_payload())


@pytest.fixture
def client(transport, tmp_path):
    app = create_application()
    prefs = JsonFilePreferenceStore(path=str(tmp_path / "prefs.json"))

    def override():
        return FreeImagesRepository(MediaWikiImageSearch(transport=transport), prefs)

    app.dependency_overrides[get_repository] = override
    with TestClient(app) as test_client:
        yield test_client


def test_listing_returns_records(client, transport):
    resp = client.get(
        "/api/v1/images",
        params={"free_images_keyword": "castle", "page": "2", "free_images_maxwidth": 800},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["page"] == 2
    assert body["pages"] == -1
    assert body["list"][0]["title"] == "Castle.jpg"
    assert body["list"][0]["source"].endswith("800px-Castle.jpg")
    params = transport.calls[0]["params"]
    assert params["gsroffset"] == 24
    assert params["iiurlwidth"] == 800
    assert params["iiurlheight"] == 1024


def test_max_width_preference_persists_between_requests(client, transport):
    client.get("/api/v1/images", params={"free_images_keyword": "castle", "free_images_maxwidth": 500})
    client.get("/api/v1/images", params={"free_images_keyword": "castle"})

    assert transport.calls[1]["params"]["iiurlwidth"] == 500
    form = client.get("/api/v1/images/login-form").json()
    assert form["login"][1]["value"] == 500


def test_next_page_uses_last_keyword(client, transport):
    resp = client.get("/api/v1/images", params={"page": "3", "last_keyword": "castle"})

    assert resp.status_code == 200
    assert transport.calls[0]["params"]["gsrsearch"] == "castle"
    assert transport.calls[0]["params"]["gsroffset"] == 48


def test_no_keyword_returns_login_form(client, transport):
    resp = client.get("/api/v1/images")

    assert resp.status_code == 200
    body = resp.json()
    assert body["allowcaching"] is False
    assert [field["name"] for field in body["login"]][0] == "free_images_keyword"
    assert transport.calls == []


def test_transport_failure_is_an_empty_listing(client, transport):
    transport.error = TransportError("timed out")

    body = client.get("/api/v1/images", params={"s": "castle"}).json()

    assert body["list"] == []
    assert body["pages"] == 0


def test_search_endpoint(client, transport):
    resp = client.get("/api/v1/images/search", params={"q": "castle", "page": 1})

    assert resp.status_code == 200
    assert resp.json()["list"][0]["license"] == "cc-sa"
    assert transport.calls[0]["params"]["gsroffset"] == 24


def test_search_endpoint_requires_query(client):
    assert client.get("/api/v1/images/search").status_code == 422


def test_configuration_error_is_reported(tmp_path):
    app = create_application()

    def broken():
        raise ConfigurationError("Unknown provider 'flickr'", config_key="provider")

    app.dependency_overrides[get_repository] = broken
    with TestClient(app) as test_client:
        resp = test_client.get("/api/v1/images", params={"s": "castle"})

    assert resp.status_code == 500
    assert resp.json()["detail"]["error_code"] == "CONFIGURATION_ERROR"


def test_root_endpoint(client):
    assert client.get("/api/v1/").json()["status"] == "healthy"


def test_health_reports_provider(client):
    body = client.get("/api/v1/health").json()
    assert body["status"] in {"healthy", "warning", "unhealthy"}
    assert body["provider"] in {"wikimedia", "unsplash"}
    assert body["process_memory_mb"] > 0


@pytest.mark.parametrize("maxwidth", ["", "wide"])
def test_blank_or_junk_max_size_keeps_stored_preference(client, transport, maxwidth):
    client.get("/api/v1/images", params={"free_images_keyword": "castle", "free_images_maxwidth": 640})

    resp = client.get(
        "/api/v1/images",
        params={
            "free_images_keyword": "castle",
            "free_images_maxwidth": maxwidth,
            "free_images_maxheight": "",
        },
    )

    assert resp.status_code == 200
    assert resp.json()["list"][0]["title"] == "Castle.jpg"
    params = transport.calls[1]["params"]
    assert params["iiurlwidth"] == 640
    assert params["iiurlheight"] == 1024
