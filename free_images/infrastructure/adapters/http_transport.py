from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import requests

from free_images.core.config import settings
from free_images.core.exceptions import ResponseFormatError, TransportError

logger = logging.getLogger(__name__)


class RequestsTransport:
    """IHttpTransport implementation on top of a `requests.Session`.

    One request per call, no retries and no response cache.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": user_agent or settings.user_agent})

    def get(self, url: str, params: Mapping[str, Any]) -> Any:
        return self._request("GET", url, params=dict(params))

    def post(self, url: str, data: Mapping[str, Any]) -> Any:
        return self._request("POST", url, data=dict(data))

    def close(self) -> None:
        self.session.close()

    def _request(self, method: str, url: str, **kwargs) -> Any:
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
            resp.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise TransportError(
                f"{method} {url} returned HTTP {status}", url=url, status_code=status
            ) from e
        except requests.exceptions.Timeout as e:
            raise TransportError(f"{method} {url} timed out", url=url) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}", url=url) from e

        logger.debug("%s %s -> %d", method, resp.url, resp.status_code)
        try:
            return resp.json()
        except ValueError as e:
            raise ResponseFormatError(f"Response from {url} is not JSON", url=url) from e
