from __future__ import annotations

from typing import Any, Mapping, Protocol


class IHttpTransport(Protocol):
    """Performs exactly one blocking HTTP request per call.

    Implementations raise TransportError when the call fails or times out and
    ResponseFormatError when the body cannot be decoded.
    """

    def get(self, url: str, params: Mapping[str, Any]) -> Any:
        """GET ``url`` with a query string and return the decoded body."""
        ...

    def post(self, url: str, data: Mapping[str, Any]) -> Any:
        """POST form-encoded ``data`` to ``url`` and return the decoded body."""
        ...
