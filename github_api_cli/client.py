"""Thin GitHub REST API client using httpx."""

import logging

import httpx

from .errors import TransportError
from .models import ApiRequest, ApiResponse
from .urls import build_url, with_page

logger = logging.getLogger(__name__)

API_BASE = "https://api.github.com"


def format_raw_headers(resp: httpx.Response) -> str:
    """Render the status line and headers the way they came off the wire."""
    lines = [f"{resp.http_version} {resp.status_code} {resp.reason_phrase}".rstrip()]
    lines.extend(
        f"{key.decode('latin-1')}: {value.decode('latin-1')}" for key, value in resp.headers.raw
    )
    return "\r\n".join(lines) + "\r\n\r\n"


class GitHubRestClient:
    """Authenticated client for arbitrary GitHub REST API endpoints.

    Issues exactly one HTTP call per ``send``. Status codes are not
    interpreted; only failures of the HTTP layer itself are raised.
    """

    def __init__(self, token, api_base=API_BASE, timeout=None, transport=None):
        self._api_base = api_base
        self._client = httpx.Client(
            headers={
                "Authorization": f"token {token}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    def url_for(self, request: ApiRequest, page: int | None = None) -> str:
        query = with_page(request.query, page) if page is not None else request.query
        return build_url(self._api_base, request.path, query)

    def send(self, request: ApiRequest, page: int | None = None) -> ApiResponse:
        """Issue one request, optionally for a specific page.

        Args:
            request: method, path, query and payload to send
            page: page number appended as ``page=<n>`` (replaces any existing one)

        Returns:
            ApiResponse with status, raw body, raw header block and parsed links.
        """
        url = self.url_for(request, page)
        logger.debug("%s %s", request.method, url)
        try:
            resp = self._client.request(
                request.method,
                url,
                content=request.payload.encode() if request.payload else None,
            )
        except httpx.HTTPError as e:
            raise TransportError(f"{request.method} {url}: {e}") from e

        logger.debug("%s %s -> %d", request.method, url, resp.status_code)
        return ApiResponse(
            status=resp.status_code,
            body=resp.text,
            headers=format_raw_headers(resp),
            links=dict(resp.links),
        )

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
