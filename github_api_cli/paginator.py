"""Fetch every page of a GitHub list endpoint and merge them into one array.

The first response's ``Link`` header names the last page; the remaining pages
are fetched concurrently and merged by page number, never by arrival order.
"""

import json
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed

import httpx

from .client import GitHubRestClient
from .errors import PaginationError, TransportError
from .models import ApiRequest, ApiResponse
from .urls import without_page

logger = logging.getLogger(__name__)

MAX_WORKERS = 10


def last_page_number(links: dict[str, dict[str, str]]) -> int:
    """Return the ``page`` value of the ``rel="last"`` link, or 1 if there is none."""
    last = links.get("last")
    if not last or not last.get("url"):
        return 1
    value = httpx.URL(last["url"]).params.get("page")
    if value is None:
        return 1
    try:
        page = int(value)
    except ValueError:
        raise PaginationError(f"Invalid page number in Link header: {value!r}") from None
    if page < 1:
        raise PaginationError(f"Invalid page number in Link header: {page}")
    return page


def merge_pages(pages: dict[int, str], last_page: int) -> list:
    """Concatenate the JSON arrays of pages 1..last_page in page order."""
    if not pages:
        raise PaginationError("No pages were fetched")
    merged = []
    for page in range(1, last_page + 1):
        if page not in pages:
            raise PaginationError(f"Page {page} of {last_page} is missing")
        try:
            items = json.loads(pages[page])
        except json.JSONDecodeError as e:
            raise PaginationError(f"Page {page} is not valid JSON: {e}") from e
        if not isinstance(items, list):
            raise PaginationError(f"Page {page} is not a JSON array; the endpoint is not paginated")
        merged.extend(items)
    return merged


class Paginator:
    """Owns the per-page results of one paginated listing."""

    def __init__(self, client: GitHubRestClient, request: ApiRequest, max_workers: int = MAX_WORKERS):
        self.client = client
        self.request = ApiRequest(
            method=request.method,
            path=request.path,
            query=without_page(request.query),
            payload=request.payload,
        )
        self.max_workers = max_workers
        self.last_page = 1
        self.pages: dict[int, str] = {}
        self._executor: ThreadPoolExecutor | None = None

    def _store(self, page: int, response: ApiResponse):
        if not response.ok:
            raise TransportError(
                f"{self.request.method} {self.client.url_for(self.request, page)} "
                f"returned HTTP {response.status}: {response.body.strip()}"
            )
        self.pages[page] = response.body

    def run(self) -> list:
        """Fetch all pages and return the merged list.

        Any failed page aborts the whole listing; no partial result is returned.
        """
        first = self.client.send(self.request)
        self._store(1, first)
        self.last_page = last_page_number(first.links)
        logger.info("%s spans %d page(s)", self.request.path, self.last_page)

        if self.last_page > 1:
            self._executor = ThreadPoolExecutor(max_workers=min(self.max_workers, self.last_page - 1))
            futures = {
                self._executor.submit(self.client.send, self.request, page): page
                for page in range(2, self.last_page + 1)
            }
            for future in as_completed(futures):
                self._store(futures[future], future.result())

        return merge_pages(self.pages, self.last_page)

    def close(self):
        """Drop outstanding work and fetched pages; safe to call on any exit path."""
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None
        self.pages.clear()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


def fetch_all_pages(client: GitHubRestClient, request: ApiRequest, max_workers: int = MAX_WORKERS) -> list:
    with Paginator(client, request, max_workers=max_workers) as paginator:
        return paginator.run()
