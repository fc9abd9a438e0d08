"""Build request URLs: strip host prefixes, add the page size, percent-encode."""

from urllib.parse import quote

from .models import PER_PAGE

# URL delimiters and existing %XX escapes survive encoding; everything else
# outside the unreserved set (space ! # $ ' ( ) among them) is escaped.
_SAFE_CHARS = ":/?&=%+,;@*[]"


def strip_host(url: str, host: str, api_base: str | None = None) -> str:
    """Remove a leading API root, ``http(s)://<host>`` or bare ``<host>`` from url.

    The full api_base (with any path such as ``/api/v3``) is tried first.
    """
    prefixes = []
    if api_base:
        base = api_base.rstrip("/")
        prefixes.extend([base, base.split("://", 1)[-1]])
    prefixes.extend([f"https://{host}", f"http://{host}", host])
    for prefix in prefixes:
        if url.lower().startswith(prefix.lower()):
            return url[len(prefix):]
    return url


def normalize_url(url: str, host: str, api_base: str | None = None) -> tuple[str, str]:
    """Split url into (path, query) and append the fixed page size.

    >>> normalize_url("/repos/x/y/issues?state=open", "api.github.com")
    ('/repos/x/y/issues', 'state=open&per_page=100')
    """
    url = strip_host(url.strip(), host, api_base)
    if not url.startswith("/"):
        url = f"/{url}"
    path, _, existing = url.partition("?")
    query = f"{existing}&per_page={PER_PAGE}" if existing else f"per_page={PER_PAGE}"
    return path, query


def without_page(query: str) -> str:
    """Drop every ``page=`` parameter, keeping the others in order."""
    return "&".join(p for p in query.split("&") if p and not p.startswith("page="))


def with_page(query: str, page: int) -> str:
    base = without_page(query)
    return f"{base}&page={page}" if base else f"page={page}"


def encode_url(url: str) -> str:
    return quote(url, safe=_SAFE_CHARS)


def build_url(api_base: str, path: str, query: str = "") -> str:
    """Join the API root, path and query, encoding the path and query."""
    target = f"{path}?{query}" if query else path
    return f"{api_base.rstrip('/')}{encode_url(target)}"
