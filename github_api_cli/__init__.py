"""Call the GitHub REST API from the command line.

Adds the token, the page size and, with ``--paginate``, fetches every page
of a listing concurrently and merges the pages into one JSON array.
"""

__version__ = "0.1.0"

from .cli import main
from .client import GitHubRestClient
from .models import ApiRequest, ApiResponse
from .paginator import fetch_all_pages

__all__ = ["main", "GitHubRestClient", "ApiRequest", "ApiResponse", "fetch_all_pages", "__version__"]
