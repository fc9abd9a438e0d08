"""Data models and constants for GitHub API requests."""

from dataclasses import dataclass, field

ACTIONS = ("GET", "POST", "PUT", "PATCH", "DELETE")
PAYLOAD_REQUIRED = ("POST", "PUT")
PER_PAGE = 100  # GitHub REST API maximum page size


@dataclass
class ApiRequest:
    """A single GitHub REST API call, before the page parameter is applied."""

    method: str
    path: str
    query: str = ""
    payload: str | None = None


@dataclass
class ApiResponse:
    """Response from the GitHub REST API client."""

    status: int
    body: str
    headers: str = ""
    links: dict[str, dict[str, str]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300
