"""Exceptions raised by the GitHub API wrapper.

Every error is fatal: ``cli.main`` reports it on stderr and exits with 1.
"""


class GitHubApiError(Exception):
    """Base class for all errors reported by the CLI."""


class UsageError(GitHubApiError):
    """Bad flag, bad positional arguments, or an invalid action/payload combination."""


class ConfigError(GitHubApiError):
    """An environment or .env setting has an invalid value."""


class CredentialError(GitHubApiError):
    """No token found in the environment or the netrc file."""


class TransportError(GitHubApiError):
    """Network or protocol failure reported by the HTTP layer."""


class PaginationError(GitHubApiError):
    """A page is missing, malformed, or failed while fetching a paginated listing."""
