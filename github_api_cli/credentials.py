"""Resolve the GitHub token from the environment or a netrc file."""

import logging
import netrc
from pathlib import Path

from .errors import CredentialError
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


def read_netrc_token(path: Path, host: str) -> str | None:
    """Return the password field of the ``machine <host>`` entry, if any.

    The file is only read, never created or modified.
    """
    if not path.is_file():
        return None
    try:
        entry = netrc.netrc(path).authenticators(host)
    except netrc.NetrcParseError as e:
        raise CredentialError(f"Cannot parse {e.filename} line {e.lineno}: {e.msg}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise CredentialError(f"Cannot read {path}: {e}") from e
    if entry is None:
        return None
    _login, _account, password = entry
    return password or None


def resolve_token(settings: Settings | None = None) -> str:
    """Return the bearer token, preferring GH_OAUTH_TOKEN over the netrc file."""
    settings = settings or get_settings()
    if settings.gh_oauth_token:
        logger.debug("Using token from GH_OAUTH_TOKEN")
        return settings.gh_oauth_token

    token = read_netrc_token(settings.gh_netrc, settings.api_host)
    if not token:
        raise CredentialError(
            f"No GitHub token found: set GH_OAUTH_TOKEN or add a "
            f"'machine {settings.api_host}' entry with a password to {settings.gh_netrc}"
        )
    logger.debug("Using token from %s", settings.gh_netrc)
    return token
