"""Command-line entry point: github-api [options] <action> <url> [payload]."""

import argparse
import json
import logging
import sys

from . import __version__
from .client import GitHubRestClient
from .credentials import resolve_token
from .errors import GitHubApiError, UsageError
from .models import ACTIONS, PAYLOAD_REQUIRED, ApiRequest
from .paginator import fetch_all_pages
from .settings import Settings, load_settings
from .urls import normalize_url

logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

USAGE = """\
%(prog)s [options] <action> <url> [payload]
       %(prog)s [options] --stats
       %(prog)s --version | --help"""

EPILOG = """\
actions: get, post, put, patch, delete (case-insensitive)

examples:
  %(prog)s get /repos/octocat/hello-world/issues?state=open
  %(prog)s -p get /orgs/octocat/repos
  %(prog)s post /repos/octocat/hello-world/issues '{"title": "Bug"}'

The token is read from GH_OAUTH_TOKEN, or from the api.github.com entry
of ~/.netrc."""


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that reports problems as UsageError instead of exiting with 2."""

    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="github-api",
        usage=USAGE,
        description="Call the GitHub REST API",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("action", nargs="?", help="HTTP method")
    parser.add_argument("url", nargs="?", help="API path, e.g. /repos/owner/repo")
    parser.add_argument("payload", nargs="?", help="JSON request body (required for post and put)")
    parser.add_argument(
        "-p",
        "--paginate",
        action="store_true",
        help="Fetch every page and print one merged JSON array",
    )
    parser.add_argument(
        "-i",
        "--include-headers",
        action="store_true",
        help="Print the response headers before the body",
    )
    parser.add_argument(
        "-s",
        "--stats",
        action="store_true",
        help="Show the API rate limit status",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse and validate arguments; the action is normalized to upper case."""
    args = build_parser().parse_intermixed_args(argv)

    if args.stats:
        if args.action is not None:
            raise UsageError("--stats does not take an action or url")
        if args.paginate:
            raise UsageError("--stats cannot be combined with --paginate")
        args.action, args.url = "GET", "/rate_limit"
        return args

    if args.action is None:
        raise UsageError("missing action (one of: get, post, put, patch, delete)")
    args.action = args.action.upper()
    if args.action not in ACTIONS:
        raise UsageError(f"invalid action '{args.action.lower()}' (one of: get, post, put, patch, delete)")
    if args.action == "DELETE" and args.payload:
        raise UsageError("delete does not take a payload")
    if args.action in PAYLOAD_REQUIRED and not args.payload:
        raise UsageError(f"{args.action.lower()} requires a payload")
    if args.paginate and args.include_headers:
        raise UsageError("--paginate and --include-headers cannot be used together")
    if not args.url:
        raise UsageError("missing url")
    if args.paginate and args.action != "GET":
        raise UsageError("--paginate only applies to get requests")
    return args


def configure_logging(level: str):
    """Send this package's log records to stderr tagged with their severity."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    package_logger = logging.getLogger(__package__)
    package_logger.handlers[:] = [handler]
    package_logger.setLevel(level.upper())


def _write(text: str):
    sys.stdout.write(text)
    if text and not text.endswith("\n"):
        sys.stdout.write("\n")
    sys.stdout.flush()


def run(args: argparse.Namespace, settings: Settings) -> int:
    """Execute a validated request and print its result. Returns the exit code."""
    token = resolve_token(settings)
    path, query = normalize_url(args.url, settings.api_host, settings.gh_api_base)
    request = ApiRequest(method=args.action, path=path, query=query, payload=args.payload or None)

    with GitHubRestClient(token, api_base=settings.gh_api_base, timeout=settings.gh_timeout) as client:
        if args.paginate:
            merged = fetch_all_pages(client, request, max_workers=settings.gh_max_workers)
            json.dump(merged, sys.stdout, indent=2, ensure_ascii=False)
            sys.stdout.write("\n")
            return 0

        resp = client.send(request)
        if args.include_headers:
            sys.stdout.write(resp.headers)
        _write(resp.body)
        if not resp.ok:
            logger.error("%s %s returned HTTP %d", request.method, path, resp.status)
            return 1
        return 0


def main(argv: list[str] | None = None):
    configure_logging("WARNING")
    try:
        settings = load_settings()
        configure_logging(settings.gh_log_level)
        args = parse_args(argv)
        code = run(args, settings)
    except GitHubApiError as e:
        logger.error("%s", e)
        sys.exit(1)
    except KeyboardInterrupt:
        # Pages and workers are released by the paginator; nothing is printed.
        sys.exit(0)
    sys.exit(code)


if __name__ == "__main__":
    main()
