"""Unit tests for argument parsing and validation."""

import pytest

from github_api_cli.cli import parse_args
from github_api_cli.errors import UsageError


def describe_parse_args():
    def it_parses_action_url_and_payload():
        args = parse_args(["post", "/repos/o/r/issues", '{"title": "x"}'])
        assert args.action == "POST"
        assert args.url == "/repos/o/r/issues"
        assert args.payload == '{"title": "x"}'

    def it_normalizes_action_case():
        assert parse_args(["GeT", "/user"]).action == "GET"

    def it_accepts_flags_in_any_position():
        args = parse_args(["get", "-p", "/orgs/o/repos"])
        assert args.paginate
        assert args.url == "/orgs/o/repos"

        args = parse_args(["get", "/user", "--include-headers"])
        assert args.include_headers

    def describe_stats():
        def it_targets_rate_limit():
            args = parse_args(["--stats"])
            assert (args.action, args.url) == ("GET", "/rate_limit")

        def it_rejects_explicit_action():
            with pytest.raises(UsageError, match="--stats"):
                parse_args(["-s", "get", "/user"])

        def it_rejects_paginate():
            with pytest.raises(UsageError, match="--paginate"):
                parse_args(["-s", "-p"])

        def it_allows_headers():
            assert parse_args(["-s", "-i"]).include_headers

    def describe_failures():
        @pytest.mark.parametrize("action", ["fetch", "head", "options", "list"])
        def it_rejects_unknown_actions(action):
            with pytest.raises(UsageError, match="invalid action"):
                parse_args([action, "/user"])

        def it_rejects_missing_action():
            with pytest.raises(UsageError, match="missing action"):
                parse_args([])

        def it_rejects_delete_with_payload():
            with pytest.raises(UsageError, match="delete does not take a payload"):
                parse_args(["delete", "/repos/o/r", "{}"])

        def it_allows_delete_without_payload():
            assert parse_args(["delete", "/repos/o/r"]).action == "DELETE"

        @pytest.mark.parametrize("action", ["post", "put"])
        def it_rejects_missing_payload(action):
            with pytest.raises(UsageError, match="requires a payload"):
                parse_args([action, "/repos/o/r/issues"])

        @pytest.mark.parametrize("action", ["post", "put"])
        def it_rejects_empty_payload(action):
            with pytest.raises(UsageError, match="requires a payload"):
                parse_args([action, "/repos/o/r/issues", ""])

        def it_allows_patch_without_payload():
            assert parse_args(["patch", "/repos/o/r"]).payload is None

        def it_rejects_paginate_with_headers():
            with pytest.raises(UsageError, match="cannot be used together"):
                parse_args(["-p", "-i", "get", "/user/repos"])

        def it_rejects_missing_url():
            with pytest.raises(UsageError, match="missing url"):
                parse_args(["get"])

        def it_rejects_empty_url():
            with pytest.raises(UsageError, match="missing url"):
                parse_args(["get", ""])

        def it_rejects_paginating_non_get():
            with pytest.raises(UsageError, match="only applies to get"):
                parse_args(["-p", "patch", "/repos/o/r"])

        def it_rejects_unknown_flags():
            with pytest.raises(UsageError, match="unrecognized arguments"):
                parse_args(["get", "/user", "--verbose"])

        def it_rejects_extra_positionals():
            with pytest.raises(UsageError, match="unrecognized arguments"):
                parse_args(["post", "/user", "{}", "extra"])

    def describe_help_and_version():
        def it_prints_help_and_exits_zero(capsys):
            with pytest.raises(SystemExit) as exc:
                parse_args(["bogus", "--help"])
            assert exc.value.code == 0
            assert "github-api" in capsys.readouterr().out

        def it_prints_version_and_exits_zero(capsys):
            from github_api_cli import __version__

            with pytest.raises(SystemExit) as exc:
                parse_args(["--version"])
            assert exc.value.code == 0
            assert __version__ in capsys.readouterr().out
