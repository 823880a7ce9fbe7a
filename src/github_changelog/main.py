"""CLI entrypoint.

Resolves the changelog configuration for the current repository and exposes the
cached GitHub lookups for inspection.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from github_changelog import __version__
from github_changelog.configuration import Configuration, ResolveOptions, resolve
from github_changelog.errors import ConfigurationError
from github_changelog.github.client import MetadataClient
from github_changelog.logging import configure_logging
from github_changelog.repo_root import find_root_path
from github_changelog.settings import CredentialSettings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="github-changelog",
        description="Resolve changelog configuration and query cached GitHub metadata",
    )
    parser.add_argument("--version", action="version", version=f"github-changelog {__version__}")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (defaults to LOG_LEVEL or INFO)",
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Repository root (defaults to the git top-level of the current directory)",
    )
    parser.add_argument(
        "--next-version-from-metadata",
        action="store_true",
        help="Infer the next version from the package.json / lerna.json version",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("config", help="Print the resolved configuration as JSON")

    issue = subparsers.add_parser("issue", help="Fetch an issue or pull request")
    issue.add_argument("number", type=int, help="Issue or pull request number")
    issue.add_argument(
        "--repo",
        "--repository",
        dest="repository",
        default=None,
        help="Repository in the form 'owner/name' (defaults to the configured repo)",
    )

    user = subparsers.add_parser("user", help="Fetch a user profile")
    user.add_argument("login", help="GitHub login")

    return parser


def _print_json(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


async def _run_lookup(
    args: argparse.Namespace, config: Configuration, settings: CredentialSettings
) -> dict[str, Any]:
    async with MetadataClient.from_configuration(config, settings=settings) as client:
        if args.command == "issue":
            issue = await client.get_issue(args.repository or config.repo, args.number)
            return issue.model_dump(mode="json")
        user = await client.get_user(args.login)
        return user.model_dump(mode="json")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = CredentialSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(args.log_level or settings.log_level)

    try:
        root = args.root.resolve() if args.root else find_root_path()
        config = resolve(
            root, ResolveOptions(next_version_from_metadata=args.next_version_from_metadata)
        )

        if args.command == "config":
            _print_json(config.to_json_dict())
            return 0

        _print_json(asyncio.run(_run_lookup(args, config, settings)))
        return 0

    except ConfigurationError as e:
        logger.error(str(e))
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    except httpx.HTTPError:
        logger.exception("GitHub request failed")
        return 1

    except ValidationError:
        logger.exception("Unexpected GitHub response")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
