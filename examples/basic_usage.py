#!/usr/bin/env python3
"""Programmatic metadata lookup example.

This demonstrates using the components directly:

* resolve the changelog configuration of the current git repository
* look up the author of each issue through the cached GitHub client

Issue numbers are passed as arguments.
"""

from __future__ import annotations

import argparse
import asyncio
from typing import Sequence

from github_changelog.configuration import ResolveOptions, load
from github_changelog.github.client import MetadataClient
from github_changelog.logging import configure_logging
from github_changelog.settings import CredentialSettings


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print issue titles and authors.")
    parser.add_argument("issues", nargs="+", type=int, help="Issue or pull request numbers")
    parser.add_argument(
        "--next-version-from-metadata",
        action="store_true",
        help="Infer the release name from the package version",
    )
    return parser.parse_args(argv)


async def _describe(client: MetadataClient, repo: str, numbers: Sequence[int]) -> None:
    issues = await asyncio.gather(*(client.get_issue(repo, n) for n in numbers))
    for issue in issues:
        author = await client.get_user(issue.user.login)
        kind = "PR" if issue.is_pull_request else "Issue"
        print(f"{kind} #{issue.number}: {issue.title} ({author.name or author.login})")
        print(f"  {client.issue_url(repo)}{issue.number}  labels={issue.label_names}")


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = CredentialSettings()
    configure_logging(settings.log_level)

    config = load(ResolveOptions(next_version_from_metadata=args.next_version_from_metadata))
    print(f"Repository: {config.repo} (next version: {config.next_version or 'unreleased'})")

    async def run() -> None:
        async with MetadataClient.from_configuration(config, settings=settings) as client:
            await _describe(client, config.repo, args.issues)

    asyncio.run(run())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
