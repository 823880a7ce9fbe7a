"""Unit tests for git remote URL normalization and repository extraction."""

from __future__ import annotations

import pytest

from github_changelog.git_url import extract_repository, normalize_git_url, repository_pattern


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("https://github.com/acme/widgets.git", "https://github.com/acme/widgets.git"),
        ("https://github.com/acme/widgets/", "https://github.com/acme/widgets"),
        ("git+https://github.com/acme/widgets.git", "https://github.com/acme/widgets.git"),
        ("git+ssh://git@github.com/acme/widgets.git", "https://github.com/acme/widgets.git"),
        ("ssh://git@github.com:22/acme/widgets.git", "https://github.com/acme/widgets.git"),
        ("git+ssh://git@github.com:acme/widgets.git", "https://github.com/acme/widgets.git"),
        ("git://github.com/acme/widgets.git", "https://github.com/acme/widgets.git"),
        ("git@github.com:acme/widgets.git", "https://github.com/acme/widgets.git"),
        ("github:acme/widgets", "https://github.com/acme/widgets"),
        ("gitlab:acme/widgets", "https://gitlab.com/acme/widgets"),
        ("acme/widgets", "https://github.com/acme/widgets"),
        ("https://GitHub.com/acme/widgets#main", "https://github.com/acme/widgets"),
        ("http://git.corp.example:8080/team/app", "http://git.corp.example:8080/team/app"),
    ],
)
def test_normalize_git_url(raw: str, expected: str) -> None:
    assert normalize_git_url(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "git+ssh://git@github.com/acme/widgets.git",
        "git@github.com:acme/widgets.git",
        "github:acme/widgets",
        "https://github.com/acme/widgets/",
    ],
)
def test_normalize_git_url_is_idempotent(raw: str) -> None:
    once = normalize_git_url(raw)

    assert normalize_git_url(once) == once


def test_normalize_git_url_rejects_empty() -> None:
    with pytest.raises(ValueError):
        normalize_git_url("   ")


def test_repository_pattern_strips_trailing_slash() -> None:
    assert repository_pattern("https://github.com/").pattern.startswith(r"https://github\.com[:/]")


def test_extract_repository_keeps_dots_in_name() -> None:
    assert extract_repository("https://github.com/acme/widgets.js.git") == "acme/widgets.js"


def test_extract_repository_ignores_deeper_paths() -> None:
    assert extract_repository("https://github.com/acme/widgets/tree/main") == "acme/widgets"


def test_extract_repository_requires_configured_host() -> None:
    assert extract_repository("https://gitlab.com/acme/widgets") is None
    assert (
        extract_repository("https://gitlab.com/acme/widgets", "https://gitlab.com")
        == "acme/widgets"
    )


def test_extract_repository_does_not_match_host_prefix() -> None:
    assert extract_repository("https://github.company.com/acme/widgets") is None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("https://github.com:443/acme/widgets.git", "https://github.com/acme/widgets.git"),
        ("http://git.corp.example:80/team/app", "http://git.corp.example/team/app"),
        ("git+https://github.com:443/acme/widgets", "https://github.com/acme/widgets"),
    ],
)
def test_normalize_git_url_drops_default_web_ports(raw: str, expected: str) -> None:
    assert normalize_git_url(raw) == expected


def test_extract_repository_with_default_https_port() -> None:
    assert extract_repository("https://github.com:443/acme/widgets.git") == "acme/widgets"


def test_extract_repository_skips_port_segment() -> None:
    assert extract_repository("https://github.com:8443/acme/widgets") is None
