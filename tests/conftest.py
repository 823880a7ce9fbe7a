"""Test configuration and fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from github_changelog.settings import CredentialSettings

WriteManifest = Callable[[str, dict[str, Any]], Path]


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep real credentials and `.env` files out of the tests."""
    monkeypatch.delenv("GITHUB_AUTH", raising=False)
    monkeypatch.delenv("GITHUB_ENTERPRISE_AUTH", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    """Provide an empty repository root."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def write_manifest(repo_root: Path) -> WriteManifest:
    """Write a JSON manifest (e.g. package.json) into the repository root."""

    def _write(name: str, content: dict[str, Any]) -> Path:
        path = repo_root / name
        path.write_text(json.dumps(content, indent=2) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def public_credentials() -> CredentialSettings:
    """Provide settings with only the public GitHub token."""
    return CredentialSettings(_env_file=None, github_auth="public-token")


@pytest.fixture
def enterprise_credentials() -> CredentialSettings:
    """Provide settings with only the enterprise token."""
    return CredentialSettings(_env_file=None, github_enterprise_auth="enterprise-token")
