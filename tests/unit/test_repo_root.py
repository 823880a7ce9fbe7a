"""Unit tests for git repository root lookup."""

from __future__ import annotations

import json
import shutil
import subprocess
from pathlib import Path

import pytest

from github_changelog.configuration import load
from github_changelog.errors import ConfigurationError
from github_changelog.repo_root import find_root_path

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def _git_init(path: Path) -> None:
    subprocess.run(["git", "init", "--quiet", str(path)], check=True)


@requires_git
def test_find_root_path_from_subdirectory(repo_root: Path) -> None:
    _git_init(repo_root)
    nested = repo_root / "packages" / "core"
    nested.mkdir(parents=True)

    assert find_root_path(nested) == repo_root.resolve()


@requires_git
def test_find_root_path_outside_repository(tmp_path: Path) -> None:
    outside = tmp_path / "not-a-repo"
    outside.mkdir()

    with pytest.raises(ConfigurationError, match="git repository root"):
        find_root_path(outside)


@requires_git
def test_load_resolves_from_git_root(repo_root: Path) -> None:
    _git_init(repo_root)
    (repo_root / "package.json").write_text(
        json.dumps({"repository": "git@github.com:acme/widgets.git"}), encoding="utf-8"
    )
    nested = repo_root / "src"
    nested.mkdir()

    config = load(cwd=nested)

    assert config.repo == "acme/widgets"
    assert config.root_path == repo_root.resolve()


def test_missing_git_executable(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    def _raise(*args: object, **kwargs: object) -> None:
        raise FileNotFoundError("git")

    monkeypatch.setattr(subprocess, "run", _raise)

    with pytest.raises(ConfigurationError):
        find_root_path(tmp_path)
