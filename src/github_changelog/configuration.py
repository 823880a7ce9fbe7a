"""Changelog configuration resolution.

The effective configuration is built once per run:

1. load the partial `changelog` block from `package.json`, else `lerna.json`
2. infer what is missing (`repo` from the declared repository URL, and
   `nextVersion` from the manifest version when requested)
3. apply the built-in defaults for `labels` and `ignoreCommitters`

The result is a frozen :class:`Configuration` shared read-only by the rest of
the tool.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from github_changelog.errors import ConfigurationError
from github_changelog.git_url import extract_repository
from github_changelog.repo_root import find_root_path

logger = logging.getLogger(__name__)

PACKAGE_MANIFEST = "package.json"
LERNA_MANIFEST = "lerna.json"
CHANGELOG_KEY = "changelog"

DEFAULT_LABELS: dict[str, str] = {
    "breaking": ":boom: Breaking Change",
    "enhancement": ":rocket: Enhancement",
    "bug": ":bug: Bug Fix",
    "documentation": ":memo: Documentation",
    "internal": ":house: Internal",
}

DEFAULT_IGNORE_COMMITTERS: tuple[str, ...] = (
    "dependabot-bot",
    "dependabot[bot]",
    "greenkeeperio-bot",
    "greenkeeper[bot]",
    "renovate-bot",
    "renovate[bot]",
)


def _dedupe(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))


class PartialConfig(BaseModel):
    """The user-supplied `changelog` block; every field is optional."""

    repo: str | None = None
    labels: dict[str, str] | None = None
    ignore_committers: list[str] | None = Field(default=None, alias="ignoreCommitters")
    cache_dir: str | None = Field(default=None, alias="cacheDir")
    next_version: str | None = Field(default=None, alias="nextVersion")
    next_version_from_metadata: bool | None = Field(default=None, alias="nextVersionFromMetadata")
    git_url: str | None = Field(default=None, alias="gitUrl")
    git_api_url: str | None = Field(default=None, alias="gitAPIUrl")

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class Configuration(BaseModel):
    """Fully resolved changelog configuration."""

    repo: str = Field(min_length=1, description="Repository in format 'owner/name'")
    root_path: Path = Field(alias="rootPath", description="Absolute repository root")
    labels: dict[str, str] = Field(min_length=1)
    ignore_committers: list[str] = Field(alias="ignoreCommitters")
    cache_dir: str | None = Field(default=None, alias="cacheDir")
    next_version: str | None = Field(default=None, alias="nextVersion")
    git_url: str | None = Field(default=None, alias="gitUrl")
    git_api_url: str | None = Field(default=None, alias="gitAPIUrl")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @field_validator("ignore_committers")
    @classmethod
    def _unique_committers(cls, value: list[str]) -> list[str]:
        return _dedupe(value)

    def to_json_dict(self) -> dict[str, Any]:
        """Return the configuration using the manifest's camelCase keys."""

        return self.model_dump(mode="json", by_alias=True)


@dataclass(frozen=True, slots=True)
class ResolveOptions:
    """Caller-side switches for :func:`resolve`."""

    next_version_from_metadata: bool = False


def _read_json(path: Path) -> dict[str, Any] | None:
    if not path.exists():
        return None
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        return None
    return data


def _changelog_block(path: Path) -> PartialConfig | None:
    manifest = _read_json(path)
    if manifest is None:
        return None
    block = manifest.get(CHANGELOG_KEY)
    if not isinstance(block, dict):
        return None
    logger.debug("Loaded changelog configuration", extra={"path": str(path)})
    try:
        return PartialConfig.model_validate(block)
    except ValidationError as e:
        fields = sorted({".".join(str(part) for part in err["loc"]) for err in e.errors()})
        raise ConfigurationError(
            f'Invalid "{CHANGELOG_KEY}" configuration in "{path.name}": '
            + ", ".join(f'"{name}"' for name in fields)
        ) from e


def load_partial_config(root_path: Path) -> PartialConfig:
    """Return the first `changelog` block found; the two manifests are never merged."""

    for name in (PACKAGE_MANIFEST, LERNA_MANIFEST):
        partial = _changelog_block(root_path / name)
        if partial is not None:
            return partial
    return PartialConfig()


def find_repo(root_path: Path, git_url: str | None = None) -> str | None:
    """Infer `owner/name` from the `repository` field of `package.json`."""

    pkg = _read_json(root_path / PACKAGE_MANIFEST)
    if not pkg or not pkg.get("repository"):
        return None
    return find_repo_from_pkg(pkg, git_url)


def find_repo_from_pkg(pkg: dict[str, Any], git_url: str | None = None) -> str | None:
    repository = pkg["repository"]
    url = repository.get("url") if isinstance(repository, dict) else repository
    if not isinstance(url, str) or not url.strip():
        return None
    return extract_repository(url, git_url)


def find_next_version(root_path: Path) -> str | None:
    """Return `v<version>` from `package.json`, falling back to `lerna.json`."""

    for name in (PACKAGE_MANIFEST, LERNA_MANIFEST):
        manifest = _read_json(root_path / name) or {}
        version = manifest.get("version")
        if version:
            return f"v{version}"
    return None


@dataclass
class _ConfigBuilder:
    """Mutable staging area filled step by step, then frozen by :meth:`build`."""

    root_path: Path
    partial: PartialConfig
    repo: str | None = None
    labels: dict[str, str] | None = None
    ignore_committers: list[str] | None = None
    next_version: str | None = None

    @classmethod
    def from_partial(cls, root_path: Path, partial: PartialConfig) -> _ConfigBuilder:
        return cls(
            root_path=root_path,
            partial=partial,
            repo=partial.repo or None,
            labels=partial.labels,
            ignore_committers=partial.ignore_committers,
            next_version=partial.next_version,
        )

    def infer_repo(self) -> None:
        if self.repo:
            return
        self.repo = find_repo(self.root_path, self.partial.git_url)
        if not self.repo:
            raise ConfigurationError('Could not infer "repo" from the "package.json" file.')
        logger.debug("Inferred repository", extra={"repo": self.repo})

    def infer_next_version(self, options: ResolveOptions) -> None:
        if not (options.next_version_from_metadata or self.partial.next_version_from_metadata):
            return
        self.next_version = find_next_version(self.root_path)
        if not self.next_version:
            raise ConfigurationError('Could not infer "nextVersion" from the "package.json" file.')
        logger.info("Inferred next version", extra={"next_version": self.next_version})

    def apply_defaults(self) -> None:
        if not self.labels:
            self.labels = dict(DEFAULT_LABELS)
        if self.ignore_committers is None:
            self.ignore_committers = list(DEFAULT_IGNORE_COMMITTERS)

    def build(self) -> Configuration:
        return Configuration(
            repo=self.repo or "",
            root_path=self.root_path,
            labels=self.labels or {},
            ignore_committers=self.ignore_committers or [],
            cache_dir=self.partial.cache_dir,
            next_version=self.next_version,
            git_url=self.partial.git_url,
            git_api_url=self.partial.git_api_url,
        )


def resolve(root_path: Path | str, options: ResolveOptions | None = None) -> Configuration:
    """Resolve the effective configuration for the repository at `root_path`.

    Args:
        root_path: Absolute path of the repository root.
        options: Caller overrides; defaults to no next-version inference.

    Returns:
        The frozen configuration.

    Raises:
        ConfigurationError: If `repo` cannot be inferred, or `nextVersion`
            inference was requested and no manifest declares a version.
    """

    root = Path(root_path)
    builder = _ConfigBuilder.from_partial(root, load_partial_config(root))
    builder.infer_repo()
    builder.infer_next_version(options or ResolveOptions())
    builder.apply_defaults()
    return builder.build()


def load(options: ResolveOptions | None = None, *, cwd: Path | None = None) -> Configuration:
    """Resolve the configuration of the git repository containing `cwd`."""

    return resolve(find_root_path(cwd), options)
