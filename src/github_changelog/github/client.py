"""Cached GitHub metadata client.

Fetches the issue and user records the changelog needs. Responses are stored in
a :class:`ResponseCache` under `<root>/<cacheDir>/github` so repeated runs do not
hit the API again for the same issue or user.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field

from github_changelog.configuration import Configuration
from github_changelog.errors import ConfigurationError
from github_changelog.git_url import DEFAULT_GIT_URL
from github_changelog.github.cache import ResponseCache
from github_changelog.settings import (
    GITHUB_AUTH_ENV,
    GITHUB_ENTERPRISE_AUTH_ENV,
    CredentialSettings,
)

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
CACHE_NAMESPACE = "github"
USER_AGENT = "github-changelog"


class _ApiRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class PullRequestRef(_ApiRecord):
    html_url: str


class IssueLabel(_ApiRecord):
    name: str


class IssueAuthor(_ApiRecord):
    login: str
    html_url: str


class IssueRecord(_ApiRecord):
    """Subset of `GET /repos/{repo}/issues/{number}` used for changelog entries."""

    number: int
    title: str
    pull_request: PullRequestRef | None = None
    labels: list[IssueLabel] = Field(default_factory=list)
    user: IssueAuthor

    @property
    def label_names(self) -> list[str]:
        return [label.name for label in self.labels]

    @property
    def is_pull_request(self) -> bool:
        return self.pull_request is not None


class UserRecord(_ApiRecord):
    """Subset of `GET /users/{login}`."""

    login: str
    name: str | None = None
    html_url: str


@dataclass(frozen=True, slots=True)
class PublicHost:
    credential_env_var: str = GITHUB_AUTH_ENV
    api_base: str = DEFAULT_API_URL
    web_base: str = DEFAULT_GIT_URL


@dataclass(frozen=True, slots=True)
class EnterpriseHost:
    api_base: str
    web_base: str
    credential_env_var: str = GITHUB_ENTERPRISE_AUTH_ENV


HostProfile = PublicHost | EnterpriseHost


def select_host(git_api_url: str | None, git_url: str | None) -> HostProfile:
    """Pick the host profile once, from the configured endpoints.

    A custom API URL means a GitHub Enterprise instance; configuring the public
    API root explicitly still selects the public profile.
    """

    api_base = (git_api_url or "").strip().rstrip("/")
    web_base = (git_url or DEFAULT_GIT_URL).strip().rstrip("/")
    if not api_base or api_base == DEFAULT_API_URL:
        return PublicHost(web_base=web_base)
    return EnterpriseHost(api_base=api_base, web_base=web_base)


class MetadataClient:
    """Read-through cached access to GitHub issues, pull requests and users."""

    def __init__(
        self,
        *,
        repo: str,
        root_path: Path,
        cache_dir: str | None = None,
        git_api_url: str | None = None,
        git_url: str | None = None,
        settings: CredentialSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            repo: Default repository ("owner/name").
            root_path: Repository root; the cache lives below it.
            cache_dir: Cache directory relative to `root_path`; None disables caching.
            git_api_url: Custom API base URL (selects GitHub Enterprise).
            git_url: Web base URL used for issue links.
            settings: Credential source; read from the environment when omitted.
            http_client: Injected HTTP client, left open by :meth:`aclose`.

        Raises:
            ConfigurationError: If the credential for the selected host is missing.
        """
        self.repo = repo
        self.host = select_host(git_api_url, git_url)
        self.cache = (
            ResponseCache(Path(root_path) / cache_dir / CACHE_NAMESPACE) if cache_dir else None
        )

        credentials = settings if settings is not None else CredentialSettings()
        token = credentials.credential(self.host.credential_env_var)
        if not token:
            raise ConfigurationError(f"Must provide {self.host.credential_env_var}")
        self._token = token

        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=httpx.Timeout(30.0, connect=10.0))

        logger.debug(
            "Selected GitHub host",
            extra={
                "host_kind": type(self.host).__name__,
                "api_base": self.host.api_base,
                "caching": self.cache is not None,
            },
        )

    @classmethod
    def from_configuration(
        cls,
        config: Configuration,
        *,
        settings: CredentialSettings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> MetadataClient:
        return cls(
            repo=config.repo,
            root_path=config.root_path,
            cache_dir=config.cache_dir,
            git_api_url=config.git_api_url,
            git_url=config.git_url,
            settings=settings,
            http_client=http_client,
        )

    async def __aenter__(self) -> MetadataClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http.aclose()

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"token {self._token}",
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
        }

    def issue_url(self, repo: str) -> str:
        """Return the web URL prefix for issues of `repo` (ends with a slash)."""

        return f"{self.host.web_base}/{repo}/issues/"

    async def get_issue(self, repo: str, issue_number: int | str) -> IssueRecord:
        url = f"{self.host.api_base}/repos/{repo}/issues/{issue_number}"
        return IssueRecord.model_validate(await self._fetch(url))

    async def get_user(self, login: str) -> UserRecord:
        url = f"{self.host.api_base}/users/{login}"
        return UserRecord.model_validate(await self._fetch(url))

    async def _fetch(self, url: str) -> Any:
        if self.cache is not None:
            cached = await asyncio.to_thread(self.cache.get, url)
            if cached is not None:
                logger.debug("Cache hit", extra={"url": url})
                return cached
            logger.debug("Cache miss", extra={"url": url})

        resp = await self._http.get(url, headers=self._headers())
        resp.raise_for_status()
        body = resp.json()

        if self.cache is not None:
            await asyncio.to_thread(self.cache.set, url, body)
        return body
