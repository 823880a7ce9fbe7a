"""Process environment settings.

Values are loaded from:
- environment variables
- and a local `.env` file (if present)

Credentials are split by host type: `GITHUB_AUTH` is used against github.com,
`GITHUB_ENTERPRISE_AUTH` only when a custom API URL is configured.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

GITHUB_AUTH_ENV = "GITHUB_AUTH"
GITHUB_ENTERPRISE_AUTH_ENV = "GITHUB_ENTERPRISE_AUTH"


class CredentialSettings(BaseSettings):
    """Environment-backed settings for the changelog tool.

    Environment variables:
    - GITHUB_AUTH             (public GitHub token)
    - GITHUB_ENTERPRISE_AUTH  (GitHub Enterprise token)
    - LOG_LEVEL               (optional)

    Notes:
        Tests pass explicit values instead of touching the process environment:
        `CredentialSettings(_env_file=None, github_auth="token")`.
    """

    github_auth: str = Field(
        default="",
        validation_alias=GITHUB_AUTH_ENV,
        description="Token used against the public GitHub API",
    )
    github_enterprise_auth: str = Field(
        default="",
        validation_alias=GITHUB_ENTERPRISE_AUTH_ENV,
        description="Token used when a custom (enterprise) API URL is configured",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    def credential(self, env_var: str) -> str | None:
        """Return the token bound to `env_var`, or None when it is unset or blank."""

        values = {
            GITHUB_AUTH_ENV: self.github_auth,
            GITHUB_ENTERPRISE_AUTH_ENV: self.github_enterprise_auth,
        }
        value = values.get(env_var, "").strip()
        return value or None
