"""GitHub metadata access."""

from github_changelog.github.cache import ResponseCache
from github_changelog.github.client import (
    EnterpriseHost,
    IssueRecord,
    MetadataClient,
    PublicHost,
    UserRecord,
)

__all__ = [
    "EnterpriseHost",
    "IssueRecord",
    "MetadataClient",
    "PublicHost",
    "ResponseCache",
    "UserRecord",
]
