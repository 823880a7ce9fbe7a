"""GitHub Changelog.

Configuration resolution and cached GitHub metadata access for a
changelog generator:
- configuration loaded from `package.json` / `lerna.json`
- repository and next-version inference
- issue and user lookups through a read-through response cache
"""

__version__ = "0.1.0"

from github_changelog.configuration import Configuration, ResolveOptions, load, resolve
from github_changelog.errors import ConfigurationError
from github_changelog.github.client import MetadataClient

__all__ = [
    "__version__",
    "Configuration",
    "ConfigurationError",
    "MetadataClient",
    "ResolveOptions",
    "load",
    "resolve",
]
