"""Git remote URL helpers.

`package.json` allows many spellings for the same repository:

    "acme/widgets"
    "github:acme/widgets"
    "git+https://github.com/acme/widgets.git"
    "git+ssh://git@github.com/acme/widgets.git"
    "git@github.com:acme/widgets.git"

`normalize_git_url` maps all of them onto one `<scheme>://<host>/<path>` form so a
single host-anchored pattern can extract the `owner/name` identifier.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

DEFAULT_GIT_URL = "https://github.com"

_SHORTHAND_HOSTS: dict[str, str] = {
    "github": "github.com",
    "gitlab": "gitlab.com",
    "bitbucket": "bitbucket.org",
}
_DEFAULT_PORTS: dict[str, str] = {"http": "80", "https": "443"}

_SHORTHAND = re.compile(r"^(?:(?P<provider>github|gitlab|bitbucket):)?(?P<path>[\w.-]+/[\w.-]+)$")
_SCP_LIKE = re.compile(r"^(?:[^@/\s]+@)?(?P<host>[^:/\s]+):(?P<path>.+)$")


def normalize_git_url(url: str) -> str:
    """Return the canonical web form of a git remote URL.

    SSH, `git://` and scp-style remotes become `https://<host>/<path>`; a `git+`
    prefix, user info, SSH ports, default web ports (80/443), query and fragment
    are dropped; trailing slashes are stripped. Normalizing an already normalized URL is a no-op.

    Raises:
        ValueError: If `url` is empty.
    """

    value = url.strip().split("#", 1)[0].strip()
    if not value:
        raise ValueError("repository URL is empty")

    shorthand = _SHORTHAND.match(value)
    if shorthand:
        host = _SHORTHAND_HOSTS[shorthand.group("provider") or "github"]
        return f"https://{host}/{shorthand.group('path')}"

    if value.startswith("git+"):
        value = value[len("git+") :]

    if "://" not in value:
        scp = _SCP_LIKE.match(value)
        if scp:
            path = scp.group("path").lstrip("/")
            return f"https://{scp.group('host').lower()}/{path}".rstrip("/")
        return f"https://{value}".rstrip("/")

    parts = urlsplit(value)
    scheme = parts.scheme.lower()
    if scheme == "file":
        return value

    hostport = parts.netloc.rpartition("@")[2]
    host, _, port = hostport.partition(":")
    path = parts.path
    if port and not port.isdigit():
        # `ssh://git@host:owner/name` mixes URL and scp syntax.
        path = f"/{port}{path}"
        port = ""

    if scheme in _DEFAULT_PORTS:
        if port == _DEFAULT_PORTS[scheme]:
            port = ""
        base = f"{scheme}://{host.lower()}" + (f":{port}" if port else "")
    else:
        base = f"https://{host.lower()}"

    return f"{base}{path}".rstrip("/")


def repository_pattern(git_url: str | None = None) -> re.Pattern[str]:
    """Pattern capturing `owner/name` from a normalized URL under `git_url`."""

    base = (git_url or DEFAULT_GIT_URL).strip().rstrip("/")
    return re.compile(
        re.escape(base) + r"[:/](?!\d+/)([^/\s]+/[^/\s]+?)(?:\.git)?(?:/|$)",
        re.IGNORECASE,
    )


def extract_repository(url: str, git_url: str | None = None) -> str | None:
    """Return the `owner/name` identifier of `url` when it lives under `git_url`.

    Only the first occurrence is considered. A repository hosted elsewhere
    yields None.
    """

    match = repository_pattern(git_url).search(normalize_git_url(url))
    if not match:
        return None
    return match.group(1)
