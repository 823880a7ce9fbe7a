"""Locate the root of the enclosing git working tree."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from github_changelog.errors import ConfigurationError

logger = logging.getLogger(__name__)


def find_root_path(cwd: Path | None = None) -> Path:
    """Return the absolute top-level directory of the git repository containing `cwd`.

    Raises:
        ConfigurationError: If `cwd` is not inside a git working tree or git is
            not installed.
    """

    workdir = cwd or Path.cwd()
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=workdir,
            capture_output=True,
            text=True,
            check=True,
        )
    except (subprocess.CalledProcessError, FileNotFoundError) as e:
        raise ConfigurationError(
            f"Could not determine the git repository root from {workdir}"
        ) from e

    root = Path(result.stdout.strip()).resolve()
    logger.debug("Resolved repository root", extra={"root_path": str(root)})
    return root
