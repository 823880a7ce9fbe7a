"""File-backed response cache.

One JSON file per request URL, named after the SHA-256 of the URL. Writes go
through a temporary file and `os.replace` so a reader never sees a partial body.
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def cache_key(url: str) -> str:
    return hashlib.sha256(url.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class ResponseCache:
    directory: Path

    def path_for(self, url: str) -> Path:
        return self.directory / f"{cache_key(url)}.json"

    def get(self, url: str) -> Any | None:
        """Return the stored body for `url`, or None on a miss.

        An unreadable entry counts as a miss and is overwritten by the next `set`.
        """

        path = self.path_for(url)
        if not path.exists():
            return None
        try:
            entry = json.loads(path.read_text(encoding="utf-8"))
        except ValueError:
            logger.warning("Ignoring corrupt cache entry", extra={"cache_file": str(path)})
            return None
        if not isinstance(entry, dict) or entry.get("url") != url:
            return None
        return entry.get("body")

    def set(self, url: str, body: Any) -> None:  # noqa: A003 (mapping-style API)
        self.directory.mkdir(parents=True, exist_ok=True)
        payload = json.dumps({"url": url, "body": body}, ensure_ascii=False)

        fd, tmp_name = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self.path_for(url))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
