"""Unit tests for structured logging."""

from __future__ import annotations

import io
import json
import logging

from github_changelog.logging import configure_logging


def test_configure_logging_emits_json_with_extra() -> None:
    stream = io.StringIO()
    configure_logging("debug", stream=stream)

    logging.getLogger("github_changelog.test").info(
        "Inferred repository", extra={"repo": "acme/widgets"}
    )

    record = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert record["level"] == "INFO"
    assert record["logger"] == "github_changelog.test"
    assert record["message"] == "Inferred repository"
    assert record["extra"] == {"repo": "acme/widgets"}


def test_configure_logging_replaces_handlers() -> None:
    configure_logging("INFO", stream=io.StringIO())
    configure_logging("WARNING", stream=io.StringIO())

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.level == logging.WARNING
    assert logging.getLogger("httpx").level == logging.WARNING


def test_exception_is_rendered() -> None:
    stream = io.StringIO()
    configure_logging("INFO", stream=stream)

    try:
        raise RuntimeError("boom")
    except RuntimeError:
        logging.getLogger("github_changelog.test").exception("Command failed")

    record = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert "RuntimeError: boom" in record["exception"]
