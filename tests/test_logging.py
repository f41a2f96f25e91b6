from __future__ import annotations

import io
import logging
import sys

import pytest

from scrambler.utils.logging import configure_logging, get_logger


def _own_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, "_scrambler", False)]


def test_get_logger_namespaces() -> None:
    assert get_logger("scrambler.pipeline").name == "scrambler.pipeline"
    assert get_logger("tools").name == "scrambler.tools"


def test_configure_logging_is_idempotent() -> None:
    logger = configure_logging(verbose=False)
    configure_logging(verbose=True)
    assert len(_own_handlers(logger)) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
    configure_logging(verbose=False)
    assert logger.level == logging.WARNING


def test_closed_stream_handler_is_replaced(monkeypatch: pytest.MonkeyPatch) -> None:
    stale = io.StringIO()
    monkeypatch.setattr(sys, "stderr", stale)
    logger = configure_logging(verbose=False)
    stale.close()
    fresh = io.StringIO()
    monkeypatch.setattr(sys, "stderr", fresh)
    configure_logging(verbose=False)
    handlers = _own_handlers(logger)
    assert len(handlers) == 1
    assert handlers[0].stream is fresh  # type: ignore[attr-defined]
    logger.warning("still writable")
    assert "still writable" in fresh.getvalue()
