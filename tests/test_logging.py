# tests/test_logging.py
import logging
from pathlib import Path

import pytest

import motodb.utils.logging as log_mod


@pytest.fixture(autouse=True)
def _reset_logging_state(monkeypatch):
    """
    Keep tests isolated while being compatible with pytest's own log capture handler.

    We do NOT try to remove pytest's internal handlers; we reset module globals and
    test idempotency by comparing handler counts.
    """
    monkeypatch.setattr(log_mod, "_CONFIGURED", False, raising=True)
    monkeypatch.setattr(log_mod, "_CURRENT_LOG_FILE", None, raising=True)
    yield


def _count_file_handlers(root: logging.Logger) -> int:
    return sum(1 for h in root.handlers if isinstance(h, logging.FileHandler))


def test_configure_logging_idempotent_does_not_duplicate_handlers():
    root = logging.getLogger()

    before = len(root.handlers)
    log_mod.configure_logging(level="INFO")
    after_first = len(root.handlers)
    assert after_first >= before

    log_mod.configure_logging(level="INFO")
    assert len(root.handlers) == after_first


def test_configure_logging_adds_file_handler_once(tmp_path: Path):
    root = logging.getLogger()
    log_file = tmp_path / "logs" / "build.log"

    before_files = _count_file_handlers(root)
    try:
        log_mod.configure_logging(level="INFO", log_file=str(log_file))
        after_files = _count_file_handlers(root)

        assert after_files == before_files + 1
        assert log_file.parent.exists()

        log_mod.configure_logging(level="INFO", log_file=str(log_file))
        assert _count_file_handlers(root) == after_files
    finally:
        for h in list(root.handlers):
            if isinstance(h, logging.FileHandler) and Path(h.baseFilename) == log_file.resolve():
                root.removeHandler(h)
                h.close()


def test_configure_logging_sets_level():
    log_mod.configure_logging(level="warning")
    assert logging.getLogger().level == logging.WARNING
    log_mod.configure_logging(level="INFO")
    assert logging.getLogger().level == logging.INFO


def test_configure_logging_rejects_unknown_level():
    with pytest.raises(ValueError):
        log_mod.configure_logging(level="chatty")


def test_get_logger_lazy_configures():
    assert log_mod._CONFIGURED is False

    lg = log_mod.get_logger("motodb.x")
    assert isinstance(lg, logging.Logger)
    assert log_mod._CONFIGURED is True

    root = logging.getLogger()
    after = len(root.handlers)
    assert log_mod.get_logger("motodb.x") is lg
    assert len(root.handlers) == after
