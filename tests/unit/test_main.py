"""Unit tests for the logging bootstrap."""

import logging
from pathlib import Path

import pytest

from ellena.config import Settings
from ellena.main import setup_logging


@pytest.fixture
def root_logger():
    """Restore root handlers and level after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in root.handlers:
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)


def _ours(root: logging.Logger) -> list[logging.Handler]:
    return [h for h in root.handlers if h.get_name() == "ellena"]


def test_setup_logging_does_not_stack_handlers(root_logger, tmp_path: Path) -> None:
    settings = Settings(log_file=tmp_path / "logs" / "ellena.log", log_level="DEBUG")
    setup_logging(settings)
    setup_logging(settings)

    assert len(_ours(root_logger)) == 2
    assert root_logger.level == logging.DEBUG
    assert (tmp_path / "logs" / "ellena.log").exists()


def test_setup_logging_quiets_client_libraries(root_logger, tmp_path: Path) -> None:
    setup_logging(Settings(log_file=tmp_path / "ellena.log", log_level="INFO"))
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("neo4j").level == logging.WARNING
