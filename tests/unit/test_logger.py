"""Unit tests for logger setup and context prefixes."""

import sys

import pytest
from loguru import logger

from vitae import __version__
from vitae.contexts.drafting.logger import _log_warning, setup_drafting_logger
from vitae.utils.logger import session_log_dir, setup_logger


@pytest.fixture(autouse=True)
def restore_sinks():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.mark.unit
def test_session_log_dir_is_per_run(tmp_path):
    log_dir = session_log_dir("serve", tmp_path)

    assert log_dir.parent == tmp_path
    assert log_dir.name.startswith("serve_")
    assert not log_dir.exists()


@pytest.mark.unit
def test_setup_logger_writes_provenance(tmp_path):
    log_file = setup_logger("api", tmp_path / "run", extra_provenance={"Database": "test.db"})

    assert log_file == tmp_path / "run" / "api.log"
    content = log_file.read_text()
    assert "Context: api" in content
    assert f"VITAE version: {__version__}" in content
    assert "Database: test.db" in content


@pytest.mark.unit
def test_context_helpers_prefix_messages(tmp_path):
    log_file = setup_drafting_logger(tmp_path, console_level="ERROR")
    _log_warning("template store unavailable")

    assert log_file.name == "draft.log"
    assert "[draft] template store unavailable" in log_file.read_text()
