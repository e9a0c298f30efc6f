"""Unit tests for run logging setup."""

import sys

import pytest
from loguru import logger

from pdfwhisper import __version__
from pdfwhisper.contexts.analysis.logger import _log_info, setup_analysis_logger
from pdfwhisper.utils.logger import provenance_fields


@pytest.fixture(autouse=True)
def restore_default_sink():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.mark.unit
def test_provenance_fields_order_and_extras():
    fields = provenance_fields({"Preset": "basic"})

    assert list(fields) == ["Command", "Working directory", "Python", "pdfwhisper", "Preset"]
    assert fields["pdfwhisper"] == __version__
    assert fields["Preset"] == "basic"


@pytest.mark.unit
def test_analysis_logger_writes_provenance_and_prefixed_messages(tmp_path):
    log_dir = tmp_path / "logs" / "outline_run"

    log_file = setup_analysis_logger(log_dir, operation="outline", preset="enhanced")
    _log_info("hello")
    logger.remove()

    assert log_file == log_dir / "outline.log"
    content = log_file.read_text(encoding="utf-8")
    assert "Operation: outline" in content
    assert "Preset: enhanced" in content
    assert "[analysis] hello" in content
