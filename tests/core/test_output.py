"""Tests for the unified log() output."""

import sys

import pytest
from loguru import logger

from cuerator.core.output import log, set_quiet_mode, setup_loguru


@pytest.fixture(autouse=True)
def restore_mode():
    yield
    set_quiet_mode(False)


class TestLog:
    """Tests for log()."""

    def test_prints_and_logs(self, capsys):
        messages = []
        handler_id = logger.add(messages.append, format="{message}")
        try:
            log("Wrote 3 cue(s)", level="success")
        finally:
            logger.remove(handler_id)

        assert "Wrote 3 cue(s)" in capsys.readouterr().out
        assert messages and "Wrote 3 cue(s)" in messages[0]

    def test_quiet_mode_only_logs(self, capsys):
        set_quiet_mode(True)
        log("hidden")
        assert capsys.readouterr().out == ""

    def test_debug_is_not_printed(self, capsys):
        log("details", level="debug")
        assert capsys.readouterr().out == ""

    def test_brackets_are_printed_literally(self, capsys):
        log("Chase [Alt Take]")
        assert "Chase [Alt Take]" in capsys.readouterr().out


class TestSetupLoguru:
    """Tests for setup_loguru."""

    def test_file_sink(self, tmp_path):
        log_file = tmp_path / "logs" / "cuerator.log"
        try:
            setup_loguru(log_file, level="INFO")
            logger.info("hello file")
        finally:
            logger.remove()
            logger.add(sys.stderr)

        assert "hello file" in log_file.read_text(encoding="utf-8")
