"""Tests for the colored console logger."""

import pytest

from ipmi_discovery.utils.logger import LogLevel, Logger, get_logger, set_log_level


@pytest.fixture(autouse=True)
def reset_level():
    yield
    set_log_level(LogLevel.INFO)


def test_debug_hidden_by_default(capsys):
    get_logger("test.hidden").debug("ping detail")
    assert "ping detail" not in capsys.readouterr().out


def test_set_log_level_reaches_existing_loggers(capsys):
    """Raising verbosity applies to loggers created before the change."""
    log = get_logger("test.verbose")
    set_log_level(LogLevel.DEBUG)
    log.debug("ping detail", host="10.0.0.1")
    out = capsys.readouterr().out
    assert "ping detail" in out
    assert "host=10.0.0.1" in out


def test_errors_go_to_stderr(capsys):
    Logger("test.errors").error("bad range", exception=ValueError("start > end"))
    captured = capsys.readouterr()
    assert "bad range" in captured.err
    assert "ValueError: start > end" in captured.err
    assert captured.out == ""


def test_pinned_level_ignores_global(capsys):
    log = Logger("test.pinned", min_level=LogLevel.ERROR)
    set_log_level(LogLevel.DEBUG)
    log.warning("quiet")
    assert capsys.readouterr().out == ""


def test_progress_lines_go_to_stdout(capsys):
    """Progress and success lines print on stdout, like the report."""
    log = Logger("test.progress")
    log.progress_start("Pinging 4 candidate addresses")
    log.progress_end("Ping stage finished")
    captured = capsys.readouterr()
    assert "PROGRESS" in captured.out
    assert "Ping stage finished" in captured.out
    assert captured.err == ""
    log.progress_end("not shown twice")
    assert capsys.readouterr().out == ""
