import os
import logging

from fontwrap import utils
from fontwrap.utils import logger, get_cache_dir


def test_cache_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("FONTWRAP_DATA_DIR", str(tmp_path))
    assert get_cache_dir() == str(tmp_path)

    # Relative paths are made absolute
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("FONTWRAP_DATA_DIR", "sub")
    assert get_cache_dir() == os.path.join(os.getcwd(), "sub")


def test_cache_dir_default(tmp_path, monkeypatch):
    monkeypatch.delenv("FONTWRAP_DATA_DIR")
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))
    dir = get_cache_dir()
    assert os.path.isdir(dir)
    assert os.path.basename(dir) in ("fontwrap", ".fontwrap")


def test_log_level(monkeypatch):
    try:
        monkeypatch.setenv("FONTWRAP_LOG_LEVEL", "debug")
        utils._set_log_level()
        assert logger.level == logging.DEBUG

        monkeypatch.setenv("FONTWRAP_LOG_LEVEL", "20")
        utils._set_log_level()
        assert logger.level == logging.INFO

        # Invalid levels leave the default
        monkeypatch.setenv("FONTWRAP_LOG_LEVEL", "nope")
        utils._set_log_level()
        assert logger.level == logging.WARNING
    finally:
        monkeypatch.delenv("FONTWRAP_LOG_LEVEL")
        utils._set_log_level()

    assert logger.level == logging.WARNING
    assert logger.name == "fontwrap"


def test_enable_debug_output(monkeypatch):
    assert logger.level == logging.WARNING
    utils._enable_debug_output()
    assert logger.level == logging.INFO

    # A more verbose level is kept
    logger.setLevel(logging.DEBUG)
    utils._enable_debug_output()
    assert logger.level == logging.DEBUG


def test_enable_debug_output_handler(monkeypatch):
    # When logging is not configured, we add a handler so the messages show
    monkeypatch.setattr(logger, "hasHandlers", lambda: False)
    n = len(logger.handlers)
    utils._enable_debug_output()
    assert len(logger.handlers) == n + 1
    assert isinstance(logger.handlers[-1], logging.StreamHandler)
