"""
Logging setup tests.

Run: pytest tools/testing/test_logging_config.py
"""

import logging

from act_amplifier.logging_config import set_log_level, setup_logging


def test_setup_logging_writes_dated_module_file(tmp_path):
    logger = setup_logging("act_amplifier.sample_module", log_dir=str(tmp_path), console_output=False)
    logger.info("Keyword added")
    for handler in logger.handlers:
        handler.flush()

    files = list(tmp_path.glob("sample_module_*.log"))
    assert len(files) == 1
    assert "| act_amplifier.sample_module | INFO | Keyword added" in files[0].read_text(encoding="utf-8")


def test_setup_logging_adds_handlers_once(tmp_path):
    first = setup_logging("act_amplifier.repeat_module", log_dir=str(tmp_path))
    second = setup_logging("act_amplifier.repeat_module", log_dir=str(tmp_path))
    assert first is second
    assert len(second.handlers) == 2


def test_set_log_level_only_touches_amplifier_loggers(tmp_path):
    ours = setup_logging("act_amplifier.level_module", log_dir=str(tmp_path), console_output=False)
    other = logging.getLogger("some_other_library")
    other.setLevel(logging.INFO)

    set_log_level("debug")

    assert ours.level == logging.DEBUG
    assert all(h.level == logging.DEBUG for h in ours.handlers)
    assert other.level == logging.INFO
