"""Tests for utility modules."""

import logging

import pytest

from mathfence.stringbuilder import StringBuilder
from mathfence.utils.logger import LOG_ENV_VAR, configure_logging, get_logger


class TestGetLogger:
    def test_prefix_added(self) -> None:
        assert get_logger("mymodule").name == "mathfence.mymodule"

    def test_prefix_not_doubled(self) -> None:
        assert get_logger("mathfence.render").name == "mathfence.render"
        assert get_logger("mathfence").name == "mathfence"


@pytest.mark.usefixtures("reset_mathfence_logger")
class TestConfigureLogging:
    def test_explicit_level(self) -> None:
        configure_logging("debug")
        assert logging.getLogger("mathfence").level == logging.DEBUG

    def test_env_level(self, monkeypatch) -> None:
        monkeypatch.setenv(LOG_ENV_VAR, "ERROR")
        configure_logging()
        assert logging.getLogger("mathfence").level == logging.ERROR

    def test_default_info(self, monkeypatch) -> None:
        monkeypatch.delenv(LOG_ENV_VAR, raising=False)
        configure_logging()
        assert logging.getLogger("mathfence").level == logging.INFO

    def test_unknown_level_is_info(self) -> None:
        configure_logging("chatty")
        assert logging.getLogger("mathfence").level == logging.INFO

    def test_single_handler(self) -> None:
        before = len(logging.getLogger("mathfence").handlers)
        configure_logging("INFO")
        configure_logging("DEBUG")
        assert len(logging.getLogger("mathfence").handlers) <= before + 1


class TestStringBuilder:
    def test_build(self) -> None:
        sb = StringBuilder()
        sb.append("a").append("").append("b")
        sb.extend(["c", "", "d"])
        assert sb.build() == "abcd"

    def test_empty(self) -> None:
        assert StringBuilder().build() == ""
