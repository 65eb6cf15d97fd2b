import json
import logging
import os
from collections.abc import Generator
from unittest.mock import patch

import pytest

from sms_channels.config import SmsConfig
from sms_channels.log import JsonFormatter, setup_logging


def _record(msg: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord("sms_channels.test", logging.INFO, __file__, 1, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture()
def restore_root_logger() -> Generator[logging.Logger, None, None]:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield root
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


class TestJsonFormatter:
    def test_base_fields(self):
        entry = json.loads(JsonFormatter().format(_record()))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "sms_channels.test"
        assert entry["message"] == "hello"
        assert "timestamp" in entry

    def test_extra_fields(self):
        entry = json.loads(JsonFormatter().format(_record(channel_id=5, channel_code="aliyun")))

        assert entry["channel_id"] == 5
        assert entry["channel_code"] == "aliyun"
        assert "args" not in entry

    def test_non_ascii_message_kept(self):
        line = JsonFormatter().format(_record("用户接收成功"))

        assert "用户接收成功" in line


class TestSetupLogging:
    def test_level_and_suppression_from_config(self, restore_root_logger):
        config = SmsConfig(log_level="debug", suppressed_loggers=["sms_channels.noisy"])

        setup_logging(config)

        assert restore_root_logger.level == logging.DEBUG
        assert len(restore_root_logger.handlers) == 1
        assert isinstance(restore_root_logger.handlers[0].formatter, JsonFormatter)
        assert logging.getLogger("sms_channels.noisy").level == logging.WARNING

    def test_level_from_env(self, restore_root_logger):
        with patch.dict(os.environ, {"SMS_LOG_LEVEL": "ERROR"}, clear=False):
            setup_logging()

        assert restore_root_logger.level == logging.ERROR
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self, restore_root_logger):
        setup_logging(SmsConfig(log_level="verbose"))

        assert restore_root_logger.level == logging.INFO
