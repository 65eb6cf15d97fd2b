"""Tests for the python -m sms_channels entry point."""

import io
import json
import logging
from collections.abc import Generator
from unittest.mock import patch

import pytest

from sms_channels.__main__ import main


@pytest.fixture(autouse=True)
def restore_root_logger() -> Generator[None, None, None]:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


class TestMain:
    def test_prints_parsed_reports(self, capsys) -> None:
        body = json.dumps([{"phone_number": "13900000001", "success": True, "out_id": "7", "biz_id": "b1"}])

        with patch("sys.stdin", io.StringIO(body)):
            exit_code = main(["aliyun"])

        assert exit_code == 0
        lines = [line for line in capsys.readouterr().out.splitlines() if '"mobile"' in line]
        assert len(lines) == 1
        entry = json.loads(lines[0])
        assert entry["mobile"] == "13900000001"
        assert entry["log_id"] == 7
        assert entry["serial_no"] == "b1"

    def test_unknown_code(self) -> None:
        with patch("sys.stdin", io.StringIO("[]")):
            assert main(["tencent"]) == 2

    def test_malformed_body(self) -> None:
        with patch("sys.stdin", io.StringIO("not json")):
            assert main(["yunpian"]) == 1

    def test_configures_logging_from_config(self) -> None:
        with patch("sms_channels.__main__.setup_logging") as setup_mock:
            with patch("sys.stdin", io.StringIO("[]")):
                main(["aliyun"])

        (config,), _ = setup_mock.call_args
        assert config.log_level == "INFO"
