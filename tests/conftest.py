"""Test fixtures for SMS channel tests."""

import httpx
import pytest
from pydantic import SecretStr

from sms_channels.config import SmsConfig
from sms_channels.properties import SmsChannelProperties

from tests.helpers import RecordingTransport


@pytest.fixture()
def sms_config() -> SmsConfig:
    return SmsConfig()


@pytest.fixture()
def aliyun_properties() -> SmsChannelProperties:
    return SmsChannelProperties(
        id=1,
        code="aliyun",
        api_key="LTAI-test",
        api_secret=SecretStr("aliyun-secret"),
        signature="TestSign",
    )


@pytest.fixture()
def yunpian_properties() -> SmsChannelProperties:
    return SmsChannelProperties(
        id=2,
        code="yunpian",
        api_key="yunpian-apikey",
        api_secret=SecretStr("unused"),
        callback_url="https://example.com/sms/callback",
    )


@pytest.fixture()
def ok_transport() -> RecordingTransport:
    """Transport answering every request with a vendor-agnostic success body."""
    return RecordingTransport(
        lambda request: httpx.Response(
            200, json={"Code": "OK", "Message": "OK", "BizId": "biz-1", "code": 0, "sid": 1}
        )
    )
