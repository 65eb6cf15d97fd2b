from sms_channels.clients import (
    AbstractSmsClient,
    AliyunSmsClient,
    SmsReceiveStatus,
    SmsSendResult,
    YunpianSmsClient,
)
from sms_channels.config import SmsConfig
from sms_channels.enums import SmsChannelCode
from sms_channels.exceptions import UnknownSmsChannelError
from sms_channels.factory import CLIENT_TYPES, SmsClientFactory, create_default_factory
from sms_channels.properties import SmsChannelProperties

__all__ = [
    "AbstractSmsClient",
    "AliyunSmsClient",
    "CLIENT_TYPES",
    "SmsChannelCode",
    "SmsChannelProperties",
    "SmsClientFactory",
    "SmsConfig",
    "SmsReceiveStatus",
    "SmsSendResult",
    "UnknownSmsChannelError",
    "YunpianSmsClient",
    "create_default_factory",
]
