from sms_channels.clients.aliyun import AliyunSmsClient
from sms_channels.clients.base import AbstractSmsClient, SmsReceiveStatus, SmsSendResult
from sms_channels.clients.yunpian import YunpianSmsClient

__all__ = [
    "AbstractSmsClient",
    "AliyunSmsClient",
    "SmsReceiveStatus",
    "SmsSendResult",
    "YunpianSmsClient",
]
