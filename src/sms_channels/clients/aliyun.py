"""Aliyun (Dysmsapi) SMS client."""

import base64
import hashlib
import hmac
import json
import uuid
from collections.abc import Mapping
from datetime import datetime, timezone
from urllib.parse import quote

import httpx

from sms_channels.clients.base import AbstractSmsClient, SmsReceiveStatus, SmsSendResult

API_VERSION = "2017-05-25"
SUCCESS_CODE = "OK"

_REPORT_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def percent_encode(value: str) -> str:
    """RFC 3986 encoding as required by the Aliyun RPC signature."""
    return quote(value, safe="~")


def sign(params: Mapping[str, str], secret: str, method: str = "GET") -> str:
    """Compute the signature version 1.0 for an Aliyun RPC request.

    The canonical query string is the percent-encoded parameters sorted by
    key; it is signed with HMAC-SHA1 keyed by ``secret + "&"``.
    """
    canonical = "&".join(
        f"{percent_encode(key)}={percent_encode(params[key])}" for key in sorted(params)
    )
    string_to_sign = f"{method}&{percent_encode('/')}&{percent_encode(canonical)}"
    digest = hmac.new(
        f"{secret}&".encode(), string_to_sign.encode(), hashlib.sha1
    ).digest()
    return base64.b64encode(digest).decode()


class AliyunSmsClient(AbstractSmsClient):
    """Sends through the ``SendSms`` action of the Aliyun Dysmsapi endpoint.

    ``api_key`` is the AccessKey ID, ``api_secret`` the AccessKey secret and
    ``signature`` the registered SignName.
    """

    def _do_send(
        self,
        http: httpx.Client,
        log_id: int,
        mobile: str,
        template_id: str,
        template_params: Mapping[str, object],
    ) -> SmsSendResult:
        params = self._common_params()
        params.update(
            {
                "Action": "SendSms",
                "PhoneNumbers": mobile,
                "SignName": self.properties.signature,
                "TemplateCode": template_id,
                "TemplateParam": json.dumps(
                    dict(template_params), ensure_ascii=False, default=str
                ),
                "OutId": str(log_id),
            }
        )
        params["Signature"] = sign(params, self.properties.api_secret.get_secret_value())

        response = http.get(self._config.aliyun_endpoint, params=params)
        body = response.json()
        if not isinstance(body, dict):
            raise ValueError(f"Unexpected Aliyun response body: {body!r}")
        code = str(body.get("Code", response.status_code))
        return SmsSendResult(
            success=code == SUCCESS_CODE,
            code=code,
            message=body.get("Message", ""),
            serial_no=body.get("BizId"),
            request_id=body.get("RequestId"),
        )

    def _common_params(self) -> dict[str, str]:
        return {
            "AccessKeyId": self.properties.api_key,
            "Format": "JSON",
            "RegionId": self._config.aliyun_region_id,
            "SignatureMethod": "HMAC-SHA1",
            "SignatureNonce": uuid.uuid4().hex,
            "SignatureVersion": "1.0",
            "Timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "Version": API_VERSION,
        }

    def parse_receive_status(self, text: str) -> list[SmsReceiveStatus]:
        """Parse the JSON array Aliyun posts to the delivery-report callback."""
        reports = json.loads(text)
        if not isinstance(reports, list):
            raise ValueError("Aliyun delivery report must be a JSON array")

        statuses = []
        for report in reports:
            if not isinstance(report, dict) or "phone_number" not in report:
                raise ValueError(f"Malformed Aliyun delivery report: {report!r}")
            out_id = report.get("out_id")
            report_time = report.get("report_time")
            statuses.append(
                SmsReceiveStatus(
                    success=bool(report.get("success")),
                    mobile=report["phone_number"],
                    serial_no=report.get("biz_id"),
                    log_id=int(out_id) if out_id not in (None, "") else None,
                    error_code=report.get("err_code"),
                    error_message=report.get("err_msg"),
                    receive_time=(
                        datetime.strptime(report_time, _REPORT_TIME_FORMAT) if report_time else None
                    ),
                )
            )
        return statuses
