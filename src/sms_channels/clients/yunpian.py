"""Yunpian SMS client."""

import json
from collections.abc import Mapping
from datetime import datetime
from urllib.parse import parse_qs, urlencode

import httpx

from sms_channels.clients.base import AbstractSmsClient, SmsReceiveStatus, SmsSendResult

SUCCESS_CODE = 0
REPORT_SUCCESS = "SUCCESS"

_RECEIVE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_template_value(template_params: Mapping[str, object]) -> str:
    """Encode params as Yunpian's ``#name#=value`` pairs joined by ``&``."""
    return urlencode({f"#{key}#": str(value) for key, value in template_params.items()})


class YunpianSmsClient(AbstractSmsClient):
    """Sends through Yunpian's ``tpl_single_send`` API.

    Only ``api_key`` is used; Yunpian authenticates with a single apikey.
    """

    def _do_send(
        self,
        http: httpx.Client,
        log_id: int,
        mobile: str,
        template_id: str,
        template_params: Mapping[str, object],
    ) -> SmsSendResult:
        form = {
            "apikey": self.properties.api_key,
            "mobile": mobile,
            "tpl_id": template_id,
            "tpl_value": format_template_value(template_params),
            "uid": str(log_id),
        }
        if self.properties.callback_url:
            form["callback_url"] = self.properties.callback_url

        response = http.post(self._config.yunpian_endpoint, data=form)
        body = response.json()
        if not isinstance(body, dict):
            raise ValueError(f"Unexpected Yunpian response body: {body!r}")
        code = body.get("code", response.status_code)
        sid = body.get("sid")
        return SmsSendResult(
            success=code == SUCCESS_CODE,
            code=str(code),
            message=body.get("detail") or body.get("msg", ""),
            serial_no=str(sid) if sid is not None else None,
        )

    def parse_receive_status(self, text: str) -> list[SmsReceiveStatus]:
        """Parse the ``sms_status=<json array>`` form body Yunpian posts back."""
        values = parse_qs(text).get("sms_status")
        if not values:
            raise ValueError("Yunpian delivery report is missing sms_status")
        reports = json.loads(values[0])
        if not isinstance(reports, list):
            raise ValueError("Yunpian sms_status must be a JSON array")

        statuses = []
        for report in reports:
            if not isinstance(report, dict) or "mobile" not in report:
                raise ValueError(f"Malformed Yunpian delivery report: {report!r}")
            sid = report.get("sid")
            uid = report.get("uid")
            receive_time = report.get("user_receive_time")
            status = report.get("report_status")
            statuses.append(
                SmsReceiveStatus(
                    success=status == REPORT_SUCCESS,
                    mobile=report["mobile"],
                    serial_no=str(sid) if sid is not None else None,
                    log_id=int(uid) if uid not in (None, "") else None,
                    error_code=None if status == REPORT_SUCCESS else status,
                    error_message=report.get("error_msg") or None,
                    receive_time=(
                        datetime.strptime(receive_time, _RECEIVE_TIME_FORMAT) if receive_time else None
                    ),
                )
            )
        return statuses
