"""Abstract SMS client interface shared by all vendor implementations."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime

import httpx

from sms_channels.config import SmsConfig
from sms_channels.properties import SmsChannelProperties

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SmsSendResult:
    """Outcome of a send attempt against a vendor API."""

    success: bool
    code: str
    message: str
    serial_no: str | None = None
    request_id: str | None = None


@dataclass(frozen=True, slots=True)
class SmsReceiveStatus:
    """One delivery report parsed from a vendor callback."""

    success: bool
    mobile: str
    serial_no: str | None
    log_id: int | None
    error_code: str | None
    error_message: str | None
    receive_time: datetime | None


class AbstractSmsClient(ABC):
    """Base class for vendor SMS clients.

    A client is bound to one channel.  ``init()`` builds the HTTP client from
    the current properties; ``refresh()`` swaps in new properties and rebuilds
    it, keeping the same instance so references held by callers stay valid.
    """

    def __init__(
        self,
        properties: SmsChannelProperties,
        config: SmsConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._properties = properties
        self._config = config or SmsConfig()
        self._transport = transport
        self._http: httpx.Client | None = None

    @property
    def id(self) -> int | None:
        return self._properties.id

    @property
    def code(self) -> str:
        return self._properties.code

    @property
    def properties(self) -> SmsChannelProperties:
        return self._properties

    def init(self) -> None:
        # Swap first, close after: readers see the old or the new client.
        previous = self._http
        self._http = httpx.Client(
            timeout=self._config.http_timeout_seconds,
            transport=self._transport,
        )
        if previous is not None:
            previous.close()
        logger.info(
            "SMS client initialized",
            extra={"channel_id": self.id, "channel_code": self.code},
        )

    def refresh(self, properties: SmsChannelProperties) -> None:
        """Apply *properties* if they differ from the current ones.

        Raises ValueError if *properties* names a different channel code; a
        client never changes vendor.
        """
        if properties == self._properties:
            return
        if properties.code != self.code:
            raise ValueError(
                f"Cannot refresh {self.code!r} client with {properties.code!r} properties"
            )
        logger.info(
            "SMS client configuration changed, reinitializing",
            extra={"channel_id": self.id, "properties": repr(properties)},
        )
        self._properties = properties
        self.init()

    def close(self) -> None:
        http, self._http = self._http, None
        if http is not None:
            http.close()

    def send(
        self,
        log_id: int,
        mobile: str,
        template_id: str,
        template_params: Mapping[str, object],
    ) -> SmsSendResult:
        """Send a templated SMS.

        Never raises for vendor or transport failures; those come back as
        ``SmsSendResult(success=False)``.
        """
        log_ctx = {
            "channel_id": self.id,
            "channel_code": self.code,
            "log_id": log_id,
            "template_id": template_id,
        }
        http = self._http
        if http is None:
            logger.error("SMS client used before init()", extra=log_ctx)
            return SmsSendResult(success=False, code="NOT_INITIALIZED", message="client not initialized")

        try:
            result = self._do_send(http, log_id, mobile, template_id, template_params)
        except (httpx.HTTPError, ValueError, TypeError, RuntimeError) as exc:
            # httpx raises RuntimeError on a client closed by refresh().
            logger.exception("SMS send failed", extra=log_ctx)
            return SmsSendResult(success=False, code="EXCEPTION", message=str(exc))

        if result.success:
            logger.info("SMS sent", extra={**log_ctx, "serial_no": result.serial_no})
        else:
            logger.warning(
                "SMS rejected by vendor",
                extra={**log_ctx, "code": result.code, "vendor_message": result.message},
            )
        return result

    @abstractmethod
    def parse_receive_status(self, text: str) -> list[SmsReceiveStatus]:
        """Parse a vendor delivery-report callback body.

        Raises ValueError if the body is not in the vendor's format.
        """

    @abstractmethod
    def _do_send(
        self,
        http: httpx.Client,
        log_id: int,
        mobile: str,
        template_id: str,
        template_params: Mapping[str, object],
    ) -> SmsSendResult:
        """Issue the vendor request and translate its response."""
