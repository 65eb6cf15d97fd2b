"""Registry of SMS clients keyed by channel id and by channel code."""

import logging

import httpx
from pydantic import SecretStr

from sms_channels.clients import AbstractSmsClient, AliyunSmsClient, YunpianSmsClient
from sms_channels.config import SmsConfig
from sms_channels.enums import SmsChannelCode
from sms_channels.exceptions import UnknownSmsChannelError
from sms_channels.properties import SmsChannelProperties

logger = logging.getLogger(__name__)

CLIENT_TYPES: dict[SmsChannelCode, type[AbstractSmsClient]] = {
    SmsChannelCode.ALIYUN: AliyunSmsClient,
    SmsChannelCode.YUN_PIAN: YunpianSmsClient,
}


class SmsClientFactory:
    """Creates vendor clients and caches them per channel.

    Clients configured for a concrete channel are kept by channel id.  One
    placeholder client per channel code is kept by code for vendor-generic
    work such as parsing delivery-report callbacks.

    Lookups and single-key writes rely on dict atomicity; there is no lock.
    Two concurrent ``create_or_update_client`` calls for a new id may both
    build a client, and the last one published wins.
    """

    def __init__(
        self,
        config: SmsConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config or SmsConfig()
        self._transport = transport
        self._clients_by_id: dict[int, AbstractSmsClient] = {}
        self._clients_by_code: dict[str, AbstractSmsClient] = {}

    def bootstrap_defaults(self) -> None:
        """Seed one placeholder-credential client per known channel code."""
        for code in SmsChannelCode:
            properties = SmsChannelProperties(
                code=code,
                api_key=self._config.default_api_key,
                api_secret=SecretStr(self._config.default_api_secret),
            )
            self._clients_by_code[code] = self.create_client(properties)

    def get_client(self, key: int | str) -> AbstractSmsClient | None:
        """Look up by channel id when *key* is an int, by channel code when a str."""
        if isinstance(key, str):
            return self.get_client_by_code(key)
        return self.get_client_by_id(key)

    def get_client_by_id(self, channel_id: int) -> AbstractSmsClient | None:
        return self._clients_by_id.get(channel_id)

    def get_client_by_code(self, code: str) -> AbstractSmsClient | None:
        return self._clients_by_code.get(code)

    def create_or_update_client(self, properties: SmsChannelProperties) -> None:
        """Register a client for ``properties.id``, or refresh the existing one.

        The code is resolved before either branch.  When an existing channel
        switches vendor, a new client replaces the old one, which is closed.

        Raises:
            ValueError: If ``properties.id`` is None.
            UnknownSmsChannelError: If ``properties.code`` is not a known vendor.
        """
        if properties.id is None:
            raise ValueError("Channel properties must carry an id")

        client_type = self._resolve_client_type(properties)
        client = self._clients_by_id.get(properties.id)
        if client is not None and type(client) is client_type:
            client.refresh(properties)
            return

        replacement = client_type(properties, config=self._config, transport=self._transport)
        replacement.init()
        self._clients_by_id[properties.id] = replacement
        if client is not None:
            logger.info(
                "SMS channel switched vendor, client replaced",
                extra={
                    "channel_id": properties.id,
                    "from_code": client.code,
                    "to_code": properties.code,
                },
            )
            client.close()

    def create_client(self, properties: SmsChannelProperties) -> AbstractSmsClient:
        """Build an uninitialized client for the vendor named by ``properties.code``."""
        client_type = self._resolve_client_type(properties)
        return client_type(properties, config=self._config, transport=self._transport)

    def _resolve_client_type(self, properties: SmsChannelProperties) -> type[AbstractSmsClient]:
        channel_code = SmsChannelCode.get_by_code(properties.code)
        client_type = CLIENT_TYPES.get(channel_code) if channel_code else None
        if client_type is None:
            logger.error(
                "No SMS client implementation for channel",
                extra={"properties": repr(properties)},
            )
            raise UnknownSmsChannelError(properties.code)
        return client_type

    def close(self) -> None:
        """Close the HTTP clients of every registered channel."""
        for client in list(self._clients_by_id.values()):
            client.close()


def create_default_factory(
    config: SmsConfig | None = None,
    transport: httpx.BaseTransport | None = None,
) -> SmsClientFactory:
    """Create a factory with the per-code placeholder clients seeded."""
    factory = SmsClientFactory(config, transport=transport)
    factory.bootstrap_defaults()
    return factory
