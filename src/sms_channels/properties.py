"""Channel configuration submitted to the client factory."""

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator


class SmsChannelProperties(BaseModel):
    """Identity and credentials of one SMS channel.

    ``id`` is None only for the placeholder clients the factory seeds per
    channel code.  ``code`` is kept as a plain string so that unknown codes
    reach the factory, which owns the code → client resolution.
    """

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    code: str = Field(min_length=1)
    api_key: str = Field(min_length=1)
    api_secret: SecretStr
    signature: str = ""
    callback_url: str | None = None

    @field_validator("code", "api_key")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("api_secret")
    @classmethod
    def _secret_not_blank(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("must not be blank")
        return value
