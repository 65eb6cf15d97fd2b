from enum import StrEnum


class SmsChannelCode(StrEnum):
    ALIYUN = "aliyun"
    YUN_PIAN = "yunpian"

    @classmethod
    def get_by_code(cls, code: str | None) -> "SmsChannelCode | None":
        """Return the member for *code*, or None if it is not a known vendor."""
        try:
            return cls(code)
        except ValueError:
            return None
