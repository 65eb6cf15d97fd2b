from pydantic_settings import BaseSettings, SettingsConfigDict


class SmsConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SMS_")

    log_level: str = "INFO"
    suppressed_loggers: list[str] = ["httpx", "httpcore"]
    http_timeout_seconds: float = 10.0

    aliyun_endpoint: str = "https://dysmsapi.aliyuncs.com/"
    aliyun_region_id: str = "cn-hangzhou"
    yunpian_endpoint: str = "https://sms.yunpian.com/v2/sms/tpl_single_send.json"

    # Placeholder credentials for the per-code clients seeded at startup
    default_api_key: str = "default"
    default_api_secret: str = "default"
