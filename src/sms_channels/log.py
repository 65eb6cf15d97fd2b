"""JSON logging for SMS channel clients, configured from SmsConfig."""

import json
import logging
import sys
from datetime import datetime, timezone

from sms_channels.config import SmsConfig

# Standard LogRecord attributes; anything else on a record came in
# through `extra={...}` and is emitted as a top-level field.
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
    | {"message", "asctime"}
)


class JsonFormatter(logging.Formatter):
    """Single-line JSON formatter.

    Channel context (``channel_id``, ``channel_code``, ``log_id``...) passed
    through ``extra`` becomes top-level keys.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, object] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_entry.update(
            (key, value) for key, value in record.__dict__.items() if key not in _STANDARD_ATTRS
        )
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str, ensure_ascii=False)


def setup_logging(config: SmsConfig | None = None) -> None:
    """Install the JSON formatter on the root logger at ``config.log_level``.

    Loggers listed in ``config.suppressed_loggers`` are raised to WARNING.
    """
    config = config or SmsConfig()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.setLevel(getattr(logging, config.log_level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)

    for name in config.suppressed_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)
