"""Command-line entry point: python -m sms_channels.

Parses a vendor delivery-report callback body (read from stdin) with the
placeholder client for the given channel code and prints one JSON object
per report.
"""

import argparse
import dataclasses
import json
import logging
import sys
from collections.abc import Sequence

from sms_channels.config import SmsConfig
from sms_channels.factory import create_default_factory
from sms_channels.log import setup_logging

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="python -m sms_channels")
    parser.add_argument("code", help="Channel code of the vendor that posted the callback")
    args = parser.parse_args(argv)

    config = SmsConfig()
    setup_logging(config)

    factory = create_default_factory(config)
    client = factory.get_client_by_code(args.code)
    if client is None:
        logger.error("Unknown channel code", extra={"channel_code": args.code})
        return 2

    try:
        statuses = client.parse_receive_status(sys.stdin.read())
    except ValueError:
        logger.exception("Malformed delivery report", extra={"channel_code": args.code})
        return 1

    for status in statuses:
        print(json.dumps(dataclasses.asdict(status), default=str, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
