import logging
import sys
import time

from pythonjsonlogger.json import JsonFormatter

SERVICE_FIELD = "buoy-command-api"


class UTCJsonFormatter(JsonFormatter):
    converter = time.gmtime


def setup_logging(level: str = "INFO", *, service: str = SERVICE_FIELD) -> None:
    """
    JSON lines on stdout. Every record carries the service name; call sites
    add imei / transaction_id / status through `extra=`.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level.upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        UTCJsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            static_fields={"service": service},
        )
    )
    root.addHandler(handler)

    # httpx logs every request at INFO, including each delivery status poll
    logging.getLogger("httpx").setLevel("WARNING")
