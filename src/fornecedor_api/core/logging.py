"""
Logging setup.

Structured JSON logs via python-json-logger, one line per record, with the
service name attached. LOG_FORMAT=text switches to a human-readable format
for local development.

Usage:
    from fornecedor_api.core.logging import setup_logging

    setup_logging()
    logger = logging.getLogger(__name__)
    logger.info("Fornecedor created", extra={"fornecedor_id": str(fornecedor.id)})
"""

import logging

from pythonjsonlogger.json import JsonFormatter

from fornecedor_api.core.config import get_settings

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

JSON_FIELDS = ("asctime", "levelname", "name", "message")
TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_configured = False


class ServiceNameFilter(logging.Filter):
    """Attach the service name to every record."""

    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self.service_name
        return True


def create_json_formatter() -> JsonFormatter:
    format_string = " ".join(f"%({field})s" for field in JSON_FIELDS)
    return JsonFormatter(
        format_string,
        rename_fields={"levelname": "level", "name": "logger"},
    )


def setup_logging(level: str | None = None, log_format: str | None = None, force: bool = False) -> None:
    """
    Configure the root logger once.

    Args:
        level: Log level name; defaults to LOG_LEVEL from settings
        log_format: "json" or "text"; defaults to LOG_FORMAT from settings
        force: Reconfigure even if logging was already set up

    Raises:
        ValueError: If the level is not a valid logging level name
    """
    global _configured
    if _configured and not force:
        return

    settings = get_settings()
    level_upper = (level or settings.LOG_LEVEL).upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level: {level_upper}. Valid: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    if (log_format or settings.LOG_FORMAT).lower() == "text":
        formatter = logging.Formatter(TEXT_FORMAT)
    else:
        formatter = create_json_formatter()

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    handler.addFilter(ServiceNameFilter(settings.SERVICE_NAME))

    root = logging.getLogger()
    root.setLevel(level_upper)
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)

    # SQL echo stays off unless explicitly enabled
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    _configured = True
