import logging
import logging.handlers
import sys
import os
from charityconnect.core.config import Settings, settings as default_settings

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "stripe", "twilio", "httpx")


class RequestIDFilter(logging.Filter):
    """Give every record a request_id so LOG_FORMAT can always reference it."""

    def filter(self, record):
        record.request_id = getattr(record, 'request_id', 'N/A')
        return True


def _rotating_file_handler(path: str, level: int) -> logging.Handler:
    log_dir = os.path.dirname(path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        path,
        maxBytes=10*1024*1024,  # 10MB
        backupCount=5,
        encoding='utf-8'
    )
    handler.setLevel(level)
    return handler


def setup_logging(settings: Settings = default_settings) -> logging.Logger:
    """Configure the root logger: stdout always, a rotating file outside DEBUG."""
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handlers = [logging.StreamHandler(sys.stdout)]
    handlers[0].setLevel(logging.INFO)

    # LOG_FILE="" disables the file handler entirely
    if settings.LOG_FILE and not settings.DEBUG:
        handlers.append(_rotating_file_handler(settings.LOG_FILE, level))

    formatter = logging.Formatter(settings.LOG_FORMAT)
    request_id_filter = RequestIDFilter()
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(request_id_filter)
        root_logger.addHandler(handler)

    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger


logger = setup_logging()
