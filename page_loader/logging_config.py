import logging
import logging.config


def configure_logging(level: int = logging.INFO) -> None:
    """Send all log records to stderr as single-line JSON-ish messages."""
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                },
            },
            "root": {"level": logging.getLevelName(level), "handlers": ["console"]},
        }
    )
