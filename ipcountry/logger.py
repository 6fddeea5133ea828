from logging import config, getLogger
from typing import Any

from ipcountry.config import settings

LOGGER_NAME = "api"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def build_log_config(level: str) -> dict[str, Any]:
    """Logging dictConfig shared by the app logger and uvicorn.

    The same dict is handed to ``uvicorn.run(log_config=...)`` so uvicorn does not
    replace it with its own defaults on startup.
    """
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "access": {
                "()": "uvicorn.logging.AccessFormatter",
                "fmt": '%(levelprefix)s %(asctime)s - %(client_addr)s - "%(request_line)s" %(status_code)s',
                "datefmt": DATE_FORMAT,
                "use_colors": None,
            },
            "default": {
                "()": "uvicorn.logging.DefaultFormatter",
                "fmt": "%(levelprefix)s %(asctime)s - %(name)s - %(message)s",
                "datefmt": DATE_FORMAT,
                "use_colors": None,
            },
        },
        "handlers": {
            "access": {"class": "logging.StreamHandler", "formatter": "access", "stream": "ext://sys.stdout"},
            "default": {
                "formatter": "default",
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            LOGGER_NAME: {"handlers": ["default"], "level": level, "propagate": False},
            "uvicorn": {"handlers": ["default"], "level": level, "propagate": False},
            "uvicorn.error": {"level": level},
            "uvicorn.access": {"handlers": ["access"], "level": level, "propagate": False},
        },
    }


log_config = build_log_config(settings.log_level)
config.dictConfig(log_config)

logger = getLogger(LOGGER_NAME)
