import os
from logging import config, getLevelName, getLogger

LOGGER_NAME = "ipquery"
CLIENT_LOGGER_NAME = f"{LOGGER_NAME}.clients"

LOG_LEVEL = getLevelName(os.getenv("LOG_LEVEL", "INFO"))  # DEBUG, WARNING, ERROR
# Per-request client lines are DEBUG; this lets them be enabled without making uvicorn chatty.
CLIENT_LOG_LEVEL = getLevelName(os.getenv("IPQUERY_CLIENT_LOG_LEVEL", os.getenv("LOG_LEVEL", "INFO")))

log_config = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "access": {
            "()": "uvicorn.logging.AccessFormatter",
            "fmt": '%(levelprefix)s %(asctime)s - %(client_addr)s - "%(request_line)s" %(status_code)s',
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
        "default": {
            "()": "uvicorn.logging.DefaultFormatter",
            "fmt": "%(levelprefix)s %(asctime)s - %(name)s - %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "access": {"class": "logging.StreamHandler", "formatter": "access", "stream": "ext://sys.stdout"},
        "default": {"class": "logging.StreamHandler", "formatter": "default", "stream": "ext://sys.stderr"},
    },
    "loggers": {
        LOGGER_NAME: {"handlers": ["default"], "level": LOG_LEVEL, "propagate": False},
        CLIENT_LOGGER_NAME: {"level": CLIENT_LOG_LEVEL},
        "uvicorn": {"handlers": ["default"], "level": LOG_LEVEL, "propagate": True},
        "uvicorn.access": {"handlers": ["access"], "level": LOG_LEVEL, "propagate": False},
        "uvicorn.error": {"level": LOG_LEVEL, "propagate": False},
    },
}

# Only the HTTP service imports this module; the client library never configures logging itself.
config.dictConfig(log_config)

logger = getLogger(LOGGER_NAME)
