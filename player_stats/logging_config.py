import logging, logging.config

APP_LOGGER = "player_stats"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def build_logging_config(level: str = "INFO", access_log: bool = True) -> dict:
    """dictConfig for the API process.

    Package loggers (``player_stats.*``) and uvicorn's error logger print at
    ``level``; other libraries only print warnings. Access lines go to their
    own handler and are muted below WARNING when ``access_log`` is off.
    """
    level = level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "app": {"format": LOG_FORMAT, "datefmt": DATE_FORMAT},
            # uvicorn formats access lines itself
            "access_line": {"format": "%(message)s"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "app",
                "stream": "ext://sys.stderr",
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access_line",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            # reaches the console through root, which stays at WARNING for libraries
            APP_LOGGER: {"level": level},
            "uvicorn.error": {"level": level, "handlers": ["console"], "propagate": False},
            "uvicorn.access": {
                "level": "INFO" if access_log else "WARNING",
                "handlers": ["access"],
                "propagate": False,
            },
            # engine echo is controlled by settings.sql_echo
            "sqlalchemy.engine": {"level": "WARNING"},
        },
        "root": {"level": "WARNING", "handlers": ["console"]},
    }


def setup_logging(level: str = "INFO", access_log: bool = True):
    logging.config.dictConfig(build_logging_config(level, access_log))
