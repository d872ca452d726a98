import copy
import logging.config

from .utils import canonicalify, ensure_path

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s [%(levelname)s] [%(threadName)s] %(name)s - %(message)s"
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": logging.INFO,
            "formatter": "default",
            "stream": "ext://sys.stderr",
        },
    },
    "loggers": {
        "jsonform": {
            "handlers": ["console"],
            "level": logging.DEBUG,
            "propagate": True,
        }
    },
}

FILE_HANDLER = {
    "class": "logging.handlers.RotatingFileHandler",
    "level": logging.DEBUG,
    "formatter": "default",
    "maxBytes": 5 * 1024 * 1024,  # 5MB
    "backupCount": 10,
}


def setup(logfile=None, verbose=False):
    config = copy.deepcopy(LOGGING_CONFIG)

    if verbose:
        config["handlers"]["console"]["level"] = logging.DEBUG

    if logfile:
        p = canonicalify(logfile)
        if len(p.parts) > 1:
            ensure_path(p.parent)
        config["handlers"]["file"] = dict(FILE_HANDLER, filename=str(p))
        config["loggers"]["jsonform"]["handlers"].append("file")

    logging.config.dictConfig(config)


logger = logging.getLogger("jsonform")
