import logging

from colorlog import ColoredFormatter

logger = logging.getLogger("travel_map")


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Attach a colored stream handler to the package logger.

    Safe to call on every Streamlit rerun: existing handlers are replaced.
    """
    logger.handlers.clear()
    formatter = ColoredFormatter(
        "%(log_color)s%(asctime)s%(reset)s - %(name)s - %(log_color)s%(levelname)s%(reset)s - %(funcName)s - line %(lineno)d - %(message)s",
        datefmt=None,
        reset=True,
        log_colors={
            "DEBUG": "cyan",
            "INFO": "green",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "red,bg_white",
        },
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    level_name = logging.getLevelName(str(level).upper())
    logger.setLevel(level_name if isinstance(level_name, int) else logging.INFO)
    logger.propagate = False

    return logger
