# aim_ai/log_setup.py
import logging

import colorlog

LOG_FORMAT = (
    "%(log_color)s[%(asctime)s] %(levelname)-8s%(reset)s "
    "%(blue)s%(name)s %(bold_white)s%(funcName)s:%(lineno)d%(reset)s - "
    "%(message)s"
)
LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "red,bg_white",
}


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Attach a colored console handler to the `aim_ai` logger (once)."""
    root = logging.getLogger("aim_ai")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    if not any(getattr(h, "_aim_ai", False) for h in root.handlers):
        handler = colorlog.StreamHandler()
        handler.setFormatter(
            colorlog.ColoredFormatter(
                LOG_FORMAT,
                datefmt="%Y-%m-%d %H:%M:%S",
                log_colors=LOG_COLORS,
            )
        )
        handler._aim_ai = True
        root.addHandler(handler)
    return root
