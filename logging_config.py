import logging
import sys

LOGGER_NAME = "filterlab"
LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s"


def setup_logging(level=logging.INFO):
    """
    Send the "filterlab" logger tree to stdout at the given level
    (a logging constant or a name such as "DEBUG").
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger(LOGGER_NAME)
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(handler)
    return root


def get_logger(name=None):
    """Logger for one module, nested under the application logger."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}" if name else LOGGER_NAME)
