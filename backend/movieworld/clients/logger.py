import logging
import sys

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger("movieworld.clients")
logger.setLevel(logging.DEBUG)

_handler = next((h for h in logger.handlers if isinstance(h, logging.StreamHandler)), None)
if _handler is None:
    _handler = logging.StreamHandler(sys.stdout)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logger.addHandler(_handler)
_handler.setLevel(logging.INFO)

# Upstream chatter stays on stdout and out of the root logger.
logger.propagate = False


def set_client_log_level(level: int) -> None:
    """Let `DEBUG` settings surface cache hits and retry details from the clients."""
    _handler.setLevel(level)
