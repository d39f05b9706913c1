import logging
import sys

from timeboard.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False

def setup_logging(level_name: str | None = None) -> None:
    global _configured

    level_name = (level_name or settings.log_level).upper()
    level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    # create_app may run several times per process (tests)
    if _configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    handler.setLevel(level)
    root.addHandler(handler)
    _configured = True

    logging.getLogger(__name__).info("logging initialized at %s", level_name)
