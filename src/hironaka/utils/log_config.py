import logging
import os
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level=None, format_string=LOG_FORMAT):
    """Send the records of the ``hironaka`` logger to stdout.

    The level defaults to the ``HIRONAKA_LOG_LEVEL`` environment variable,
    or ``INFO`` when it is unset. Calling this again only changes the level.
    """
    if level is None:
        level = os.environ.get("HIRONAKA_LOG_LEVEL", "INFO").upper()
    log = logging.getLogger("hironaka")
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(format_string))
        log.addHandler(handler)
    log.setLevel(level)
    return log


# Logger shared by every hironaka module
logger = setup_logging()
