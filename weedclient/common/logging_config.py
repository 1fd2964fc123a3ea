import logging
from pathlib import Path
from time import gmtime
from typing import Optional, Union

from weedclient.common.config import settings

LOG_FORMAT = "%(asctime)s.%(msecs)03dZ [%(name)s] %(levelname)s %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"


def setup_logging(
    level: Union[int, str, None] = None, log_file: Optional[str] = None
):
    """
    Configure root logging for an application embedding the client.

    The library itself only creates module loggers; call this from the
    application entry point if it has no logging setup of its own.

    Args:
        level: Logging level name or number, defaults to settings.LOG_LEVEL
        log_file: Optional file path that receives a copy of the output
    """
    if level is None:
        level = settings.LOG_LEVEL
    # https://stackoverflow.com/a/7517430/49489
    logging.Formatter.converter = gmtime
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=DATE_FORMAT)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logging.getLogger().addHandler(file_handler)

    logger = logging.getLogger("weedclient")
    logger.info(f"weedclient logging initialized (level={logging.getLevelName(logging.getLogger().level)})")
    return logger
