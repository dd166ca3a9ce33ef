# --- src/circuitsim_core/log_config.py ---
import logging
import sys
from typing import IO, Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] [%(name)s] %(message)s"


def setup_logging(level: Union[int, str] = logging.INFO, stream: Optional[IO[str]] = None) -> logging.Handler:
    """
    Routes package logging to stdout (or `stream`) through a single handler.

    Calling it again swaps that handler for a new one; handlers installed by
    the application or by pytest are left in place.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    root = logging.getLogger()

    for existing in [h for h in root.handlers if getattr(h, "_circuitsim_handler", False)]:
        root.removeHandler(existing)
        existing.close()

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._circuitsim_handler = True
    root.addHandler(handler)
    root.setLevel(level)
    logging.getLogger(__name__).debug(f"Logging configured at level {logging.getLevelName(level)}.")
    return handler
