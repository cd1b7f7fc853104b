"""
Logging setup for the API process.

Everything logs through ``logging.getLogger(__name__)``; this module only
decides where records go.  Uvicorn's own loggers are left alone so its
access log keeps its format.
"""

import logging
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Send root log records to stderr and, if ``logfile`` is given, to that file.

    Repeated ``create_app`` calls in tests keep the first configuration.
    Unknown level names fall back to ``INFO``.
    """
    if logging.getLogger().handlers:
        return
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(logfile, encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )
