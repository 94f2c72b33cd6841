import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(log_path: Optional[Path], level: int = logging.INFO) -> Optional[logging.Handler]:
    """Send `fitdb.*` loggers to a file; the TUI owns the terminal, so no stream handler.

    Returns the installed handler, or None when the log file cannot be opened.
    """
    root = logging.getLogger("fitdb")
    root.setLevel(level)
    root.propagate = False
    if log_path is None:
        root.addHandler(logging.NullHandler())
        return None
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError:
        root.addHandler(logging.NullHandler())
        return None
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    return handler


__all__ = ["configure_logging", "LOG_FORMAT"]
