"""
Root logger setup for the books service.

Records go to stderr and, when ``LOG_FILE`` is configured, to that
file as well.  Each line carries the timestamp, level, logger name and
message.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Attach handlers to the root logger unless it already has some.

    Parameters
    ----------
    level : str
        Level name such as ``"debug"`` or ``"INFO"``; unknown names mean
        ``INFO``.
    logfile : Optional[str]
        Optional log file.  Missing parent directories are created.
    """
    root = logging.getLogger()
    if root.handlers:
        # Handlers present: a previous create_app call or pytest's capture.
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
