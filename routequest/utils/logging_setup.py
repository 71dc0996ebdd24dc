from __future__ import annotations

import logging
import logging.handlers
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "INFO",
    to_file: bool = False,
    log_dir: Optional[str] = None,
    filename: str = "routequest.log",
) -> None:
    """Configure the root logger for a hunt session.

    Console output goes to stderr so the replay status report owns stdout.
    With ``to_file`` the same records are kept in ``log_dir/filename``
    (``./logs`` by default), rotated at 2 MB.
    """
    lvl = getattr(logging, str(level).upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(lvl)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if to_file:
        log_dir = log_dir or os.path.join(os.getcwd(), "logs")
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                os.path.join(log_dir, filename), maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8"
            )
        )
    for h in handlers:
        h.setLevel(lvl)
        h.setFormatter(fmt)
        root.addHandler(h)


def configure_logging(cfg: dict, level_override: Optional[str] = None) -> None:
    """Apply the ``logging`` section of the app config; a CLI/env level wins over the file."""
    log_cfg = cfg.get("logging") or {}
    setup_logging(
        level_override or log_cfg.get("level", "INFO"),
        to_file=bool(log_cfg.get("to_file", False)),
        log_dir=log_cfg.get("dir"),
        filename=log_cfg.get("file", "routequest.log"),
    )
