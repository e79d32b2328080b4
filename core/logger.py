# core/logger.py
import logging
from pathlib import Path
from typing import Optional

from sqlalchemy.orm import Session

from models.audit_log import AuditLog


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger once with a console and optional file handler."""
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)


def log_action(db: Session, action: str, food_id: int, detail: Optional[str] = None):
    """Add an audit row to the caller's session; it commits with the change it describes."""
    db.add(AuditLog(action=action, food_id=food_id, detail=detail))
