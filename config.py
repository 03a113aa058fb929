"""
config.py
Settings (read once from the environment) + logger factory.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

DB_FILE = Path(os.environ.get("LIBRARY_DB_FILE", Path(__file__).with_name("library.db")))
DB_TIMEOUT = float(os.environ.get("LIBRARY_DB_TIMEOUT", "5.0"))
BCRYPT_ROUNDS = int(os.environ.get("LIBRARY_BCRYPT_ROUNDS", "12"))
LOG_LEVEL = os.environ.get("LIBRARY_LOG_LEVEL", "INFO").upper()

MIN_PASSWORD_LENGTH = 8
DEFAULT_MEMBERSHIP_TYPE_ID = 1
DEFAULT_EXPIRING_DAYS = 7

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger under the "library" namespace.
    The handler is attached once, on the namespace root.
    """
    root = logging.getLogger("library")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(LOG_LEVEL)
    return root.getChild(name)
