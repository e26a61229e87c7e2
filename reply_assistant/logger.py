# reply_assistant/logger.py
import logging
import sys
from typing import Optional

from reply_assistant.config import LOG_LEVEL

_logger = logging.getLogger("reply_assistant")
if not _logger.handlers:
    _logger.setLevel(LOG_LEVEL)
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    _logger.addHandler(handler)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the package logger, or a child of it for a module name"""
    if not name:
        return _logger
    if name.startswith("reply_assistant."):
        name = name[len("reply_assistant."):]
    return _logger.getChild(name)
