"""Utility modules for enumfactory."""

from .config import Config, load_config, save_config
from .logging import setup_logger, get_logger, log_with_data, timed

__all__ = [
    "Config",
    "load_config",
    "save_config",
    "setup_logger",
    "get_logger",
    "log_with_data",
    "timed",
]
