from .logging import LazyFlushingFileHandler, ensure_logging, get_logger, setup_logging
from .markup import format_markup

__all__ = [
    "LazyFlushingFileHandler",
    "ensure_logging",
    "get_logger",
    "setup_logging",
    "format_markup",
]
