import logging
from pathlib import Path
from typing import Optional

from reselect.config.settings import ReselectSettings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
ROOT_LOGGER_NAME = "reselect"


class LazyFlushingFileHandler(logging.Handler):
    """
    File handler lazy qui :
    1. Ne crée le fichier que lors du premier log réel (pas à l'initialisation)
    2. Flush immédiatement après chaque log
    """
    def __init__(self, filename: str, mode: str = 'a', encoding: str = 'utf-8'):
        super().__init__()
        self.filename = filename
        self.mode = mode
        self.encoding = encoding
        self._handler: Optional[logging.FileHandler] = None

    def _ensure_handler(self) -> logging.FileHandler:
        """Crée le FileHandler réel uniquement lors du premier log"""
        if self._handler is None:
            Path(self.filename).parent.mkdir(parents=True, exist_ok=True)
            self._handler = logging.FileHandler(
                self.filename,
                mode=self.mode,
                encoding=self.encoding
            )
            self._handler.setFormatter(self.formatter)
            self._handler.setLevel(self.level)
        return self._handler

    @property
    def initialized(self) -> bool:
        return self._handler is not None

    def emit(self, record):
        handler = self._ensure_handler()
        handler.emit(record)
        handler.flush()

    def close(self):
        if self._handler:
            self._handler.close()
        super().close()


_configured = False


def get_logger(name: str) -> logging.Logger:
    """
    Logger enfant du namespace 'reselect' (ex: get_logger("debug") -> reselect.debug).

    Ne lit pas les settings: appelable à l'import. La configuration se fait
    au premier reselect_tree() (ensure_logging) ou via setup_logging().
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def ensure_logging(settings: Optional[ReselectSettings] = None) -> logging.Logger:
    """Configure le logger 'reselect' une seule fois (appels suivants: no-op)."""
    if not _configured:
        return setup_logging(settings)
    return logging.getLogger(ROOT_LOGGER_NAME)


def setup_logging(settings: Optional[ReselectSettings] = None) -> logging.Logger:
    """
    Configure le logger 'reselect' d'après les settings.

    - Console si RESELECT_LOG_CONSOLE=true
    - Fichier (création lazy) si RESELECT_LOGS_DIR est défini

    Les handlers existants sont remplacés: l'appel est idempotent.

    Args:
        settings: Settings explicites (défaut: get_settings())

    Returns:
        Le logger racine du package
    """
    global _configured

    settings = settings or get_settings()
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    # Supprimer handlers existants (si reconfiguration)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    if settings.log_console:
        ch = logging.StreamHandler()
        ch.setLevel(logging.DEBUG)
        ch.setFormatter(formatter)
        logger.addHandler(ch)

    if settings.logs_dir is not None:
        fh_lazy = LazyFlushingFileHandler(str(settings.logs_dir / settings.log_file))
        fh_lazy.setLevel(logging.DEBUG)
        fh_lazy.setFormatter(formatter)
        logger.addHandler(fh_lazy)

    # Sans handler dédié, on laisse remonter vers le root logger (caplog, pytest)
    logger.propagate = not logger.handlers

    _configured = True
    return logger
