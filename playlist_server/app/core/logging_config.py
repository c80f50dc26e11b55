"""
Logging setup shared by the API and the uvicorn server.

``setup_logging`` installs one console handler (and an optional file
handler) on the root logger and makes uvicorn's loggers propagate to
it, so server, access and application records share one format and one
destination.  ``run.py`` starts uvicorn with ``log_config=None`` so that
uvicorn does not replace this configuration with its own.

Calling ``setup_logging`` again (for example once per test app)
re-applies levels; the console handler is attached once per process
and a file handler once per log file.
"""

import logging
from typing import Optional

from .config import Settings


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")
# The multipart parser logs every part of every upload at DEBUG.
CHATTY_LOGGERS = ("multipart", "python_multipart")

_HANDLER_MARK = "_playlist_server_handler"


def _mark(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_MARK, True)
    return handler


def _installed(logger: logging.Logger, kind: type, filename: Optional[str]) -> bool:
    """Whether one of our handlers of exactly ``kind`` (for ``filename``) is attached."""
    for handler in logger.handlers:
        if not getattr(handler, _HANDLER_MARK, False) or type(handler) is not kind:
            continue
        if filename is None or getattr(handler, "baseFilename", None) == filename:
            return True
    return False


def setup_logging(settings: Settings) -> None:
    """Configure logging from ``settings``.

    ``log_level`` sets the root level, ``log_file`` adds a file handler
    and ``access_log`` decides whether per-request uvicorn access lines
    are emitted.
    """
    root = logging.getLogger()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    root.setLevel(level)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    if not _installed(root, logging.StreamHandler, None):
        console_handler = _mark(logging.StreamHandler())
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    if settings.log_file:
        log_path = settings.resolve_path(settings.log_file)
        if not _installed(root, logging.FileHandler, str(log_path)):
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = _mark(logging.FileHandler(log_path, encoding="utf-8"))
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True
    logging.getLogger("uvicorn.access").setLevel(logging.INFO if settings.access_log else logging.WARNING)

    for name in CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))
