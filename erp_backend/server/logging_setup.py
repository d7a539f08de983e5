"""Loggning för erp_backend-loggarna (en stream-handler, installeras en gång)."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class _ErpHandler(logging.StreamHandler):
    pass


def configure_logging(level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger("erp_backend")
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    # undvik dubbla handlers vid reload / flera create_app()
    if not any(isinstance(h, _ErpHandler) for h in logger.handlers):
        handler = _ErpHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
