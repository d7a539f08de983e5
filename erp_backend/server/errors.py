# erp_backend/server/errors.py


class ExplorerError(Exception):
    """Basklass för fel i appens egen infrastruktur."""


class FeatureRouterError(ExplorerError):
    """Felaktig post i FEATURE_ROUTERS (fel format, modul eller attribut saknas)."""
