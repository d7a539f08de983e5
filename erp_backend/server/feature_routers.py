# erp_backend/server/feature_routers.py
"""
Feature-modulerna (masters, configuration, ...) kopplas in via FEATURE_ROUTERS:

    FEATURE_ROUTERS="/configuration=myerp.configuration:router,/masters=myerp.masters:router"

Varje post är prefix=modul:attribut och attributet ska vara en APIRouter.
Felaktiga poster ger FeatureRouterError direkt vid start.
"""

import importlib
from typing import List, Tuple

from fastapi import APIRouter

from erp_backend.server.errors import FeatureRouterError


def normalize_router_prefix(prefix: str) -> str:
    stripped = prefix.strip().strip("/")
    return f"/{stripped}" if stripped else ""


def parse_feature_routers(value: str) -> List[Tuple[str, str, str]]:
    """"/a=pkg.mod:router" → [("/a", "pkg.mod", "router")]"""
    entries: List[Tuple[str, str, str]] = []
    for raw in value.split(","):
        entry = raw.strip()
        if not entry:
            continue
        prefix, sep, target = entry.partition("=")
        module_name, colon, attr = target.strip().partition(":")
        if not sep or not colon or not module_name or not attr:
            raise FeatureRouterError(f"Ogiltig FEATURE_ROUTERS-post {entry!r}, förväntat prefix=modul:attribut")
        entries.append((normalize_router_prefix(prefix), module_name, attr))
    return entries


def load_feature_routers(value: str) -> List[Tuple[str, APIRouter]]:
    routers: List[Tuple[str, APIRouter]] = []
    for prefix, module_name, attr in parse_feature_routers(value):
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise FeatureRouterError(f"Kunde inte importera {module_name!r}: {e}") from e

        router = getattr(module, attr, None)
        if not isinstance(router, APIRouter):
            raise FeatureRouterError(f"{module_name}:{attr} är ingen APIRouter")
        routers.append((prefix, router))
    return routers
