# erp_backend/core/route_walker.py
"""
Går rekursivt igenom lager-trädet och plockar ut varje konkret endpoint:
metod, full path och namnen på de handlers som hänger på routen.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Sequence

from erp_backend.core.mount_path import recover_mount_path
from erp_backend.core.route_types import HTTP_METHODS, Layer, MountLayer, RouteInfo, RouteLayer

_SYNTHETIC_PREFIX = re.compile(r"^bound\s+")


def join_paths(a: str, b: str) -> str:
    """
    "/api/" + "/masters" → "/api/masters"
    "/api"  + "masters"  → "/api/masters"
    ""      + ""         → "/"
    """
    left = a[:-1] if a.endswith("/") else a
    right = b if b.startswith("/") else f"/{b}"
    return (left + right) or "/"


def clean_handler_name(name: Optional[str]) -> str:
    if not name:
        return ""
    return _SYNTHETIC_PREFIX.sub("", str(name)).strip()


def _methods(layer: RouteLayer) -> List[str]:
    out: List[str] = []
    for m in layer.methods:
        if not m:
            continue
        upper = str(m).upper()
        if upper in HTTP_METHODS and upper not in out:
            out.append(upper)
    return out


def _handler_names(handlers: Sequence[str]) -> tuple:
    names = (clean_handler_name(h) for h in handlers)
    return tuple(n for n in names if n)


def extract_routes(layers: Iterable[Layer], base: str = "") -> List[RouteInfo]:
    """
    Alla endpoints under `layers`, med `base` som redan ackumulerad prefix.

    Ingen deduplicering: samma metod+path registrerad två gånger
    kommer med två gånger. Okända lager hoppas över.
    """
    collected: List[RouteInfo] = []

    for layer in layers:
        if isinstance(layer, RouteLayer):
            route_path = join_paths(base, layer.path)
            middlewares = _handler_names(layer.handlers)
            for method in _methods(layer):
                collected.append(RouteInfo(method=method, full_path=route_path, middlewares=middlewares))
            continue

        if isinstance(layer, MountLayer):
            prefix = recover_mount_path(layer)
            child_base = join_paths(base, prefix) if prefix else base
            collected.extend(extract_routes(layer.layers, child_base))
            continue

        # OpaqueLayer och allt annat: bidrar inte, men stoppar inte genomgången

    return collected
