# erp_backend/core/starlette_layers.py
"""
Översätter FastAPI/Starlettes levande routing-träd (app.routes) till
RouteLayer / MountLayer / OpaqueLayer.

Formen avgörs strukturellt, inte med isinstance:
  - har `methods`          → konkret route
  - har `original_router`  → lat include_router (nyare FastAPI), prefix och
                             dependencies ligger i `include_context`
  - har `routes`           → nästlad container (Mount, Host, Router, sub-app)
  - annars                 → opaque
En post som inte går att läsa blir OpaqueLayer i stället för ett fel.
"""

from __future__ import annotations

import functools
import re
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional, Set, Tuple

from erp_backend.core.route_types import Layer, MountLayer, OpaqueLayer, RouteLayer

# "{id}" eller "{id:int}" → ":id"
_PARAM_RE = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)(?::[A-Za-z_][A-Za-z0-9_]*)?\}")

# Starlette kompilerar Mount("/x") som "/x/{path:path}" – resten av URL:en, ingen riktig parameter
MOUNT_REMAINDER_PARAM = "path"

_UNREADABLE = (AttributeError, TypeError, ValueError)


def to_colon_params(path: str) -> str:
    return _PARAM_RE.sub(r":\1", path)


def callable_name(obj: Any) -> str:
    """Namn på en handler/dependency så som den visas i rapporten."""
    if obj is None:
        return ""
    if isinstance(obj, functools.partial):
        return callable_name(obj.func)
    name = getattr(obj, "__name__", None)
    if name:
        return str(name)
    return type(obj).__name__


def _route_handlers(route: Any, inherited: Tuple[str, ...]) -> Tuple[str, ...]:
    # include-nivåns dependencies först, sedan route-nivåns, sist parameter-dependencies
    names: List[str] = list(inherited)
    dependant = getattr(route, "dependant", None)
    for dep in getattr(dependant, "dependencies", None) or ():
        names.append(callable_name(getattr(dep, "call", None)))
    names.append(callable_name(getattr(route, "endpoint", None)))
    return tuple(names)


def _is_hidden(route: Any, hidden: Tuple[Any, ...]) -> bool:
    endpoint = getattr(route, "endpoint", None)
    return endpoint is not None and any(endpoint is h for h in hidden)


def _context_value(context: Any, key: str) -> Any:
    if isinstance(context, Mapping):
        return context.get(key)
    return getattr(context, key, None)


def _dependency_names(dependencies: Any) -> Tuple[str, ...]:
    # Depends(...) → den inslagna funktionen
    return tuple(callable_name(getattr(d, "dependency", d)) for d in dependencies or ())


def _container(
    owner: Any,
    routes: Iterable[Any],
    path: Optional[str],
    pattern: Any,
    param_names: Tuple[str, ...],
    hidden: Tuple[Any, ...],
    active: Set[int],
    inherited: Tuple[str, ...],
) -> Layer:
    if id(owner) in active:
        # cykel – samma container längre upp i stacken
        return OpaqueLayer("cycle")
    active.add(id(owner))
    try:
        children = tuple(_convert(routes, hidden, active, inherited))
    finally:
        active.discard(id(owner))
    return MountLayer(
        path=to_colon_params(str(path)) if path is not None else None,
        layers=children,
        pattern=pattern,
        param_names=param_names,
    )


def _to_layer(route: Any, hidden: Tuple[Any, ...], active: Set[int], inherited: Tuple[str, ...]) -> Layer:
    if _is_hidden(route, hidden):
        return OpaqueLayer("hidden")

    methods = getattr(route, "methods", None)
    if methods:
        return RouteLayer(
            path=to_colon_params(str(getattr(route, "path", "") or "")),
            methods=tuple(sorted(str(m) for m in methods if m)),
            handlers=_route_handlers(route, inherited),
        )

    original = getattr(route, "original_router", None)
    if original is not None:
        context = getattr(route, "include_context", None)
        return _container(
            original,
            getattr(original, "routes", None) or (),
            str(_context_value(context, "prefix") or ""),
            None,
            (),
            hidden,
            active,
            inherited + _dependency_names(_context_value(context, "dependencies")),
        )

    routes = getattr(route, "routes", None)
    if routes is not None:
        convertors = getattr(route, "param_convertors", None) or {}
        return _container(
            route,
            routes,
            getattr(route, "path", None),
            getattr(route, "path_regex", None),
            tuple(n for n in convertors if n != MOUNT_REMAINDER_PARAM),
            hidden,
            active,
            inherited,
        )

    return OpaqueLayer(type(route).__name__)


def _convert(
    routes: Iterable[Any], hidden: Tuple[Any, ...], active: Set[int], inherited: Tuple[str, ...] = ()
) -> List[Layer]:
    out: List[Layer] = []
    for route in routes:
        try:
            out.append(_to_layer(route, hidden, active, inherited))
        except _UNREADABLE as e:
            out.append(OpaqueLayer(f"unreadable: {e}"))
    return out


def layers_from_routes(routes: Iterable[Any], hidden: Iterable[Any] = ()) -> List[Layer]:
    """
    Bygg lager-listan för en sekvens Starlette-routes.

    `hidden` är endpoints (funktioner) vars routes inte ska synas,
    t.ex. explorerns egen catch-all.
    """
    return _convert(routes, tuple(hidden), set())


def layers_from_app(app: Any, hidden: Iterable[Any] = ()) -> List[Layer]:
    return layers_from_routes(getattr(app, "routes", None) or (), hidden)
