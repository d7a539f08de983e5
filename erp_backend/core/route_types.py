# erp_backend/core/route_types.py
"""
Typer för API-explorern.

Routing-trädet beskrivs som en variant med tre fall:
  - RouteLayer:  konkret route (path + metoder + handlers)
  - MountLayer:  nästlad container monterad under en prefix
  - OpaqueLayer: allt annat (websocket, ren middleware, trasiga poster)

RouteInfo och GroupNode byggs om för varje anrop och kastas efteråt.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Pattern, Tuple, Union

HTTP_METHODS = (
    "GET",
    "POST",
    "PUT",
    "PATCH",
    "DELETE",
    "HEAD",
    "OPTIONS",
    "TRACE",
    "CONNECT",
)


@dataclass(frozen=True)
class RouteInfo:
    method: str
    full_path: str
    middlewares: Tuple[str, ...] = ()


@dataclass
class GroupNode:
    name: str                 # t.ex. "masters"
    full_path: str            # t.ex. "/api/masters"
    children: Dict[str, "GroupNode"] = field(default_factory=dict)
    apis: List[RouteInfo] = field(default_factory=list)   # routes som slutar exakt här


@dataclass(frozen=True)
class RouteLayer:
    path: str
    methods: Tuple[str, ...]
    handlers: Tuple[str, ...] = ()


@dataclass(frozen=True)
class MountLayer:
    # path=None betyder att ingen literal prefix finns, bara pattern/param_names
    path: Optional[str]
    layers: Tuple["Layer", ...] = ()
    pattern: Optional[Pattern[str]] = None
    param_names: Tuple[str, ...] = ()


@dataclass(frozen=True)
class OpaqueLayer:
    description: str = ""


Layer = Union[RouteLayer, MountLayer, OpaqueLayer]
