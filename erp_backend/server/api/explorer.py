# erp_backend/server/api/explorer.py
"""
API Explorer: catch-all under API-prefixen som listar alla registrerade routes
som en HTML-sida. Registreras sist så att den bara träffas när inget annat matchar.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, PlainTextResponse

from erp_backend.core.explorer_render import render_explorer_html
from erp_backend.core.route_groups import DEFAULT_API_PREFIX, build_group_tree, normalize_prefix
from erp_backend.core.route_types import RouteInfo
from erp_backend.core.route_walker import extract_routes
from erp_backend.core.starlette_layers import layers_from_app

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


def collect_api_routes(app: Any, api_prefix: str = DEFAULT_API_PREFIX, hidden: Iterable[Any] = ()) -> List[RouteInfo]:
    """Alla endpoints under API-prefixen, sorterade på (path, metod)."""
    prefix = normalize_prefix(api_prefix)
    routes = extract_routes(layers_from_app(app, hidden=hidden))
    if prefix:
        routes = [r for r in routes if r.full_path == prefix or r.full_path.startswith(prefix + "/")]
    return sorted(routes, key=lambda r: (r.full_path, r.method))


def list_routes(app: Any, api_prefix: str = DEFAULT_API_PREFIX, hidden: Iterable[Any] = ()) -> str:
    routes = collect_api_routes(app, api_prefix, hidden)
    root = build_group_tree(routes, api_prefix)
    return render_explorer_html(root, api_prefix=normalize_prefix(api_prefix), total=len(routes))


@router.get("/{path:path}", include_in_schema=False)
def api_explorer(request: Request, path: str):
    # request.app är API-sub-appen; hela trädet hänger på root-appen
    root_app = getattr(request.app.state, "root_app", None) or request.app
    api_prefix = getattr(request.app.state, "api_prefix", DEFAULT_API_PREFIX)
    try:
        html = list_routes(root_app, api_prefix, hidden=(api_explorer,))
    except Exception:
        logger.exception("API-explorern kunde inte lista routes (path=%r)", path)
        return PlainTextResponse("Failed to list routes", status_code=500)
    return HTMLResponse(content=html)
