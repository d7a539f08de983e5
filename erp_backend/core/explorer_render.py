# erp_backend/core/explorer_render.py
"""
Render: GroupNode-träd + templates/api_explorer.html → HTML

- Rotens egna endpoints först, sedan grupperna sorterade på full path
- Varje grupp: rubrik (path + antal APIs i underträdet) och en hopfällbar panel
- Panelerna är stängda från början; expand/collapse sker helt i klienten
- All text från routes/handlers escapas innan den bäddas in
"""

from __future__ import annotations

import hashlib
import html
import itertools
import re
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from erp_backend.core.route_groups import count_apis
from erp_backend.core.route_types import GroupNode, RouteInfo

TEMPLATE_PATH = Path(__file__).resolve().parents[1] / "templates" / "api_explorer.html"

METHOD_COLORS = {
    "GET": "lightgreen",
    "POST": "skyblue",
    "PUT": "orange",
}
OTHER_METHOD_COLOR = "#FF61D2"  # DELETE, PATCH m.fl.

_PLACEHOLDER = re.compile(r"\[\[([a-zA-Z0-9_]+)\]\]")


def method_color(method: str) -> str:
    return METHOD_COLORS.get(method.upper(), OTHER_METHOD_COLOR)


def escape(value: object) -> str:
    return html.escape(str(value), quote=True)


def panel_id(full_path: str) -> str:
    # stabilt mellan processer, till skillnad från hash()
    return "panel-" + hashlib.md5(full_path.encode("utf-8")).hexdigest()[:12]


def _sorted_children(node: GroupNode) -> List[GroupNode]:
    return sorted(node.children.values(), key=lambda c: c.full_path)


def sorted_rows(apis: List[RouteInfo]) -> List[RouteInfo]:
    return sorted(apis, key=lambda r: (r.full_path, r.method))


def render_table(node: GroupNode) -> str:
    rows = sorted_rows(node.apis)

    per_path: Dict[str, int] = {}
    for r in rows:
        per_path[r.full_path] = per_path.get(r.full_path, 0) + 1

    trs: List[str] = []
    for sn, r in enumerate(rows, start=1):
        if r.middlewares:
            mw_html = "".join(f'<span class="badge bg-white mr-1">{escape(m)}</span>' for m in r.middlewares)
        else:
            mw_html = '<span class="fade">–</span>'
        trs.append(
            '<tr class="hover:bg-slate-50">'
            f'<td class="px-3 py-2 text-sm text-slate-600">{sn}</td>'
            f'<td class="px-3 py-2 mono">{escape(r.full_path)}</td>'
            f'<td class="px-3 py-2 text-center">{per_path[r.full_path]}</td>'
            '<td class="px-3 py-2">'
            f'<span class="method-cell method-{escape(r.method.lower())}" style="background:{method_color(r.method)}">{escape(r.method)}</span>'
            "</td>"
            f'<td class="px-3 py-2 text-sm">{mw_html}</td>'
            "</tr>"
        )

    body = "\n".join(trs) or (
        '<tr><td colspan="5" class="px-3 py-4 text-center fade">No endpoints at this level.</td></tr>'
    )

    return (
        '<div class="soft-card overflow-hidden mb-4">'
        '<div class="px-4 py-3 border-b border-slate-200 bg-white/80">'
        f'<div class="font-semibold">Endpoints directly under <span class="mono">{escape(node.full_path)}</span></div>'
        "</div>"
        '<div class="overflow-x-auto">'
        '<table class="min-w-full table-soft">'
        "<thead><tr>"
        '<th class="px-3 py-2 text-left">S.No</th>'
        '<th class="px-3 py-2 text-left">API</th>'
        '<th class="px-3 py-2 text-center"># APIs (this path)</th>'
        '<th class="px-3 py-2 text-left">Method</th>'
        '<th class="px-3 py-2 text-left">Middlewares</th>'
        "</tr></thead>"
        f"<tbody>\n{body}\n</tbody>"
        "</table>"
        "</div>"
        "</div>"
    )


def _render_group(node: GroupNode, serials: Iterator[int]) -> str:
    pid = panel_id(node.full_path)
    serial = next(serials)
    total_in_group = count_apis(node)

    header = (
        f'<div data-toggle="{pid}" class="soft-card group-row mb-2 px-4 py-3 flex items-center justify-between">'
        '<div class="flex items-center gap-3">'
        '<span data-chevron class="transition-transform duration-150 inline-block">▶</span>'
        "<div>"
        f'<div class="text-sm uppercase tracking-wide fade">Group {serial}</div>'
        f'<div class="font-bold mono text-lg">{escape(node.full_path)}</div>'
        "</div>"
        "</div>"
        '<div class="flex items-center gap-2">'
        f'<span class="badge bg-white">APIs in group: <strong>{total_in_group}</strong></span>'
        "</div>"
        "</div>"
    )

    parts = [render_table(node)] if node.apis else []
    parts.extend(_render_group(child, serials) for child in _sorted_children(node))

    panel = f'<div id="{pid}" data-group-panel class="hidden ml-6 mb-6">' + "\n".join(parts) + "</div>"
    return header + "\n" + panel


def render_groups(root: GroupNode) -> str:
    """Rotnoden visas inte som grupp, bara dess egna endpoints och barn."""
    serials = itertools.count(1)  # "Group N" – nollställs för varje rendering

    controls = (
        '<div class="flex items-center gap-2 mb-4">'
        '<button onclick="expandAll()" class="badge bg-white hover:bg-slate-50">Expand all</button>'
        '<button onclick="collapseAll()" class="badge bg-white hover:bg-slate-50">Collapse all</button>'
        "</div>"
    )
    parts = [controls]
    if root.apis:
        parts.append(render_table(root))
    parts.extend(_render_group(child, serials) for child in _sorted_children(root))
    return "\n".join(parts)


def render_explorer_html(root: GroupNode, api_prefix: str = "/api", total: Optional[int] = None) -> str:
    """
    Läs HTML-templaten och ersätt [[nyckel]] med värden.
    Allt som inte finns i context ersätts med tom sträng.
    """
    if total is None:
        total = count_apis(root)

    context = {
        "api_prefix": escape(api_prefix.rstrip("/")),
        "total": str(total),
        "groups_html": render_groups(root),
    }

    page = TEMPLATE_PATH.read_text(encoding="utf-8")
    # ett pass över templaten – insatta värden skannas inte igen
    return _PLACEHOLDER.sub(lambda m: context.get(m.group(1), ""), page)
