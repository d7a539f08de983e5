# erp_backend/core/route_groups.py
"""
Grupperar en platt lista RouteInfo till ett träd per path-segment under API-roten:
  /api/masters/project  →  masters → project
En route hamnar bara i noden för sitt sista segment.
"""

from __future__ import annotations

from typing import Iterable

from erp_backend.core.route_types import GroupNode, RouteInfo
from erp_backend.core.route_walker import join_paths

DEFAULT_API_PREFIX = "/api"


def normalize_prefix(api_prefix: str) -> str:
    prefix = "/" + api_prefix.strip("/")
    return prefix if prefix != "/" else ""


def strip_prefix(full_path: str, api_prefix: str) -> str:
    prefix = normalize_prefix(api_prefix)
    if prefix and (full_path == prefix or full_path.startswith(prefix + "/")):
        return full_path[len(prefix):]
    return full_path


def build_group_tree(routes: Iterable[RouteInfo], api_prefix: str = DEFAULT_API_PREFIX) -> GroupNode:
    prefix = normalize_prefix(api_prefix)
    root = GroupNode(name=prefix.lstrip("/") or "/", full_path=prefix or "/")

    for r in routes:
        rest = strip_prefix(r.full_path, prefix)
        segments = [s for s in rest.split("/") if s]

        # exakt på API-roten → parkeras på roten
        if not segments:
            root.apis.append(r)
            continue

        node = root
        path_so_far = prefix
        for seg in segments:
            path_so_far = join_paths(path_so_far, seg)
            child = node.children.get(seg)
            if child is None:
                child = GroupNode(name=seg, full_path=path_so_far)
                node.children[seg] = child
            node = child
        node.apis.append(r)

    return root


def count_apis(node: GroupNode) -> int:
    """Antal endpoints i noden plus hela dess underträd."""
    count = len(node.apis)
    for child in node.children.values():
        count += count_apis(child)
    return count
