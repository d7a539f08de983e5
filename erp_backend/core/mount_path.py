# erp_backend/core/mount_path.py
"""
Återskapar prefixen som en nästlad router monterats under.

Finns en literal path används den rakt av. Annars försöker vi "dekompilera"
det kompilerade mönstret (Starlettes path_regex, eller Express-liknande
mount-regex) till en läsbar path med :param-platshållare.

Det här är best effort: mönster som inte går att tolka ger "" och
routen hamnar då direkt under förälderns path. Inget fel kastas.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Sequence

from erp_backend.core.route_types import MountLayer

logger = logging.getLogger(__name__)

# Mönster som matchar allt utan prefix (= monterad i roten)
_MATCH_EVERYTHING = {
    "",
    "^",
    "^/",
    "^/?",
    "^.*",
    "^.*$",
    "^(?P<path>.*)$",
    "^/(?P<path>.*)$",
    "^\\/?(?=\\/|$)",
}

# Svansar som bara beskriver "resten av URL:en" eller valfritt avslutande snedstreck
_TAILS = (
    "/(?P<path>.*)",        # Starlette Mount
    "\\/?(?=\\/|$)",        # Express: valfritt snedstreck + lookahead
    "(?=\\/|$)",            # Express: bara lookahead
    "\\/?",
)

_METACHARS = set("()[]{}*+?|.^$")


def _group_end(src: str, start: int) -> Optional[int]:
    """Index direkt efter parentesen som stänger gruppen som börjar på `start`."""
    depth = 0
    i = start
    in_class = False
    while i < len(src):
        ch = src[i]
        if ch == "\\":
            i += 2
            continue
        if in_class:
            if ch == "]":
                in_class = False
        elif ch == "[":
            in_class = True
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return None


def _has_capture(group: str) -> bool:
    if group.startswith("(?P<"):
        return True
    if not group.startswith("(?"):
        return True
    # icke-fångande grupp – fångar den något inuti?
    inner = group[3:-1]
    i = 0
    while i < len(inner):
        if inner[i] == "\\":
            i += 2
            continue
        if inner[i] == "(" and (inner[i + 1 : i + 2] != "?" or inner[i + 1 : i + 4] == "?P<"):
            return True
        i += 1
    return False


def _placeholders(names: Sequence[str]) -> Iterator[str]:
    for name in names:
        yield f":{name}"
    while True:
        yield ":param"


def decompile_pattern(source: str, param_names: Sequence[str] = ()) -> str:
    """
    Gör om en kompilerad mount-regex till en path, t.ex.
      "^/tenant/(?P<tenant_id>[^/]+)/(?P<path>.*)$"  →  "/tenant/:tenant_id"
    Returnerar "" om mönstret inte går att tolka.
    """
    if source in _MATCH_EVERYTHING:
        return ""

    src = source
    if src.startswith("^"):
        src = src[1:]
    if src.endswith("$") and not src.endswith("\\$"):
        src = src[:-1]
    for tail in _TAILS:
        if src.endswith(tail):
            src = src[: -len(tail)]
            break

    names = _placeholders(param_names)
    out: List[str] = []
    i = 0
    while i < len(src):
        ch = src[i]
        if ch == "\\":
            if i + 1 >= len(src):
                return ""
            out.append(src[i + 1])
            i += 2
            continue
        if ch == "(":
            end = _group_end(src, i)
            if end is None:
                return ""
            group = src[i:end]
            if group.startswith(("(?=", "(?!")):
                i = end
                continue
            if not _has_capture(group):
                return ""
            out.append(next(names))
            i = end
            continue
        if ch in _METACHARS:
            return ""
        out.append(ch)
        i += 1

    path = "".join(out)
    if not path or path == "/":
        return ""
    if not path.startswith("/"):
        path = "/" + path
    return path


def recover_mount_path(layer: MountLayer) -> str:
    """Prefixen som `layer` är monterad under ("" = förälderns path)."""
    if layer.path is not None:
        return layer.path

    pattern = layer.pattern
    if pattern is None:
        return ""
    source = getattr(pattern, "pattern", pattern)
    if not isinstance(source, str):
        return ""

    path = decompile_pattern(source, layer.param_names)
    if not path and source not in _MATCH_EVERYTHING:
        logger.debug("Kunde inte återskapa mount-path ur %r, använder förälderns path", source)
    return path
