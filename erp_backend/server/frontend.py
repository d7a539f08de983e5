# erp_backend/server/frontend.py
"""
Serverar det förbyggda frontend-bygget (FRONTEND_DIR).
Befintliga filer skickas som de är, allt annat faller tillbaka på index.html
så att klientsidans routing fungerar.
"""

from pathlib import Path

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse, RedirectResponse

router = APIRouter(include_in_schema=False)


def resolve_frontend_file(frontend_dir: str, full_path: str) -> Path:
    """Filen som ska skickas för `full_path`. HTTPException 404 om bygget saknas."""
    root = Path(frontend_dir).resolve()

    if full_path:
        candidate = (root / full_path).resolve()
        # inga ../-utbrytningar ur frontend-katalogen
        if candidate.is_file() and root in candidate.parents:
            return candidate

    index = root / "index.html"
    if not index.is_file():
        raise HTTPException(status_code=404, detail="Frontend-bygget hittades inte")
    return index


@router.get("/{full_path:path}")
def serve_frontend(full_path: str, request: Request):
    settings = request.app.state.settings
    api_root = settings.api_prefix.strip("/")
    if api_root and full_path.rstrip("/") == api_root:
        return RedirectResponse(url=f"/{api_root}/")
    if api_root and full_path.startswith(api_root + "/"):
        raise HTTPException(status_code=404, detail="Not Found")

    return FileResponse(resolve_frontend_file(settings.frontend_dir, full_path))
