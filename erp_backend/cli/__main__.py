# erp_backend/cli/__main__.py
import importlib
import shutil
import sys
from pathlib import Path

from erp_backend.server.api.explorer import api_explorer, collect_api_routes, list_routes
from erp_backend.server.errors import ExplorerError

USAGE = """Usage:
  python -m erp_backend.cli render <module:app> [--prefix=/api] [--out=out.html]
  python -m erp_backend.cli list <module:app> [--prefix=/api]
  python -m erp_backend.cli import-frontend <build_dir> [dest_dir]

Examples:
  python -m erp_backend.cli render erp_backend.server.main:app --out=api.html
  python -m erp_backend.cli list erp_backend.server.main:app
  python -m erp_backend.cli import-frontend ../ERP_Frontend/dist
"""

DEFAULT_FRONTEND_DIR = "frontend"


def load_app(target: str):
    """"paket.modul:attribut" → objektet (oftast en FastAPI-app)."""
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise ExplorerError(f"Förväntade modul:attribut, fick {target!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ExplorerError(f"Kunde inte importera {module_name!r}: {e}") from e
    try:
        return getattr(module, attr)
    except AttributeError as e:
        raise ExplorerError(f"{module_name!r} saknar {attr!r}") from e


def import_frontend(src: Path, dest: Path) -> Path:
    """Ersätt dest med en kopia av det byggda frontend-bygget i src."""
    if not src.is_dir():
        raise ExplorerError(f"Hittar inte frontend-bygget {src}")
    if dest.exists():
        shutil.rmtree(dest)
    shutil.copytree(src, dest)
    return dest


def _fail(msg: str, code: int = 2):
    print(f"Error: {msg}", file=sys.stderr)
    sys.exit(code)


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 2:
        print(USAGE, file=sys.stderr); sys.exit(1)

    cmd = args[0].lower()
    target = args[1]

    # defaults
    prefix = "/api"
    out_path = None
    positional = []

    # parse optional args (order-agnostic)
    for arg in args[2:]:
        if arg.startswith("--out="):
            out_path = arg.split("=", 1)[1]
        elif arg.startswith("--prefix="):
            prefix = arg.split("=", 1)[1]
        elif arg.startswith("--"):
            continue
        else:
            positional.append(arg)

    if cmd == "import-frontend":
        dest = Path(positional[0] if positional else DEFAULT_FRONTEND_DIR)
        try:
            import_frontend(Path(target), dest)
        except ExplorerError as e:
            _fail(str(e))
        print(f"Importerade frontend-bygget från {target} till {dest}")
        return

    if cmd not in ("render", "list"):
        print(USAGE, file=sys.stderr); sys.exit(1)

    try:
        app = load_app(target)
    except ExplorerError as e:
        _fail(str(e))

    if cmd == "render":
        html = list_routes(app, prefix, hidden=(api_explorer,))
        if out_path:
            Path(out_path).write_text(html, encoding="utf-8")
        else:
            sys.stdout.write(html)
        return

    for r in collect_api_routes(app, prefix, hidden=(api_explorer,)):
        print(f"{r.method}\t{r.full_path}\t{', '.join(r.middlewares)}")


if __name__ == "__main__":
    main()
