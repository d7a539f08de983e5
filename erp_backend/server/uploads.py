from pathlib import Path
from typing import Dict, Iterable


def ensure_upload_folders(uploads_dir: str, subdirs: Iterable[str]) -> Dict[str, Path]:
    """Skapar uploads/ och dess underkataloger om de saknas."""
    root = Path(uploads_dir)
    root.mkdir(parents=True, exist_ok=True)

    folders: Dict[str, Path] = {}
    for name in subdirs:
        folder = root / name
        folder.mkdir(exist_ok=True)
        folders[name] = folder
    return folders
