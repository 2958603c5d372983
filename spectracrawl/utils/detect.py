# spectracrawl/utils/detect.py
from __future__ import annotations
from pathlib import Path
import zipfile


def csv_members(p: Path) -> list[str]:
    """Names of the CSV members of a zip archive; empty for anything that is not a readable zip."""
    if not p.is_file() or not zipfile.is_zipfile(p):
        return []
    try:
        with zipfile.ZipFile(p, "r") as zf:
            return [i.filename for i in zf.infolist()
                    if not i.is_dir() and i.filename.lower().endswith(".csv")]
    except (zipfile.BadZipFile, OSError):
        return []


def discover_archives(root: Path, recurse: bool = True, name: str | None = None) -> list[Path]:
    """
    Completed spectra archives under ``root``.

    A file root is returned as-is when it qualifies. ``name`` restricts the
    search to the driver's download file name (e.g. SpectraPlotSimulations.zip).
    """
    root = Path(root)
    pattern = name or "*.zip"
    if root.is_file():
        candidates = [root] if root.match(pattern) else []
    elif root.is_dir():
        candidates = root.rglob(pattern) if recurse else root.glob(pattern)
    else:
        return []
    # deterministic ordering
    return sorted((p.resolve() for p in candidates if csv_members(p)), key=str)
