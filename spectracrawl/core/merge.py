# spectracrawl/core/merge.py
from __future__ import annotations
from pathlib import Path
import logging
import pandas as pd

from .model import SpectralRun, MergedSpectrum
from .conditions import parse, header_row, output_filename
from .errors import OutputDirectoryMissing, EmptyBatch, WriteFailure
from ..loaders import zip_loader

_LOG = logging.getLogger(__name__)


def merge_runs(runs: list[SpectralRun]) -> MergedSpectrum:
    """
    Order runs by their first spectral position and resolve batch bounds.

    ``sorted`` is stable, so runs starting at the same position keep their
    archive order. The upper bound is the largest maximum of any run, which
    is not necessarily the last run's.
    """
    if not runs:
        raise EmptyBatch("no spectra found in archive")
    ordered = tuple(sorted(runs, key=lambda r: r.nu_min))
    tokens = ordered[0].conditions
    return MergedSpectrum(
        runs=ordered,
        nu_min=ordered[0].nu_min,
        nu_max=max(r.nu_max for r in ordered),
        tokens=tokens,
        conditions=parse(tokens),
    )


def write_merged(merged: MergedSpectrum, out_dir: Path) -> Path:
    """
    Write header + data rows to a temporary sibling, then move it into place.

    Each run is written as its own frame so rows keep their own width.
    """
    out_path = out_dir / output_filename(merged.conditions, merged.nu_min, merged.nu_max)
    tmp_path = out_path.with_name(out_path.name + ".part")
    try:
        with tmp_path.open("w", encoding="utf-8", newline="") as fh:
            pd.DataFrame([header_row(merged.tokens)]).to_csv(fh, header=False, index=False, lineterminator="\n")
            for run in merged.runs:
                run.df.to_csv(fh, header=False, index=False, lineterminator="\n")
        tmp_path.replace(out_path)
    except OSError as exc:
        _discard(tmp_path)
        raise WriteFailure(f"failed writing {out_path}: {exc}") from exc
    except BaseException:
        _discard(tmp_path)
        raise
    return out_path


def _discard(tmp_path: Path) -> None:
    if tmp_path.is_dir():
        return
    tmp_path.unlink(missing_ok=True)


def merge_archive(archive: Path, out_dir: Path) -> Path:
    """
    Merge every spectrum CSV inside ``archive`` into one CSV in ``out_dir``.

    Nothing is written unless all members load, share identical conditions
    and those conditions parse.
    """
    archive, out_dir = Path(archive), Path(out_dir)
    if not out_dir.is_dir():
        raise OutputDirectoryMissing(f"output directory does not exist: {out_dir}")

    runs = zip_loader.load(archive)
    merged = merge_runs(runs)
    out_path = write_merged(merged, out_dir)
    _LOG.info("MERGED %d spectra from %s into %s", len(merged.runs), archive.name, out_path.name)
    return out_path
