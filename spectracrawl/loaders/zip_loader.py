# spectracrawl/loaders/zip_loader.py
from __future__ import annotations
from pathlib import Path
import zipfile, io, csv, math, logging
import pandas as pd

from ..core.model import SpectralRun
from ..core.conditions import split_tokens
from ..core.errors import (
    ArchiveUnreadable, MalformedDataset, NonNumericSpectralBound, InconsistentRunConditions,
)

_LOG = logging.getLogger(__name__)

DEFAULT_ARCHIVE_NAME = "SpectraPlotSimulations.zip"

# ---------- CSV parsing ----------
def _read_metadata_row(text: str, member: str) -> list[str]:
    first = text.splitlines()[0] if text else ""
    try:
        row = next(csv.reader([first]), [])
    except csv.Error as exc:
        raise MalformedDataset(f"{member}: unreadable metadata row") from exc
    if len(row) < 2:
        raise MalformedDataset(f"{member}: metadata row needs an id and a condition column")
    return row


def _df_from_csv_bytes(buff: bytes, member: str) -> tuple[list[str], pd.DataFrame]:
    """Metadata row plus the data rows, every cell kept as the original string."""
    try:
        text = buff.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedDataset(f"{member}: not UTF-8 text") from exc
    meta = _read_metadata_row(text, member)
    try:
        df = pd.read_csv(io.StringIO(text), sep=",", header=None, skiprows=1, dtype=str,
                         keep_default_na=False, skip_blank_lines=True)
    except pd.errors.EmptyDataError as exc:
        raise MalformedDataset(f"{member}: no data rows after the metadata row") from exc
    except pd.errors.ParserError as exc:
        raise MalformedDataset(f"{member}: {exc}") from exc
    if df.empty:
        raise MalformedDataset(f"{member}: no data rows after the metadata row")
    # short rows come back padded with NaN; empty fields stay ""
    short = df.isna().any(axis=1)
    if short.any():
        row = int(short.idxmax()) + 2
        raise MalformedDataset(f"{member}: line {row} has fewer fields than line 2")
    return meta, df


def _bound(cell: str, member: str, which: str) -> float:
    try:
        value = float(cell)
    except ValueError as exc:
        raise NonNumericSpectralBound(f"{member}: {which} spectral position {cell!r} is not a number") from exc
    if not math.isfinite(value):
        raise NonNumericSpectralBound(f"{member}: {which} spectral position {cell!r} is not finite")
    return value


def run_from_csv_bytes(buff: bytes, member: str) -> SpectralRun:
    meta, df = _df_from_csv_bytes(buff, member)
    return SpectralRun(
        name=member,
        df=df,
        n_rows=len(df) + 1,
        nu_min=_bound(df.iat[0, 0], member, "first"),
        nu_max=_bound(df.iat[-1, 0], member, "last"),
        conditions=split_tokens(meta[1]),
    )

# ---------- public loader ----------
def load(path: Path) -> list[SpectralRun]:
    """
    Accepts: a .zip whose members are spectra CSVs (metadata row + data rows).
    Returns: list[SpectralRun] in archive order, all sharing the first member's
    condition tokens.
    """
    runs: list[SpectralRun] = []
    reference: tuple[str, ...] | None = None
    try:
        zf = zipfile.ZipFile(path, "r")
    except (zipfile.BadZipFile, OSError) as exc:
        raise ArchiveUnreadable(f"cannot open archive {path}: {exc}") from exc

    with zf:
        for info in zf.infolist():
            if info.is_dir():
                continue
            try:
                raw = zf.read(info)
            except (zipfile.BadZipFile, OSError) as exc:
                raise ArchiveUnreadable(f"cannot read {info.filename} from {path.name}: {exc}") from exc
            run = run_from_csv_bytes(raw, info.filename)
            _LOG.debug("READ %s: %d rows, nu=[%s, %s]", run.name, run.n_rows, run.nu_min, run.nu_max)
            if reference is None:
                reference = run.conditions
            elif run.conditions != reference:
                raise InconsistentRunConditions(
                    f"gas absorption conditions differ: {info.filename} has "
                    f"{'/'.join(run.conditions)!r}, expected {'/'.join(reference)!r}"
                )
            runs.append(run)
    return runs
