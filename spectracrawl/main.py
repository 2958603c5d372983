# spectracrawl/main.py
from __future__ import annotations
from pathlib import Path
import logging
import sys

from spectracrawl.core.config import CrawlConfig, ConfigError, load_config, from_config
from spectracrawl.core.errors import SpectraError
from spectracrawl.core.intervals import partition, plan_batches
from spectracrawl.core.merge import merge_archive
from spectracrawl.utils.detect import discover_archives


def run(cfg: CrawlConfig) -> int:
    verbose = cfg.verbose

    # ---------- plan ----------
    intervals = partition(cfg.start_nu, cfg.end_nu, cfg.max_range)
    batches = plan_batches(intervals, cfg.max_plots)
    if verbose:
        print(f"[plan] nu=[{cfg.start_nu:.0f}-{cfg.end_nu:.0f}] for {cfg.conditions.gas_id}: "
              f"{len(intervals)} request(s) in {len(batches)} archive(s)")
        for i, batch in enumerate(batches, 1):
            spans = ", ".join(f"{lo:.0f}-{hi:.0f}" for lo, hi in batch)
            print(f"  [batch {i}] {spans}")

    # ---------- output ----------
    if not cfg.output_dir.is_dir():
        if not cfg.create_output:
            print(f"[ERR] output directory does not exist: {cfg.output_dir}")
            return 1
        if verbose:
            print(f"[cfg] creating output directory {cfg.output_dir}")
        cfg.output_dir.mkdir(parents=True, exist_ok=True)

    # ---------- discover ----------
    archives = discover_archives(cfg.input_path, recurse=cfg.recurse, name=cfg.archive_name)
    if not archives:
        print(f"[INFO] No spectra archives found under: {cfg.input_path}")
        return 0
    if verbose:
        print(f"[detector] found {len(archives)} archive(s)")

    # ---------- merge ----------
    for archive in archives:
        try:
            out_path = merge_archive(archive, cfg.output_dir)
        except SpectraError as e:
            print(f"[ERR] {archive.name}: {e}")
            return 1
        if verbose:
            print(f"[merge] {archive.name} -> {out_path.name}")
    return 0


def main(argv: list[str] | None = None) -> int:
    # ---------- config ----------
    argv = sys.argv[1:] if argv is None else argv
    here = Path(__file__).resolve().parent
    cfg_path = Path(argv[0]) if argv else here / "config.yaml"
    try:
        cfg = from_config(load_config(cfg_path), base_dir=Path.cwd())
    except (OSError, ConfigError) as e:
        print(f"[ERR] error in config {cfg_path}: {e}")
        return 1

    logging.basicConfig(level=getattr(logging, cfg.log_level, logging.INFO),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if cfg.verbose:
        print(f"[cfg] input={cfg.input_path} (recurse={cfg.recurse})")
        print(f"[cfg] output={cfg.output_dir}")
    return run(cfg)


if __name__ == "__main__":
    sys.exit(main())
