# spectracrawl/core/intervals.py
from __future__ import annotations
from typing import Sequence

from .model import Interval


def wavelength_to_wavenumber(lam_um: float) -> float:
    """micrometres -> cm^-1"""
    return 1e4 / lam_um


def wavenumber_to_wavelength(nu: float) -> float:
    return 1e4 / nu


def partition(start: float, end: float, max_span: float) -> list[Interval]:
    """
    Split ``[start, end]`` into contiguous chunks no wider than ``max_span``.

    Direction does not matter. Stepping stops once less than one unit is
    left, so a domain narrower than 1 yields no chunks.
    """
    if max_span <= 0:
        raise ValueError(f"max_span must be positive, got {max_span}")
    if start > end:
        start, end = end, start
    out: list[Interval] = []
    lo = start
    while lo < end - 1:
        out.append(Interval(lo, min(lo + max_span, end)))
        lo += max_span
    return out


def plan_batches(intervals: Sequence[Interval], max_per_batch: int) -> list[list[Interval]]:
    """Consecutive groups of at most ``max_per_batch`` intervals, one archive each."""
    if max_per_batch < 1:
        raise ValueError(f"max_per_batch must be at least 1, got {max_per_batch}")
    return [list(intervals[i:i + max_per_batch]) for i in range(0, len(intervals), max_per_batch)]
