# spectracrawl/core/model.py
from __future__ import annotations
from dataclasses import dataclass
from typing import NamedTuple
import pandas as pd


class Interval(NamedTuple):
    lo: float
    hi: float


@dataclass(frozen=True)
class ConditionSet:
    gas_id: str = ""
    ppm: float = 0.0          # concentration, parts per million
    T: float = 0.0            # K
    P: float = 0.0            # atm
    L: float = 0.0            # cm


@dataclass(frozen=True)
class SpectralRun:
    name: str                 # archive member name
    df: pd.DataFrame          # data rows only, all cells kept as the original strings
    n_rows: int               # including the metadata row
    nu_min: float
    nu_max: float
    conditions: tuple[str, ...]


@dataclass(frozen=True)
class MergedSpectrum:
    runs: tuple[SpectralRun, ...]   # sorted by nu_min
    nu_min: float
    nu_max: float
    tokens: tuple[str, ...]
    conditions: ConditionSet
