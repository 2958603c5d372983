# spectracrawl/core/conditions.py
from __future__ import annotations
import math
from typing import Sequence

from .model import ConditionSet
from .numfmt import pretty
from .errors import MalformedConditionToken, UnknownConditionKey, NonNumericConditionValue

# key -> (ConditionSet field, unit suffix)
_KEYS: dict[str, tuple[str, str]] = {
    "x": ("ppm", ""),
    "T": ("T", "K"),
    "P": ("P", "atm"),
    "L": ("L", "cm"),
}

TOKEN_SEP = "/"
NAME_SEP = ","


def serialize(c: ConditionSet) -> list[str]:
    return [
        c.gas_id,
        f"x={pretty(c.ppm * 1e-6)}",
        f"T={pretty(c.T)}K",
        f"P={pretty(c.P)}atm",
        f"L={pretty(c.L)}cm",
    ]


def split_tokens(cell: str) -> tuple[str, ...]:
    return tuple(str(cell).split(TOKEN_SEP))


def _to_float(key: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError as exc:
        raise NonNumericConditionValue(f"value for {key!r} is not a number: {raw!r}") from exc


def parse(tokens: Sequence[str]) -> ConditionSet:
    """
    Typed conditions from tokens like ``["CH4", "x=1e-06", "T=300K", ...]``.

    A token without ``=`` is the gas id. ``x`` is a mole fraction and is
    stored in ppm.
    """
    fields: dict[str, object] = {}
    for tok in tokens:
        parts = tok.split("=")
        if len(parts) > 2:
            raise MalformedConditionToken(f"expected a single key=value pair, got {tok!r}")
        if len(parts) == 1:
            fields["gas_id"] = parts[0]
            continue
        key, raw = parts
        if key not in _KEYS:
            raise UnknownConditionKey(f"unknown condition key {key!r} in {tok!r}")
        name, unit = _KEYS[key]
        value = _to_float(key, raw.replace(unit, "") if unit else raw)
        fields[name] = value * 1e6 if key == "x" else value
    return ConditionSet(**fields)


def header_row(tokens: Sequence[str]) -> list[str]:
    return ["nu", TOKEN_SEP.join(tokens)]


def output_filename(c: ConditionSet, nu_min: float, nu_max: float) -> str:
    bounds = f"nu={math.floor(nu_min)}-{math.floor(nu_max)}"
    return NAME_SEP.join([bounds, *serialize(c)]) + ".csv"
