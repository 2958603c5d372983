# spectracrawl/core/config.py
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import logging
import yaml

from .model import ConditionSet
from .intervals import wavelength_to_wavenumber

_LOG = logging.getLogger(__name__)

MAX_WAVENUMBER = 47365.0
MAX_TEMPERATURE = 4e12
MIN_NU_STEP = 0.01


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class CrawlConfig:
    conditions: ConditionSet
    start_nu: float
    end_nu: float
    step_nu: float
    max_range: float          # widest single request, cm^-1
    max_plots: int            # requests per downloaded archive
    input_path: Path
    recurse: bool
    archive_name: str | None  # only archives with this file name
    output_dir: Path
    create_output: bool
    log_level: str
    verbose: bool


def load_config(cfg_path: Path) -> dict:
    with Path(cfg_path).open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _section(cfg: dict, name: str) -> dict:
    sec = (cfg or {}).get(name) or {}
    if not isinstance(sec, dict):
        raise ConfigError(f"'{name}' must be a mapping")
    return sec


def _num(sec: dict, key: str, where: str, default: float | None = None) -> float:
    raw = sec.get(key, default)
    if raw is None:
        raise ConfigError(f"missing {where}.{key}")
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{where}.{key} must be a number, got {raw!r}") from exc


def from_config(cfg: dict, base_dir: Path | None = None) -> CrawlConfig:
    """
    Build the immutable run configuration from a loaded config.yaml.

    Relative paths resolve against ``base_dir`` (defaults to the working dir).
    """
    base = Path(base_dir) if base_dir is not None else Path.cwd()
    hit = _section(cfg, "hitran")
    sp = _section(cfg, "spectraplot")
    inp = _section(cfg, "input")
    out = _section(cfg, "output")
    log = _section(cfg, "logging")

    gas_id = str(hit.get("gas_id") or "").strip()
    if not gas_id:
        raise ConfigError("hitran.gas_id is empty")

    start_nu = _num(hit, "start_nu", "hitran", 0.0)
    end_nu = _num(hit, "end_nu", "hitran", 0.0)
    if start_nu == 0 and end_nu == 0:
        lam_start = _num(hit, "start_lambda", "hitran", 0.0)
        lam_end = _num(hit, "end_lambda", "hitran", 0.0)
        if lam_start <= 0 or lam_end <= 0:
            raise ConfigError("set hitran.start_nu/end_nu or positive hitran.start_lambda/end_lambda")
        start_nu, end_nu = wavelength_to_wavenumber(lam_start), wavelength_to_wavenumber(lam_end)
    for v in (start_nu, end_nu):
        if v < 0 or v > MAX_WAVENUMBER:
            raise ConfigError(f"exceeded spectral range [0-{MAX_WAVENUMBER:g}]: start={start_nu}, end={end_nu}")

    step_nu = _num(hit, "step_nu", "hitran", 0.0)
    if step_nu < MIN_NU_STEP:
        _LOG.info("hitran.step_nu too low or not present, using %.2f", MIN_NU_STEP)
        step_nu = MIN_NU_STEP

    T, P, L = _num(hit, "T", "hitran"), _num(hit, "p", "hitran"), _num(hit, "L", "hitran")
    if T <= 0 or T > MAX_TEMPERATURE:
        raise ConfigError(f"hitran.T must be in (0, {MAX_TEMPERATURE:g}], got {T}")
    if P <= 0 or L <= 0:
        raise ConfigError(f"hitran.p and hitran.L must be positive, got p={P}, L={L}")

    ppm = _num(hit, "ppm", "hitran")
    if ppm <= 0 or ppm > 1e6:
        raise ConfigError(f"hitran.ppm must be in (0, 1e6], got {ppm}")

    max_range = _num(sp, "max_range", "spectraplot", 1000.0)
    if max_range <= 0:
        raise ConfigError(f"spectraplot.max_range must be positive, got {max_range}")
    max_plots = int(_num(sp, "max_number_of_plots", "spectraplot", 10))
    if max_plots < 1:
        raise ConfigError(f"spectraplot.max_number_of_plots must be at least 1, got {max_plots}")

    out_dir_raw = str(out.get("dir", "auto"))
    out_dir = Path("output") / gas_id if out_dir_raw == "auto" else Path(out_dir_raw)

    return CrawlConfig(
        conditions=ConditionSet(gas_id=gas_id, ppm=ppm, T=T, P=P, L=L),
        start_nu=start_nu,
        end_nu=end_nu,
        step_nu=step_nu,
        max_range=max_range,
        max_plots=max_plots,
        input_path=(base / str(inp.get("path", "."))).resolve(),
        recurse=bool(inp.get("recurse", True)),
        archive_name=str(inp["archive_name"]) if inp.get("archive_name") else None,
        output_dir=(base / out_dir).resolve(),
        create_output=bool(out.get("create", True)),
        log_level=str(log.get("level", "INFO")).upper(),
        verbose=bool(log.get("verbose", True)),
    )
