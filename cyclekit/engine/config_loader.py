"""Load, validate, and hot-reload the cycle engine configuration.

The config lives in ``cycle_config.yaml`` alongside this module.  It is
loaded once on first use and cached.  Call ``reload_engine_config()`` to
re-read from disk; no restart required.

Usage::

    from cyclekit.engine.config_loader import get_engine_config

    config = get_engine_config()
    config.fertile_window.days_before      # 5
    config.cycle_length.max_cycle_days     # 45
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger("cyclekit.engine.config")

# Path to the YAML file sitting next to this module
_CONFIG_PATH = Path(__file__).parent / "cycle_config.yaml"


# ---------------------------------------------------------------------------
# Typed config sections
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FertileWindowConfig:
    """Width of the fertile window around ovulation."""

    days_before: int = 5  # sperm viability
    days_after: int = 1   # ovum viability


@dataclass(frozen=True)
class OvulationConfig:
    """Derived ovulation = anchor + cycle_length // 2 - offset_from_midpoint."""

    offset_from_midpoint: int = 2


@dataclass(frozen=True)
class CycleLengthConfig:
    """Plausibility bounds for cycle lengths."""

    min_cycle_days: int = 21
    max_cycle_days: int = 45
    short_insight_days: int = 21
    long_insight_days: int = 35


@dataclass(frozen=True)
class PredictionConfig:
    """History size at which certainty stops being scaled down."""

    full_certainty_history: int = 3


@dataclass(frozen=True)
class InsightConfig:
    min_symptom_occurrences: int = 3


@dataclass(frozen=True)
class EngineConfig:
    """Complete, validated engine configuration.

    The single in-memory representation of cycle_config.yaml.  Every
    calculator reads its constants from this object.
    """

    version: str = "1.0"
    fertile_window: FertileWindowConfig = field(default_factory=FertileWindowConfig)
    ovulation: OvulationConfig = field(default_factory=OvulationConfig)
    cycle_length: CycleLengthConfig = field(default_factory=CycleLengthConfig)
    prediction: PredictionConfig = field(default_factory=PredictionConfig)
    insights: InsightConfig = field(default_factory=InsightConfig)
    _raw: dict = field(default_factory=dict, repr=False, compare=False)


# ---------------------------------------------------------------------------
# Loader / validation
# ---------------------------------------------------------------------------


class ConfigValidationError(ValueError):
    """Raised when cycle_config.yaml fails validation."""


def _load_yaml(path: Path) -> dict:
    """Read and parse a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigValidationError: If the YAML is malformed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Engine config not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        try:
            return yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"YAML parse error in {path}: {exc}") from exc


def _validate_and_build(raw: dict) -> EngineConfig:
    """Validate the raw YAML dict and construct an EngineConfig.

    Missing sections fall back to defaults.  All errors are collected and
    reported together.

    Raises:
        ConfigValidationError: If any value is non-numeric or out of range.
    """
    errors: list[str] = []

    def _int(section: dict, key: str, path: str, default: int, minimum: int) -> int:
        value = section.get(key, default)
        if isinstance(value, bool):
            errors.append(f"{path}.{key} must be an integer, got {value!r}")
            return default
        try:
            number = int(value)
        except (TypeError, ValueError):
            errors.append(f"{path}.{key} must be an integer, got {value!r}")
            return default
        if number < minimum:
            errors.append(f"{path}.{key} = {number} is below minimum {minimum}")
        return number

    def _section(key: str) -> dict:
        value = raw.get(key) or {}
        if not isinstance(value, dict):
            errors.append(f"'{key}' must be a mapping")
            return {}
        return value

    version = str(raw.get("version", "1.0"))

    # ── Fertile window ──
    fw_raw = _section("fertile_window")
    fertile_window = FertileWindowConfig(
        days_before=_int(fw_raw, "days_before", "fertile_window", 5, 0),
        days_after=_int(fw_raw, "days_after", "fertile_window", 1, 0),
    )

    # ── Ovulation ──
    ov_raw = _section("ovulation")
    ovulation = OvulationConfig(
        offset_from_midpoint=_int(ov_raw, "offset_from_midpoint", "ovulation", 2, 0),
    )

    # ── Cycle length ──
    cl_raw = _section("cycle_length")
    cycle_length = CycleLengthConfig(
        min_cycle_days=_int(cl_raw, "min_cycle_days", "cycle_length", 21, 1),
        max_cycle_days=_int(cl_raw, "max_cycle_days", "cycle_length", 45, 1),
        short_insight_days=_int(cl_raw, "short_insight_days", "cycle_length", 21, 1),
        long_insight_days=_int(cl_raw, "long_insight_days", "cycle_length", 35, 1),
    )
    if cycle_length.min_cycle_days > cycle_length.max_cycle_days:
        errors.append(
            f"cycle_length.min_cycle_days ({cycle_length.min_cycle_days}) exceeds "
            f"max_cycle_days ({cycle_length.max_cycle_days})"
        )

    # ── Prediction ──
    pr_raw = _section("prediction")
    prediction = PredictionConfig(
        full_certainty_history=_int(pr_raw, "full_certainty_history", "prediction", 3, 1),
    )

    # ── Insights ──
    in_raw = _section("insights")
    insights = InsightConfig(
        min_symptom_occurrences=_int(in_raw, "min_symptom_occurrences", "insights", 3, 1),
    )

    if errors:
        raise ConfigValidationError(
            f"cycle_config.yaml has {len(errors)} validation error(s):\n"
            + "\n".join(f"  • {e}" for e in errors)
        )

    return EngineConfig(
        version=version,
        fertile_window=fertile_window,
        ovulation=ovulation,
        cycle_length=cycle_length,
        prediction=prediction,
        insights=insights,
        _raw=raw,
    )


def load_engine_config(path: Path | None = None) -> EngineConfig:
    """Load and validate the engine config from disk.

    Args:
        path: Override path to YAML. Uses the bundled cycle_config.yaml by default.
    """
    target = path or _CONFIG_PATH
    raw = _load_yaml(target)
    if not isinstance(raw, dict):
        raise ConfigValidationError(f"{target} must contain a YAML mapping")
    config = _validate_and_build(raw)
    logger.info("Loaded engine config v%s from %s", config.version, target)
    return config


# ---------------------------------------------------------------------------
# Global singleton with hot-reload support
# ---------------------------------------------------------------------------

_config: EngineConfig | None = None
_config_lock = threading.Lock()


def get_engine_config() -> EngineConfig:
    """Return the global EngineConfig singleton, loading it on first call.

    Thread-safe.  Use ``reload_engine_config()`` to refresh after YAML changes.
    """
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:  # double-checked locking
                _config = load_engine_config()
    return _config


def reload_engine_config(path: Path | None = None) -> EngineConfig:
    """Reload the engine config from disk and replace the global singleton.

    If validation fails the old config is retained and the error re-raised.

    Raises:
        ConfigValidationError: If the new config is invalid.
        FileNotFoundError:     If the config file is missing.
    """
    global _config
    new_config = load_engine_config(path)  # validate before acquiring lock
    with _config_lock:
        old_version = _config.version if _config else "none"
        _config = new_config
    logger.info("Reloaded engine config: %s → %s", old_version, new_config.version)
    return new_config

