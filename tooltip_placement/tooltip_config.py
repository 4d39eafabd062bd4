"""Configuration helpers for tooltip placement tunables."""
from __future__ import annotations

import json
import logging
import math
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

_LOGGER = logging.getLogger("TooltipPlacement")

ENV_PREFIX = "TOOLTIP_PLACEMENT_"


@dataclass(frozen=True)
class TooltipSettings:
    """Tunables for placement, touch scaling and dismiss thresholds."""

    gap_px: float = 12.0
    inset_px: float = 12.0
    max_height_ratio: float = 0.7
    max_effective_zoom: float = 1.2
    min_scale: float = 0.5
    zoomed_scale_min: float = 1.05
    tap_max_scroll_px: float = 2.0
    dismiss_max_scroll_px: float = 12.0
    viewport_move_tolerance_px: float = 1.0

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "TooltipSettings":
        """Create an instance from a settings mapping, ignoring unusable values."""
        defaults = cls()
        values: Dict[str, float] = {}
        for item in fields(cls):
            fallback = getattr(defaults, item.name)
            values[item.name] = _coerce_setting(item.name, payload.get(item.name), fallback)
        return cls(**values)


# (minimum, maximum) accepted for each tunable; out-of-range values are coerced.
_BOUNDS: Dict[str, tuple[float, Optional[float]]] = {
    "gap_px": (0.0, None),
    "inset_px": (0.0, None),
    "max_height_ratio": (0.05, 1.0),
    "max_effective_zoom": (1.0, None),
    "min_scale": (0.05, 1.0),
    "zoomed_scale_min": (1.0, None),
    "tap_max_scroll_px": (0.0, None),
    "dismiss_max_scroll_px": (0.0, None),
    "viewport_move_tolerance_px": (0.0, None),
}


def _coerce_setting(name: str, value: Any, fallback: float) -> float:
    if value is None or isinstance(value, bool):
        return fallback
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(numeric):
        return fallback
    lower, upper = _BOUNDS.get(name, (0.0, None))
    if numeric < lower:
        return lower
    if upper is not None and numeric > upper:
        return upper
    return numeric


def load_tooltip_settings(settings_path: Path) -> TooltipSettings:
    """Read tooltip tunables from a JSON file if it exists."""
    defaults = TooltipSettings()
    try:
        raw = settings_path.read_text(encoding="utf-8")
    except (FileNotFoundError, OSError):
        return defaults

    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        _LOGGER.debug("Ignoring malformed tooltip settings file %s", settings_path)
        return defaults
    if not isinstance(data, dict):
        return defaults
    section = data.get("tooltip")
    if isinstance(section, dict):
        data = section
    return TooltipSettings.from_payload(data)


def apply_env_overrides(
    settings: TooltipSettings,
    environ: Optional[Mapping[str, str]] = None,
) -> TooltipSettings:
    """Apply TOOLTIP_PLACEMENT_<FIELD> environment values on top of settings."""
    env = os.environ if environ is None else environ
    updates: Dict[str, float] = {}
    for item in fields(settings):
        key = ENV_PREFIX + item.name.upper()
        raw = env.get(key)
        if raw is None or not raw.strip():
            continue
        current = getattr(settings, item.name)
        coerced = _coerce_setting(item.name, raw.strip(), current)
        if coerced != current:
            updates[item.name] = coerced
    if not updates:
        return settings
    _LOGGER.debug(
        "Applied tooltip env overrides: %s",
        ", ".join(f"{name}={value}" for name, value in sorted(updates.items())),
    )
    return replace(settings, **updates)


DEFAULT_SETTINGS = TooltipSettings()
