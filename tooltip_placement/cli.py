#!/usr/bin/env python3
"""Replay a host viewport payload through the tooltip engine and print the result."""
from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from tooltip_placement.dismiss_classifier import (
    get_scroll_dismiss_threshold,
    is_touch_viewport_zoomed,
    should_preserve_on_passive_event,
)
from tooltip_placement.interaction_mode import InteractionMode
from tooltip_placement.logging_utils import LOG_DIR_ENV_VAR, configure_logging, resolve_logs_dir
from tooltip_placement.positioning import AnchorPoint, TooltipBox, layout_tooltip
from tooltip_placement.tooltip_config import TooltipSettings, apply_env_overrides, load_tooltip_settings
from tooltip_placement.viewport_metrics import (
    StaticViewportProvider,
    get_viewport_metrics,
    host_viewport_from_mapping,
)


class PayloadError(ValueError):
    """Raised when a replay payload cannot be interpreted."""


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compute tooltip placement or dismiss decisions from a JSON payload")
    parser.add_argument("command", choices=("layout", "dismiss"), help="Decision to compute")
    parser.add_argument("payload", help="Path to the JSON payload, or '-' to read stdin")
    parser.add_argument("--settings", type=Path, help="Optional tooltip settings JSON")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging on stderr")
    parser.add_argument(
        "--log-dir",
        type=Path,
        help=f"Also write a rotating log file here (defaults to the resolved log directory when {LOG_DIR_ENV_VAR} is set)",
    )
    return parser.parse_args(argv)


def _read_payload(source: str) -> Mapping[str, Any]:
    try:
        raw = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    except OSError as exc:
        raise PayloadError(f"cannot read payload: {exc}") from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise PayloadError(f"invalid JSON payload: {exc}") from exc
    if not isinstance(data, dict):
        raise PayloadError("payload must be a JSON object")
    return data


def _pair(payload: Mapping[str, Any], key: str, first: str, second: str) -> tuple[float, float]:
    block = payload.get(key)
    if not isinstance(block, dict):
        raise PayloadError(f"payload is missing '{key}'")
    try:
        return float(block[first]), float(block[second])
    except (KeyError, TypeError, ValueError) as exc:
        raise PayloadError(f"'{key}' needs numeric '{first}' and '{second}'") from exc


def run_layout(payload: Mapping[str, Any], settings: TooltipSettings) -> Dict[str, Any]:
    x, y = _pair(payload, "point", "x", "y")
    width, height = _pair(payload, "tooltip_rect", "width", "height")
    mode = InteractionMode.from_flag(payload.get("use_touch_interactions"))
    provider = StaticViewportProvider(host_viewport_from_mapping(payload))
    content_width = payload.get("tooltip_scroll_width")
    style = layout_tooltip(
        AnchorPoint(x, y),
        TooltipBox(width, height),
        provider,
        mode,
        content_width=float(content_width) if isinstance(content_width, (int, float)) else None,
        settings=settings,
    )
    return {"style": style.as_css(), "nowrap": style.nowrap, "scale": style.scale}


def run_dismiss(payload: Mapping[str, Any], settings: TooltipSettings) -> Dict[str, Any]:
    mode = InteractionMode.from_flag(payload.get("use_touch_interactions"))
    metrics = get_viewport_metrics(host_viewport_from_mapping(payload))
    return {
        "zoomed": is_touch_viewport_zoomed(metrics, mode, settings),
        "threshold": get_scroll_dismiss_threshold(metrics, mode, settings),
        "preserve": should_preserve_on_passive_event(
            bool(payload.get("card_scroll_event")),
            bool(payload.get("viewport_moved")),
            metrics,
            mode,
            settings,
        ),
    }


def main(argv: Optional[list[str]] = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    log_dir = args.log_dir.expanduser() if args.log_dir else None
    if log_dir is None and os.environ.get(LOG_DIR_ENV_VAR):
        log_dir = resolve_logs_dir()
    logger = configure_logging(debug_enabled=args.debug, log_dir=log_dir)
    settings = load_tooltip_settings(args.settings) if args.settings else TooltipSettings()
    settings = apply_env_overrides(settings)
    try:
        payload = _read_payload(args.payload)
        if args.command == "layout":
            result = run_layout(payload, settings)
        else:
            result = run_dismiss(payload, settings)
    except PayloadError as exc:
        logger.debug("Rejected payload from %s: %s", args.payload, exc)
        print(f"error: {exc}", file=sys.stderr)
        return 2
    logger.debug("Computed %s for %s: %s", args.command, args.payload, result)
    print(json.dumps(result, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
