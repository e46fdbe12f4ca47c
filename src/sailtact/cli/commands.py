"""Command handlers for the SailTact CLI."""

from __future__ import annotations

import argparse
import json
from typing import Any, Dict, List, Mapping

from ..core.vmg import mps_to_knots, predicted_alt_vmg, tack_for, true_wind_angle, vmg
from ..ingestion.wind import WindInput, parse_angle
from ..runtime.replay import ReplayResult, replay_track
from ..settings import AdvisorSettings, SettingsError
from .errors import CliError
from .io import load_track

__all__ = ["handle_replay", "handle_vmg", "resolve_settings"]


_SETTING_OVERRIDES = (
    "threshold_mps",
    "eval_interval_s",
    "preferred_turn_angle_deg",
    "bin_width_deg",
    "max_samples_per_bin",
    "twa_positive_starboard",
)


def resolve_settings(namespace: argparse.Namespace, config: Mapping[str, Any]) -> AdvisorSettings:
    """Merge ``[tool.sailtact.advisor]`` with command line overrides."""

    base = AdvisorSettings.from_config(config)
    overrides = {
        name: getattr(namespace, name)
        for name in _SETTING_OVERRIDES
        if getattr(namespace, name, None) is not None
    }
    try:
        return base.with_changes(**overrides)
    except SettingsError as exc:
        raise CliError(str(exc), category="usage", context=overrides) from exc


def _wind_input(namespace: argparse.Namespace) -> WindInput:
    if namespace.twd is not None:
        text, wind = namespace.twd, WindInput.direction(namespace.twd)
    else:
        text, wind = namespace.twa, WindInput.angle(namespace.twa)
    if parse_angle(text) is None:
        raise CliError(
            f"Wind angle {text!r} is not a number.",
            category="usage",
            context={"wind": text},
        )
    return wind


def _render(payload: Mapping[str, Any], lines: List[str], output_format: str) -> str:
    if output_format == "json":
        return json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False)
    return "\n".join(lines)


def handle_vmg(namespace: argparse.Namespace, *, config: Mapping[str, Any]) -> str:
    settings = resolve_settings(namespace, config)
    wind = _wind_input(namespace)
    if namespace.sog < 0:
        raise CliError("Speed over ground must not be negative.", category="usage")

    twd = wind.resolve_twd(
        namespace.heading,
        twa_positive_starboard=settings.twa_positive_starboard,
    )
    assert twd is not None  # the heading is always known here
    current = vmg(namespace.sog, namespace.heading, twd)
    alt_heading, alt_vmg = predicted_alt_vmg(namespace.sog, namespace.heading, twd)
    tack = tack_for(namespace.heading, twd)
    twa = true_wind_angle(namespace.heading, twd)

    payload: Dict[str, Any] = {
        "sog_mps": namespace.sog,
        "heading_deg": namespace.heading,
        "twd_deg": twd,
        "twa_deg": twa,
        "tack": tack.value,
        "vmg_mps": current,
        "mirrored_heading_deg": alt_heading,
        "mirrored_vmg_mps": alt_vmg,
    }
    lines = [
        f"TWD: {twd:.0f}°  TWA: {twa:.0f}° ({tack.value} tack)",
        f"VMG: {current:.2f} m/s ({mps_to_knots(current):.2f} kn)",
        f"Mirrored heading {alt_heading:.0f}°: VMG {alt_vmg:.2f} m/s",
    ]
    return _render(payload, lines, namespace.output_format)


def _replay_lines(result: ReplayResult) -> List[str]:
    lines: List[str] = []
    for recommendation in result.recommendations:
        lines.append(
            f"t={recommendation.emitted_at:.0f}s {recommendation.message}  "
            f"(VMG {recommendation.current_vmg:.2f} → {recommendation.predicted_vmg:.2f} m/s)"
        )
    lines.append(
        f"Fixes: {result.fixes} ({result.accepted_fixes} accepted), "
        f"samples learned: {result.recorded_samples}, evaluations: {result.evaluations}"
    )
    lines.append(
        f"Distance sailed: {result.distance_m:.0f} m over {result.duration_s:.0f} s"
    )
    if result.performance:
        lines.append("Learned speeds (TWA bin, tack: mean SOG m/s, samples):")
        for summary in result.performance.values():
            lines.append(
                f"  {summary.lower_twa_deg:5.1f}° {summary.tack.value:<9} "
                f"{summary.mean_sog_mps:5.2f} ({summary.count})"
            )
    return lines


def handle_replay(namespace: argparse.Namespace, *, config: Mapping[str, Any]) -> str:
    settings = resolve_settings(namespace, config)
    wind = _wind_input(namespace)
    fixes = load_track(namespace.track)
    result = replay_track(fixes, wind, settings)

    payload: Dict[str, Any] = {
        "recommendations": [item.as_dict() for item in result.recommendations],
        "fixes": result.fixes,
        "accepted_fixes": result.accepted_fixes,
        "recorded_samples": result.recorded_samples,
        "evaluations": result.evaluations,
        "distance_m": result.distance_m,
        "duration_s": result.duration_s,
        "performance": [
            {
                "bin_index": summary.bin_index,
                "tack": summary.tack.value,
                "lower_twa_deg": summary.lower_twa_deg,
                "count": summary.count,
                "mean_sog_mps": summary.mean_sog_mps,
            }
            for summary in result.performance.values()
        ],
    }
    return _render(payload, _replay_lines(result), namespace.output_format)
