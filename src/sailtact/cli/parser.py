"""Argument parsing helpers for the SailTact CLI."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Mapping, Optional

from .commands import handle_replay, handle_vmg


def _add_wind_arguments(parser: argparse.ArgumentParser) -> None:
    wind = parser.add_mutually_exclusive_group(required=True)
    wind.add_argument(
        "--twd",
        dest="twd",
        default=None,
        help="True wind direction in degrees (where the wind blows from).",
    )
    wind.add_argument(
        "--twa",
        dest="twa",
        default=None,
        help="True wind angle relative to the bow in degrees.",
    )
    parser.add_argument(
        "--twa-port",
        dest="twa_positive_starboard",
        action="store_false",
        default=None,
        help="Interpret positive TWA values as wind on the port side.",
    )


def _add_format_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=("text", "json"),
        default="text",
        help="Output format (default: text).",
    )


def build_parser(config: Optional[Mapping[str, Any]] = None) -> argparse.ArgumentParser:
    config = dict(config or {})
    logging_cfg = dict(config.get("logging", {}))

    parser = argparse.ArgumentParser(
        prog="sailtact",
        description="SailTact – tack and jibe advice from learned boat performance",
    )
    parser.add_argument(
        "--config",
        dest="config_path",
        type=Path,
        default=None,
        help="Path to the pyproject.toml holding a [tool.sailtact] section.",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=logging_cfg.get("level", "warning"),
        help="Logging level (e.g. debug, info, warning).",
    )
    parser.add_argument(
        "--log-output",
        dest="log_output",
        default=logging_cfg.get("output", "stderr"),
        help="Logging destination (stdout, stderr or a file path).",
    )
    parser.add_argument(
        "--log-format",
        dest="log_format",
        choices=("json", "text"),
        default=logging_cfg.get("format", "json"),
        help="Logging formatter (json or text).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    vmg_parser = subparsers.add_parser(
        "vmg",
        help="Compute VMG, tack and the mirrored-heading VMG for one reading.",
    )
    vmg_parser.add_argument("--sog", type=float, required=True, help="Speed over ground (m/s).")
    vmg_parser.add_argument("--heading", type=float, required=True, help="Heading in degrees.")
    _add_wind_arguments(vmg_parser)
    _add_format_argument(vmg_parser)
    vmg_parser.set_defaults(handler=handle_vmg)

    replay_parser = subparsers.add_parser(
        "replay",
        help="Replay a CSV track log through the advisor and list recommendations.",
    )
    replay_parser.add_argument("track", type=Path, help="Track log CSV file.")
    _add_wind_arguments(replay_parser)
    replay_parser.add_argument(
        "--threshold",
        dest="threshold_mps",
        type=float,
        default=None,
        help="Minimum predicted VMG gain in m/s (0-2).",
    )
    replay_parser.add_argument(
        "--interval",
        dest="eval_interval_s",
        type=float,
        default=None,
        help="Evaluation interval in seconds (10-120).",
    )
    replay_parser.add_argument(
        "--turn-angle",
        dest="preferred_turn_angle_deg",
        type=float,
        default=None,
        help="Heading change assumed for a tack or jibe (10-180).",
    )
    replay_parser.add_argument(
        "--bin-width",
        dest="bin_width_deg",
        type=float,
        default=None,
        help="True wind angle bin width in degrees (1-20).",
    )
    replay_parser.add_argument(
        "--max-samples",
        dest="max_samples_per_bin",
        type=int,
        default=None,
        help="Speed samples kept per bin (5-500).",
    )
    _add_format_argument(replay_parser)
    replay_parser.set_defaults(handler=handle_replay)

    return parser
