"""Example showing how to replay a recorded track and collect maneuver advice."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from tempfile import NamedTemporaryFile

from sailtact import AdvisorSettings, WindInput, read_track_log, replay_track
from sailtact.logging import setup_logging
from sailtact.notifications import CollectingNotifier


def load_sample_track() -> str:
    """Return a path to a generated track log: a slow run followed by a broad reach."""

    rows = ["timestamp,latitude,longitude,sog_mps,cog_deg,heading_deg"]
    for second in range(0, 120):
        rows.append(f"{second},{43.5 - 0.00004 * second:.6f},7.000000,4.8,195,")
    for second in range(120, 240):
        rows.append(f"{second},{43.4952:.6f},{7.0 + 0.00005 * (second - 120):.6f},6.2,105,")
    with NamedTemporaryFile("w", delete=False, suffix=".csv") as handle:
        handle.write("\n".join(rows) + "\n")
        return handle.name


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(__doc__)
    parser.add_argument(
        "track_path",
        nargs="?",
        help="Path to the track CSV file (defaults to generated sample data).",
    )
    parser.add_argument("--twd", default="10", help="True wind direction in degrees.")
    parser.add_argument(
        "--emit-json",
        metavar="PATH",
        dest="emit_json",
        help="Write the recommendations to PATH as a JSON file.",
    )
    return parser


def main(args: argparse.Namespace | None = None) -> None:
    if args is None:
        args = _build_parser().parse_args()

    setup_logging({"logging": {"level": "warning", "format": "text"}})
    track_path = args.track_path or load_sample_track()
    fixes = read_track_log(track_path)
    notifier = CollectingNotifier(on_message=print)
    result = replay_track(
        fixes,
        WindInput.direction(args.twd),
        AdvisorSettings(eval_interval_s=15.0),
        notifier=notifier,
    )

    print(
        f"{len(result.recommendations)} recommendations over {result.duration_s:.0f} s, "
        f"{result.distance_m:.0f} m sailed"
    )
    for summary in result.performance.values():
        print(f"TWA {summary.lower_twa_deg:5.1f}° {summary.tack.value:<9} {summary.mean_sog_mps:.2f} m/s")

    if args.emit_json:
        payload = [item.as_dict() for item in result.recommendations]
        Path(args.emit_json).write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf8")


if __name__ == "__main__":
    main()
