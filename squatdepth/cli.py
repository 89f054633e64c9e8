"""Command-line interface for replaying recorded landmark sessions.

Usage:
    squatdepth analyze session.jsonl [--width 1080 --height 1920] [--json]

The input is a JSONL replay file (see :mod:`squatdepth.vision.cache`). The
verdict is printed as a text block, or as JSON with ``--json``.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from squatdepth.config import DepthConfig, FrameSize
from squatdepth.report import format_report
from squatdepth.session import replay
from squatdepth.utils.logger import configure_logging
from squatdepth.vision.cache import PoseCacheError, load_pose_frames


def eprint(*args: object) -> None:
    print(*args, file=sys.stderr)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="squatdepth",
        description="Judge squat depth from recorded per-frame pose landmarks.",
    )
    sub = p.add_subparsers(dest="command", required=True)

    a = sub.add_parser("analyze", help="Replay a JSONL landmark file and print the verdict.")
    a.add_argument("input", help="Path to a JSONL replay file (one frame per line).")
    a.add_argument("--width", type=int, default=None,
                   help="Frame width in pixels; overrides per-frame values (requires --height).")
    a.add_argument("--height", type=int, default=None,
                   help="Frame height in pixels; overrides per-frame values (requires --width).")
    a.add_argument("--vis-th", dest="vis_th", type=float, default=None,
                   help="Minimum hip/knee visibility (default: 0.5)")
    a.add_argument("--th-high", dest="th_high", type=float, default=None,
                   help="Depth ratio a rep must reach to pass (default: 0.8)")
    a.add_argument("--hold", dest="hold_n", type=int, default=None,
                   help="Samples around a peak that must stay above the low threshold (default: 3)")
    a.add_argument("--side-px", dest="side_px", type=float, default=None,
                   help="Minimum side-on separation in pixels (default: 60)")
    a.add_argument("--min-gap", dest="min_gap", type=int, default=None,
                   help="Indices skipped after a counted rep (default: 12)")
    a.add_argument("--min-prom", dest="min_prominence", type=float, default=None,
                   help="Minimum peak prominence (default: 0.04)")
    a.add_argument("--count-low-peaks-as-fail", dest="count_low_peaks_as_fail",
                   action="store_true", default=None,
                   help="Count rejected peaks as FAIL reps (allows MIXED verdicts)")
    a.add_argument("--json", dest="as_json", action="store_true",
                   help="Emit the session report as JSON instead of text")
    a.add_argument("-v", "--verbose", action="store_true",
                   help="Log per-peak decisions to stderr")

    return p.parse_args(argv)


def validate_args(args: argparse.Namespace) -> None:
    if (args.width is None) != (args.height is None):
        raise ValueError("--width and --height must be given together.")
    if args.width is not None and (args.width <= 0 or args.height <= 0):
        raise ValueError("--width and --height must be positive integers.")
    if not Path(args.input).expanduser().exists():
        raise FileNotFoundError(f"Input file not found: {args.input}")


def build_config(args: argparse.Namespace) -> DepthConfig:
    return DepthConfig().with_overrides(
        vis_th=args.vis_th,
        th_high=args.th_high,
        hold_n=args.hold_n,
        side_px=args.side_px,
        min_gap=args.min_gap,
        min_prominence=args.min_prominence,
        count_low_peaks_as_fail=args.count_low_peaks_as_fail,
    )


def run(args: argparse.Namespace) -> int:
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)
    try:
        validate_args(args)
        config = build_config(args)
        size = FrameSize(args.width, args.height) if args.width is not None else None
        report = replay(load_pose_frames(Path(args.input).expanduser()), config, size=size)
    except (ValueError, FileNotFoundError, PoseCacheError) as ex:
        eprint(f"Error: {ex}")
        return 1

    if args.as_json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print(format_report(report))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    return run(args)


if __name__ == "__main__":
    raise SystemExit(main())
