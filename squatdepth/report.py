"""Plain-text rendering of a session verdict."""

from __future__ import annotations

from squatdepth.session import SessionReport


def format_report(report: SessionReport) -> str:
    result = report.result
    depth_max = f"{result.depth_ratio_max:.2f}" if result.depth_ratio_max is not None else "-"
    reasons = ", ".join(f"{reason}={count}" for reason, count in report.reason_counts.items() if count)
    lines = [
        f"SUMMARY: {result.summary.value}",
        f"PASS: {result.passed} | FAIL: {result.failed}",
        f"TH: {result.threshold} | HOLD: {result.hold}",
        f"max depth_ratio: {depth_max}",
        f"frames: {report.frames_processed} ({reasons or 'none'})",
    ]
    return "\n".join(lines)
