import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from landmark_factory import FRAME_H, FRAME_W, side_on_frame, two_rep_series

from squatdepth import cli
from squatdepth.vision.cache import PoseFrame, save_pose_frames
from squatdepth.vision.landmarks import normalize_landmarks


def _write_session(path: Path, *, with_size: bool = True) -> Path:
    frames = [
        PoseFrame(
            frame_index=idx,
            timestamp=idx / 30,
            landmarks=normalize_landmarks(side_on_frame(depth)),
            width=FRAME_W if with_size else None,
            height=FRAME_H if with_size else None,
        )
        for idx, depth in enumerate(two_rep_series())
    ]
    return save_pose_frames(path, frames)


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp_dir = Path(tempfile.mkdtemp())

    def _run(self, argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = cli.main(argv)
        return code, out.getvalue(), err.getvalue()

    def test_analyze_prints_text_report(self) -> None:
        session = _write_session(self.tmp_dir / "squat.jsonl")
        code, out, _ = self._run(["analyze", str(session)])
        self.assertEqual(code, 0)
        self.assertIn("SUMMARY: PASS", out)
        self.assertIn("PASS: 2 | FAIL: 0", out)

    def test_analyze_json_output(self) -> None:
        session = _write_session(self.tmp_dir / "squat.jsonl")
        code, out, _ = self._run(["analyze", str(session), "--json"])
        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertEqual(payload["result"]["summary"], "PASS")
        self.assertEqual(payload["result"]["pass"], 2)
        self.assertEqual(payload["framesProcessed"], 48)

    def test_threshold_override_changes_verdict(self) -> None:
        session = _write_session(self.tmp_dir / "squat.jsonl")
        code, out, _ = self._run(["analyze", str(session), "--th-high", "0.95", "--json"])
        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertEqual(payload["result"]["summary"], "FAIL")
        self.assertEqual(payload["result"]["threshold"], 0.95)

    def test_missing_frame_size_needs_flags(self) -> None:
        session = _write_session(self.tmp_dir / "nosize.jsonl", with_size=False)
        code, _, err = self._run(["analyze", str(session)])
        self.assertEqual(code, 1)
        self.assertIn("frame size", err)

        code, out, _ = self._run(["analyze", str(session), "--width", "1000", "--height", "1000"])
        self.assertEqual(code, 0)
        self.assertIn("SUMMARY: PASS", out)

    def test_width_without_height_is_rejected(self) -> None:
        session = _write_session(self.tmp_dir / "squat.jsonl")
        code, _, err = self._run(["analyze", str(session), "--width", "1000"])
        self.assertEqual(code, 1)
        self.assertIn("--width and --height", err)

    def test_missing_input_file(self) -> None:
        code, _, err = self._run(["analyze", str(self.tmp_dir / "absent.jsonl")])
        self.assertEqual(code, 1)
        self.assertIn("not found", err)

    def test_nan_threshold_is_rejected(self) -> None:
        session = _write_session(self.tmp_dir / "squat.jsonl")
        code, out, err = self._run(["analyze", str(session), "--side-px", "nan"])
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("side_px must be a finite number", err)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
