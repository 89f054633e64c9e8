import unittest

from fastapi.testclient import TestClient
from landmark_factory import FRAME_H, FRAME_W, side_on_frame, two_rep_series

from api.app import create_app


def _frames(depths, **extra):
    return [{"landmarks": side_on_frame(d, **extra), "width": FRAME_W, "height": FRAME_H} for d in depths]


class AnalyzeApiTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(create_app())

    def test_health(self) -> None:
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok"})

    def test_passing_session(self) -> None:
        response = self.client.post("/analyze", json={"frames": _frames(two_rep_series())})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["result"]["summary"], "PASS")
        self.assertEqual(body["result"]["pass"], 2)
        self.assertEqual(body["result"]["fail"], 0)
        self.assertAlmostEqual(body["result"]["depthRatioMax"], 0.9, places=6)
        self.assertEqual(body["framesProcessed"], 48)
        self.assertNotIn("diagnostics", body)

    def test_unsure_session_omits_depth_max(self) -> None:
        frames = _frames([0.9] * 60, visibility=0.05)
        response = self.client.post("/analyze", json={"frames": frames, "includeDiagnostics": True})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["result"]["summary"], "UNSURE")
        self.assertNotIn("depthRatioMax", body["result"])
        self.assertEqual(len(body["diagnostics"]), 60)
        self.assertEqual(body["diagnostics"][0]["reason"], "low-visibility")
        self.assertEqual(body["reasonCounts"]["low-visibility"], 60)

    def test_no_pose_frames_are_accepted(self) -> None:
        frames = [{"landmarks": None, "width": FRAME_W, "height": FRAME_H}] * 5
        response = self.client.post("/analyze", json={"frames": frames})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["reasonCounts"]["no-pose"], 5)

    def test_config_overrides_apply(self) -> None:
        payload = {"frames": _frames(two_rep_series()), "config": {"thHigh": 0.95}}
        body = self.client.post("/analyze", json=payload).json()
        self.assertEqual(body["result"]["summary"], "FAIL")
        self.assertEqual(body["result"]["threshold"], 0.95)

    def test_invalid_config_is_bad_request(self) -> None:
        payload = {"frames": _frames([0.5] * 5), "config": {"hysteresisRatio": 1.5}}
        response = self.client.post("/analyze", json=payload)
        self.assertEqual(response.status_code, 400)
        self.assertIn("Invalid config", response.json()["detail"])

    def test_missing_frame_size_is_unprocessable(self) -> None:
        response = self.client.post("/analyze", json={"frames": [{"landmarks": None}]})
        self.assertEqual(response.status_code, 422)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
