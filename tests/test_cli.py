import json
import os
import sys
import tempfile
import unittest
from pathlib import Path

THIS_DIR = os.path.dirname(__file__)
if THIS_DIR not in sys.path:
    sys.path.insert(0, THIS_DIR)

from plan_fixtures import TWO_ROOM_JSON

from typer.testing import CliRunner

from wallsplitter.cli import app
from wallsplitter.engine.api import run
from wallsplitter.io.parser import parse_plan
from wallsplitter.visualization.generator import generate_network_image


class CliTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)
        self.plan = self.dir / "plan.json"
        self.plan.write_text(json.dumps(TWO_ROOM_JSON), encoding="utf-8")
        self.runner = CliRunner()

    def tearDown(self):
        self.tmp.cleanup()

    def test_split_writes_report_and_plan(self):
        out = self.dir / "report.csv"
        plan_out = self.dir / "split.json"

        result = self.runner.invoke(
            app, ["split", "--plan", str(self.plan), "--out", str(out), "--plan-out", str(plan_out)]
        )

        self.assertEqual(result.exit_code, 0, result.output)
        lines = out.read_text(encoding="utf-8").splitlines()
        self.assertEqual(len(lines), 9)
        self.assertIn("101,Kitchen,w_s.1,5.00,50.00,East Facing", lines)
        self.assertTrue(plan_out.exists())

    def test_split_with_fine_tolerance_exits_cleanly(self):
        plan = self.dir / "close.json"
        plan.write_text(
            json.dumps(
                {
                    "walls": {
                        "A": {"path": "M 0,0 L 10,0"},
                        "B": {"path": "M 5,-5 L 5,5"},
                        "C": {"path": "M 5.0005,-5 L 5.0005,5"},
                    },
                    "rooms": {},
                }
            ),
            encoding="utf-8",
        )

        result = self.runner.invoke(
            app,
            ["split", "--plan", str(plan), "--out", str(self.dir / "close.csv"), "--eps", "1e-4", "--min-length", "1e-4"],
        )

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue((self.dir / "close.csv").exists())

    def test_split_missing_plan(self):
        result = self.runner.invoke(app, ["split", "--plan", str(self.dir / "missing.json")])

        self.assertEqual(result.exit_code, 1)

    def test_info(self):
        result = self.runner.invoke(app, ["info", "--plan", str(self.plan)])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("w_mid", result.output)


class ImageTests(unittest.TestCase):
    def test_generate_network_image(self):
        network, rooms = parse_plan(TWO_ROOM_JSON)
        result = run(network, rooms)

        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "img" / "network.png"
            ok = generate_network_image(network, path, result.split.split_points)

            self.assertTrue(ok)
            self.assertTrue(path.exists())


if __name__ == "__main__":
    unittest.main()
