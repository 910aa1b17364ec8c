from __future__ import annotations

import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

import yaml

from dsci.cli import main


def _run(argv: list[str]) -> tuple[int, str, str]:
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        code = main(argv)
    return code, out.getvalue(), err.getvalue()


class DatasetCheckCommandTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.images = self.root / "images"
        self.labels = self.root / "labels"
        self.images.mkdir()
        self.labels.mkdir()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_clean_dataset_exits_zero(self) -> None:
        (self.images / "a.jpg").write_bytes(b"x")
        (self.labels / "a.txt").write_text("0 0.5 0.5 0.2 0.2\n", encoding="utf-8")

        code, out, _ = _run(["dataset", "check", str(self.images), str(self.labels)])

        self.assertEqual(code, 0)
        self.assertIn("Dataset OK: 1 images, 1 label files validated.", out)
        self.assertNotIn("::error::", out)

    def test_defects_exit_one_and_write_report(self) -> None:
        (self.images / "a.jpg").write_bytes(b"x")
        (self.images / "b.png").write_bytes(b"x")
        (self.labels / "a.txt").write_text("0 0.5 0.5 0.2 0.2\n", encoding="utf-8")
        report_path = self.root / "out" / "report.json"
        metrics_path = self.root / "out" / "dataset.prom"

        code, out, _ = _run(
            [
                "dataset",
                "check",
                str(self.images),
                str(self.labels),
                "--report",
                str(report_path),
                "--metrics-file",
                str(metrics_path),
            ]
        )

        self.assertEqual(code, 1)
        self.assertIn("::error::Missing label files:", out)
        self.assertIn("b.txt", out)
        payload = json.loads(report_path.read_text(encoding="utf-8"))
        self.assertEqual(payload["status"], "fail")
        self.assertEqual(payload["counts"]["images"], 2)
        self.assertEqual(payload["counts"]["labels"], 1)
        self.assertEqual(payload["counts"]["missing_label"], 1)
        self.assertIn("dsci_dataset_passed 0.0", metrics_path.read_text(encoding="utf-8"))

    def test_require_non_empty_positional_is_case_insensitive(self) -> None:
        (self.images / "a.jpg").write_bytes(b"x")
        (self.labels / "a.txt").write_text("", encoding="utf-8")

        strict, out, _ = _run(["dataset", "check", str(self.images), str(self.labels), "TRUE"])
        lenient, _, _ = _run(["dataset", "check", str(self.images), str(self.labels), "no"])

        self.assertEqual(strict, 1)
        self.assertIn("::error::Empty annotation files:", out)
        self.assertEqual(lenient, 0)

    def test_fatal_preconditions_exit_two(self) -> None:
        code, out, _ = _run(["dataset", "check", str(self.root / "missing"), str(self.labels)])
        self.assertEqual(code, 2)
        self.assertIn("::error::Image directory does not exist:", out)

        code, out, _ = _run(["dataset", "check", str(self.images), str(self.labels)])
        self.assertEqual(code, 2)
        self.assertIn("::error::No images found in", out)

    def test_repeated_runs_print_identical_reports(self) -> None:
        (self.images / "a.jpg").write_bytes(b"x")
        (self.labels / "a.txt").write_text("0 2 0.5 0.2 0.2\n1 0.5 0.5 0.2\n", encoding="utf-8")
        (self.labels / "orphan.txt").write_text("0 0.5 0.5 0.2 0.2\n", encoding="utf-8")
        argv = ["dataset", "check", str(self.images), str(self.labels)]

        first = _run(argv)
        second = _run(argv)

        self.assertEqual(first[0], 1)
        self.assertEqual(first[:2], second[:2])


class SmokeCommandTests(unittest.TestCase):
    def test_prepare_prints_manifest_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / "images").mkdir()
            (root / "images" / "a.jpg").write_bytes(b"x")
            data_yaml = root / "data.yaml"
            data_yaml.write_text(yaml.safe_dump({"train": "images"}), encoding="utf-8")

            code, out, err = _run(
                [
                    "smoke",
                    "prepare",
                    str(data_yaml),
                    "--max-images",
                    "2",
                    "--smoke-dir",
                    str(root / "smoke"),
                ]
            )

            self.assertEqual(code, 0)
            manifest_path = Path(out.strip())
            self.assertEqual(manifest_path.name, "data-smoke.yaml")
            self.assertTrue(manifest_path.exists())
            self.assertIn("::warning::Requested 2 images but found 1", err)

    def test_prepare_missing_manifest_exits_two(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            code, out, _ = _run(["smoke", "prepare", str(Path(tmpdir) / "data.yaml")])
            self.assertEqual(code, 2)
            self.assertIn("::error::Dataset YAML not found", out)

    def test_verify_requires_weights(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            project = Path(tmpdir)
            code, out, _ = _run(["smoke", "verify", "ghost", "--project-dir", str(project)])
            self.assertEqual(code, 2)
            self.assertIn("::error::Training did not produce run directory", out)


if __name__ == "__main__":
    unittest.main()
