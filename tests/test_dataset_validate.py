from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from dsci.dataset.report import render_report
from dsci.dataset.types import DefectKind
from dsci.dataset.validate import validate_dataset
from dsci.errors import MissingDirectoryError, NoImagesError

VALID_ROW = "0 0.5 0.5 0.2 0.2\n"


def _make_tree(root: Path) -> tuple[Path, Path]:
    images = root / "images"
    labels = root / "labels"
    images.mkdir(parents=True, exist_ok=True)
    labels.mkdir(parents=True, exist_ok=True)
    return images, labels


def _touch(path: Path, text: str | None = None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if text is None:
        path.write_bytes(b"img")
    else:
        path.write_text(text, encoding="utf-8")
    return path


class DatasetValidateTests(unittest.TestCase):
    def test_perfect_correspondence_passes(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            images, labels = _make_tree(Path(tmpdir))
            for name in ("a", "b", "sub/c"):
                _touch(images / f"{name}.jpg")
                _touch(labels / f"{name}.txt", VALID_ROW)

            report = validate_dataset(images, labels)

            self.assertTrue(report.passed)
            self.assertEqual(report.defects, [])
            self.assertEqual(report.image_count, 3)
            self.assertEqual(report.label_count, 3)

    def test_missing_label_scenario(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            images, labels = _make_tree(Path(tmpdir))
            _touch(images / "a.jpg")
            _touch(images / "b.png")
            _touch(labels / "a.txt", VALID_ROW)

            report = validate_dataset(images, labels)

            self.assertFalse(report.passed)
            self.assertEqual(report.image_count, 2)
            self.assertEqual(report.label_count, 1)
            self.assertEqual(len(report.defects), 1)
            defect = report.defects[0]
            self.assertEqual(defect.kind, DefectKind.MISSING_LABEL)
            self.assertEqual(defect.path, labels.resolve() / "b.txt")

    def test_empty_annotation_respects_flag(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            images, labels = _make_tree(Path(tmpdir))
            _touch(images / "a.jpg")
            _touch(labels / "a.txt", "\n   \n")

            strict = validate_dataset(images, labels, require_non_empty=True)
            lenient = validate_dataset(images, labels, require_non_empty=False)

            self.assertEqual([d.kind for d in strict.defects], [DefectKind.EMPTY_ANNOTATION])
            self.assertTrue(lenient.passed)

    def test_row_index_counts_non_blank_lines_only(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            images, labels = _make_tree(Path(tmpdir))
            _touch(images / "a.jpg")
            _touch(labels / "a.txt", "\n0 0.5 0.5 0.2 0.2\n\n-1 0.5 0.5 0.2 0.2\n")

            report = validate_dataset(images, labels)

            self.assertEqual(len(report.defects), 1)
            defect = report.defects[0]
            self.assertEqual(defect.kind, DefectKind.INVALID_ROW)
            self.assertEqual(defect.line, 2)
            self.assertIn(">= 0", defect.reason)

    def test_undecodable_label_does_not_stop_the_scan(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            images, labels = _make_tree(Path(tmpdir))
            for name in ("a", "b", "c"):
                _touch(images / f"{name}.jpg")
            (labels / "a.txt").write_bytes(b"\xff\xfe 0 0.5")
            _touch(labels / "c.txt", "0 1.5 0.5 0.2 0.2\n")

            report = validate_dataset(images, labels)

            root = labels.resolve()
            self.assertEqual(
                [(d.kind, d.path, d.line) for d in report.defects],
                [
                    (DefectKind.MISSING_LABEL, root / "b.txt", None),
                    (DefectKind.INVALID_ROW, root / "a.txt", 1),
                    (DefectKind.INVALID_ROW, root / "c.txt", 1),
                ],
            )
            self.assertEqual(report.defects[1].reason, "label file is not valid UTF-8 text")
            self.assertIn("[0, 1]", report.defects[2].reason)

    def test_directory_named_like_a_label_counts_as_missing(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            images, labels = _make_tree(Path(tmpdir))
            _touch(images / "a.jpg")
            _touch(images / "b.jpg")
            (labels / "a.txt").mkdir()

            report = validate_dataset(images, labels)

            root = labels.resolve()
            self.assertEqual(
                [(d.kind, d.path) for d in report.defects],
                [
                    (DefectKind.MISSING_LABEL, root / "a.txt"),
                    (DefectKind.MISSING_LABEL, root / "b.txt"),
                ],
            )
            self.assertEqual(report.label_count, 0)

    def test_orphan_label_is_not_reported_missing(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            images, labels = _make_tree(Path(tmpdir))
            _touch(images / "a.jpg")
            _touch(labels / "a.txt", VALID_ROW)
            _touch(labels / "ghost.txt", VALID_ROW)

            report = validate_dataset(images, labels)

            self.assertEqual([d.kind for d in report.defects], [DefectKind.ORPHAN_LABEL])
            self.assertEqual(report.defects[0].path, labels.resolve() / "ghost.txt")
            self.assertEqual(report.label_count, 2)

    def test_same_basename_in_different_subdirectories(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            images, labels = _make_tree(Path(tmpdir))
            _touch(images / "day" / "x.jpg")
            _touch(images / "night" / "x.jpg")
            _touch(labels / "day" / "x.txt", VALID_ROW)
            _touch(labels / "x.txt", VALID_ROW)

            report = validate_dataset(images, labels)
            kinds = sorted(d.kind.value for d in report.defects)

            self.assertEqual(kinds, ["missing_label", "orphan_label"])
            grouped = report.grouped()
            self.assertEqual(
                grouped[DefectKind.MISSING_LABEL][0].path,
                labels.resolve() / "night" / "x.txt",
            )
            self.assertEqual(grouped[DefectKind.ORPHAN_LABEL][0].path, labels.resolve() / "x.txt")

    def test_uppercase_extensions_and_non_images(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            images, labels = _make_tree(Path(tmpdir))
            _touch(images / "a.JPG")
            _touch(images / "notes.md", "ignore me")
            _touch(labels / "a.txt", VALID_ROW)

            report = validate_dataset(images, labels)

            self.assertTrue(report.passed)
            self.assertEqual(report.image_count, 1)

    def test_missing_directories_are_fatal(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            images, labels = _make_tree(root)
            with self.assertRaises(MissingDirectoryError):
                validate_dataset(root / "nope", labels)
            with self.assertRaises(MissingDirectoryError):
                validate_dataset(images, root / "nope")

    def test_zero_images_is_fatal(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            images, labels = _make_tree(Path(tmpdir))
            _touch(labels / "a.txt", VALID_ROW)
            with self.assertRaises(NoImagesError):
                validate_dataset(images, labels)

    def test_parallel_and_sequential_reports_match(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            images, labels = _make_tree(Path(tmpdir))
            for idx in range(30):
                _touch(images / f"img_{idx:02d}.jpg")
                if idx % 3 == 0:
                    continue
                text = VALID_ROW if idx % 3 == 1 else "0 1.5 0.5 0.2 0.2\n5 0.5 0.5 0 0.2\n"
                _touch(labels / f"img_{idx:02d}.txt", text)

            sequential = validate_dataset(images, labels, workers=1)
            parallel = validate_dataset(images, labels, workers=4)

            self.assertEqual(sequential.defects, parallel.defects)
            self.assertEqual(render_report(sequential), render_report(parallel))

    def test_repeated_runs_are_identical(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            images, labels = _make_tree(Path(tmpdir))
            _touch(images / "a.jpg")
            _touch(images / "b.jpg")
            _touch(labels / "b.txt", "0 0.5 0.5 0.2\n")
            _touch(labels / "c.txt", VALID_ROW)

            first = render_report(validate_dataset(images, labels))
            second = render_report(validate_dataset(images, labels))

            self.assertEqual(first, second)


if __name__ == "__main__":
    unittest.main()
