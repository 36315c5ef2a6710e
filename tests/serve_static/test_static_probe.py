import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from serve_static import ProbeResult, StaticFileReadError, probe
from serve_static.probe import guess_mime_type


class ProbeTests(unittest.TestCase):
    def setUp(self) -> None:
        temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(temp_dir.cleanup)
        self.root = Path(temp_dir.name)
        (self.root / "docs").mkdir()
        (self.root / "docs" / "page.html").write_text("<p>hi</p>", encoding="utf-8")
        (self.root / "notes").write_bytes(b"plain")

    def test_missing_path_is_not_found(self) -> None:
        info = probe(self.root / "missing.txt")

        self.assertIs(ProbeResult.NOT_FOUND, info.kind)
        self.assertFalse(info.exists)
        self.assertFalse(info.is_file)

    def test_child_of_a_file_is_not_found(self) -> None:
        info = probe(self.root / "notes" / "child.txt")
        self.assertIs(ProbeResult.NOT_FOUND, info.kind)

    def test_directory_exists_but_is_not_a_file(self) -> None:
        info = probe(self.root / "docs")

        self.assertIs(ProbeResult.DIRECTORY, info.kind)
        self.assertTrue(info.exists)
        self.assertFalse(info.is_file)
        self.assertIsNone(info.mime_type)

    def test_regular_file_reports_mime_type_and_content(self) -> None:
        info = probe(self.root / "docs" / "page.html")

        self.assertTrue(info.is_file)
        self.assertEqual("text/html", info.mime_type)
        self.assertEqual(b"<p>hi</p>", info.read_bytes())

    def test_file_without_extension_has_no_mime_type(self) -> None:
        info = probe(self.root / "notes")

        self.assertTrue(info.is_file)
        self.assertIsNone(info.mime_type)

    def test_symlink_loop_is_not_found(self) -> None:
        loop = self.root / "loop"
        loop.symlink_to(loop)

        self.assertIs(ProbeResult.NOT_FOUND, probe(loop).kind)

    def test_reading_a_directory_raises_read_error(self) -> None:
        with self.assertRaises(StaticFileReadError):
            probe(self.root / "docs").read_bytes()

    def test_permission_errors_are_raised_as_read_errors(self) -> None:
        target = self.root / "docs" / "page.html"
        with patch.object(Path, "stat", side_effect=PermissionError(13, "denied")):
            with self.assertRaises(StaticFileReadError) as ctx:
                probe(target)

        self.assertIsInstance(ctx.exception.__cause__, PermissionError)

    def test_guess_mime_type_handles_known_and_unknown_extensions(self) -> None:
        self.assertEqual("text/css", guess_mime_type(Path("styles.css")))
        self.assertIn("javascript", guess_mime_type(Path("app.js")) or "")
        self.assertIsNone(guess_mime_type(Path("blob.unknownbinaryextension")))


if __name__ == "__main__":
    unittest.main()
