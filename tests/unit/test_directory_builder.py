import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch
from plex_indexer.builders import build_from_directory
from plex_indexer.errors import InputError

class TestDirectoryBuilder(unittest.TestCase):
    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())
        self.root = self.test_dir / "lib"
        (self.root / "one").mkdir(parents=True)
        (self.root / "one" / "a.mp4").write_text("a")
        (self.root / "one" / "b.mp4").write_text("b")
        (self.root / "two" / "nested").mkdir(parents=True)
        (self.root / "two" / "c.mp4").write_text("c")
        (self.root / "two" / "nested" / "d.ts").write_text("d")
        (self.root / "notes.txt").write_text("notes")

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_builds_full_paths(self):
        node = build_from_directory(self.root)
        root = str(self.root).replace(os.sep, "/")

        self.assertEqual(node.label, root)
        self.assertEqual(list(node.files), [f"{root}/notes.txt"])

        children = {child.name: child for child in node.children}
        self.assertEqual(set(children), {"one", "two"})
        self.assertEqual(children["one"].label, f"{root}/one")
        self.assertEqual(
            sorted(children["one"].files),
            [f"{root}/one/a.mp4", f"{root}/one/b.mp4"]
        )
        nested = children["two"].children[0]
        self.assertEqual(list(nested.files), [f"{root}/two/nested/d.ts"])

    def test_flatten_matches_disk(self):
        node = build_from_directory(self.root)
        on_disk = set()
        for dirpath, _, filenames in os.walk(self.root):
            for filename in filenames:
                on_disk.add(os.path.join(dirpath, filename).replace(os.sep, "/"))
        self.assertEqual(set(node.iter_file_paths()), on_disk)

    def test_listing_order_is_kept(self):
        """Children follow the listing order, not a sort."""
        entries = [e for e in os.scandir(self.root) if e.is_dir()]
        expected = [e.path.replace(os.sep, "/") for e in entries]
        node = build_from_directory(self.root)
        self.assertEqual([child.label for child in node.children], expected)

    def test_trailing_separator_is_stripped(self):
        node = build_from_directory(str(self.root) + os.sep)
        self.assertEqual(node.label, str(self.root).replace(os.sep, "/"))

    def test_symlinked_directory_is_a_file(self):
        link = self.root / "loop"
        try:
            os.symlink(self.root, link, target_is_directory=True)
        except (OSError, NotImplementedError):
            self.skipTest("symlinks not supported")

        node = build_from_directory(self.root)
        self.assertIn(str(link).replace(os.sep, "/"), node.files)
        self.assertNotIn("loop", [child.name for child in node.children])

    def test_missing_source(self):
        with self.assertRaises(InputError):
            build_from_directory(self.test_dir / "missing")

    def test_source_is_a_file(self):
        with self.assertRaises(InputError):
            build_from_directory(self.root / "notes.txt")

    @patch("plex_indexer.builders.directory.os.scandir")
    def test_unreadable_directory_fails_whole_build(self, mock_scandir):
        mock_scandir.side_effect = PermissionError("denied")
        with self.assertRaises(InputError) as ctx:
            build_from_directory(self.root)
        self.assertIsInstance(ctx.exception.__cause__, PermissionError)

if __name__ == '__main__':
    unittest.main()
