import json
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from plex_indexer.__main__ import main

class TestCommandLine(unittest.TestCase):
    def setUp(self):
        self.test_dir = Path(tempfile.mkdtemp())
        self.lib = self.test_dir / "lib"
        (self.lib / "one").mkdir(parents=True)
        (self.lib / "two").mkdir()
        for rel in ["one/a.mp4", "one/b.mp4", "two/c.mp4", "two/notes.txt"]:
            (self.lib / rel).write_text(rel)
        self.dest = self.test_dir / "dest"
        self.logs = self.test_dir / "logs"

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_sym_link_season(self):
        tree_json = self.test_dir / "tree.json"
        code = main([
            "sym-link", str(self.lib),
            "-d", str(self.dest),
            "--season",
            "--log-dir", str(self.logs),
            "--json-out", str(tree_json),
        ])
        self.assertEqual(code, 0)

        link = self.dest / "Season 2 - two" / "S01E01 - c.mp4"
        self.assertTrue(link.is_symlink())
        self.assertEqual(os.readlink(link), os.path.abspath(self.lib / "two" / "c.mp4"))

        # Run log lists the qualifying files only
        logs = list(self.logs.glob("sym_link_*.log"))
        self.assertEqual(len(logs), 1)
        logged = logs[0].read_text(encoding="utf-8").splitlines()
        self.assertEqual(len(logged), 3)
        self.assertFalse(any(p.endswith("notes.txt") for p in logged))

        with open(tree_json, encoding="utf-8") as f:
            data = json.load(f)
        self.assertEqual(len(data["directories"]), 2)

    def test_sym_link_chapter_dry_run(self):
        code = main([
            "sym-link", str(self.lib), "-d", str(self.dest),
            "--dry-run", "--log-dir", str(self.logs),
        ])
        self.assertEqual(code, 0)
        self.assertFalse(self.dest.exists())
        self.assertFalse(self.logs.exists())

    def test_sym_link_from_tree_diagram(self):
        diagram = self.test_dir / "lib.txt"
        diagram.write_text(
            "lib\n├── one\n│   ├── a.mp4\n│   └── b.mp4\n└── two\n    └── c.mp4\n",
            encoding="utf-8"
        )
        code = main([
            "sym-link", str(diagram), "--input-format", "tree",
            "--base-dir", str(self.lib), "-d", str(self.dest), "--log-dir", str(self.logs),
        ])
        self.assertEqual(code, 0)
        self.assertEqual(
            os.readlink(self.dest / "one" / "b.mp4"),
            os.path.abspath(self.lib / "one" / "b.mp4")
        )

    def test_sym_link_from_path_list(self):
        path_list = self.test_dir / "paths.txt"
        lib = str(self.lib).replace(os.sep, "/")
        path_list.write_text(
            f"{lib}\n{lib}/one/a.mp4\n{lib}/two/c.mp4\n", encoding="utf-8"
        )
        code = main([
            "sym-link", str(path_list), "--input-format", "paths",
            "-d", str(self.dest), "--season", "--numbered-seasons",
            "--log-dir", str(self.logs),
        ])
        self.assertEqual(code, 0)
        self.assertTrue((self.dest / "Season 2 - two" / "S02E01 - c.mp4").is_symlink())

    def test_missing_source(self):
        code = main(["sym-link", str(self.test_dir / "missing"), "-d", str(self.dest)])
        self.assertEqual(code, 1)
        self.assertFalse(self.dest.exists())

    def test_unwritable_log_dir_still_links(self):
        blocker = self.test_dir / "blocker"
        blocker.write_text("not a directory")
        code = main([
            "sym-link", str(self.lib), "-d", str(self.dest),
            "--log-dir", str(blocker / "logs"),
        ])
        self.assertEqual(code, 0)
        self.assertTrue((self.dest / "two" / "c.mp4").is_symlink())

    def test_unwritable_json_and_report_still_link(self):
        missing = self.test_dir / "missing"
        code = main([
            "sym-link", str(self.lib), "-d", str(self.dest),
            "--log-dir", str(self.logs),
            "--json-out", str(missing / "tree.json"),
            "--report-out", str(missing / "report.json"),
        ])
        self.assertEqual(code, 0)
        self.assertTrue((self.dest / "one" / "a.mp4").is_symlink())
        self.assertFalse(missing.exists())

    def test_unwritable_output_file(self):
        missing = self.test_dir / "missing"
        self.assertEqual(main(["tree", str(self.lib), "-o", str(missing / "tree.txt")]), 1)

        diagram = self.test_dir / "lib.txt"
        diagram.write_text("lib\n└── a.mp4\n", encoding="utf-8")
        self.assertEqual(main(["parse", str(diagram), "-o", str(missing / "tree.json")]), 1)

    def test_tree_and_parse(self):
        diagram = self.test_dir / "tree.txt"
        self.assertEqual(main(["tree", str(self.lib), "-o", str(diagram)]), 0)

        text = diagram.read_text(encoding="utf-8")
        self.assertIn("a.mp4", text)
        self.assertIn("one", text)

        out = self.test_dir / "parsed.json"
        self.assertEqual(main(["parse", str(diagram), "-o", str(out)]), 0)
        with open(out, encoding="utf-8") as f:
            data = json.load(f)
        names = sorted(d["path"] for d in data["directories"])
        self.assertIn("one", names)
        self.assertIn("two", names)

    def test_parse_empty_diagram(self):
        diagram = self.test_dir / "empty.txt"
        diagram.write_text("", encoding="utf-8")
        self.assertEqual(main(["parse", str(diagram), "-o", str(self.test_dir / "out.json")]), 1)

if __name__ == "__main__":
    unittest.main()
