"""
Tests for the structparse-dump command.
"""

import io
import json
import unittest
import sys
import os
import tempfile
from contextlib import redirect_stdout, redirect_stderr
from unittest import mock

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from structparse.cli import main


class TestDumpCommand(unittest.TestCase):
    """End-to-end runs of the CLI against files on disk."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def _write(self, text: str) -> str:
        path = os.path.join(self.tmpdir.name, "input.struct")
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return path

    def _run(self, *argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_debug_dump(self):
        path = self._write("struct Foo { a: u8 }")
        code, out, err = self._run(path)
        self.assertEqual(code, 0)
        self.assertIn("Struct {", out)
        self.assertIn("ty: Ident('u8'),", out)
        self.assertEqual(err, "")

    def test_source_format(self):
        path = self._write("struct Foo{a:[u8;2]}")
        code, out, _ = self._run("--format", "source", path)
        self.assertEqual(code, 0)
        self.assertEqual(out, "struct Foo {\n    a: [u8; 2],\n}\n")

    def test_json_format(self):
        path = self._write("struct Foo { a: u8 }")
        code, out, _ = self._run("-f", "json", path)
        self.assertEqual(code, 0)
        self.assertEqual(
            json.loads(out),
            {"name": "Foo", "fields": [{"name": "a", "ty": {"ident": "u8"}}]},
        )

    def test_parse_error(self):
        path = self._write("struct Foo { field: , }")
        code, out, err = self._run(path)
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("Parse error: ERROR[P001]", err)
        self.assertIn("input.struct:1:21", err)
        self.assertIn("struct Foo { field: , }\n" + " " * 20 + "^", err)

    def _run_stdin(self, data: bytes, *argv):
        with mock.patch("sys.stdin", io.TextIOWrapper(io.BytesIO(data))):
            return self._run(*argv)

    def test_reads_stdin_by_default(self):
        code, out, err = self._run_stdin(b"struct A { b: u8 }")
        self.assertEqual(code, 0)
        self.assertIn("name: 'A',", out)
        self.assertIn("ty: Ident('u8'),", out)
        self.assertEqual(err, "")

    def test_reads_stdin_from_dash(self):
        code, out, _ = self._run_stdin(b"struct A{b:[u8;3]}", "-f", "source", "-")
        self.assertEqual(code, 0)
        self.assertEqual(out, "struct A {\n    b: [u8; 3],\n}\n")

    def test_stdin_parse_error_names_stdin(self):
        code, out, err = self._run_stdin(b"struct A {")
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("<stdin>:1:11", err)

    def test_missing_file(self):
        code, _, err = self._run(os.path.join(self.tmpdir.name, "nope.struct"))
        self.assertEqual(code, 2)
        self.assertIn("cannot read", err)


if __name__ == '__main__':
    unittest.main()
