"""
Tests for AST output forms: canonical source, debug dump and dicts.
"""

import json
import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from structparse import parse, render, dump, to_dict
from structparse.parser import Struct, Field, Ident, Array


class TestRender(unittest.TestCase):
    """Canonical source rendering."""

    def test_render_empty(self):
        self.assertEqual(render(Struct("Empty")), "struct Empty {}\n")

    def test_render_fields(self):
        struct = Struct("Packet", [
            Field("kind", Ident("u8")),
            Field("payload", Array(Ident("u8"), 64)),
        ])
        self.assertEqual(
            render(struct),
            "struct Packet {\n"
            "    kind: u8,\n"
            "    payload: [u8; 64],\n"
            "}\n",
        )

    def test_round_trip(self):
        """Parsing rendered output reproduces the AST."""
        samples = [
            Struct("Empty"),
            Struct("One", [Field("a", Ident("u32"))]),
            Struct("Grid", [
                Field("cells", Array(Array(Ident("Cell"), 8), 8)),
                Field("_len", Ident("usize")),
                Field("zero", Array(Ident("u8"), 0)),
            ]),
            Struct("Big", [Field("x", Array(Ident("u8"), 2 ** 64 - 1))]),
        ]
        for struct in samples:
            with self.subTest(name=struct.name):
                self.assertEqual(parse(render(struct)), struct)

    def test_render_normalizes_formatting(self):
        source = "struct   Foo{a:[u8;4],//c\nb:u16,,}"
        self.assertEqual(render(parse(source)), "struct Foo {\n    a: [u8; 4],\n    b: u16,\n}\n")


class TestDump(unittest.TestCase):
    """Indented debug dump."""

    def test_dump_nested(self):
        struct = Struct("Foo", [Field("m", Array(Ident("u8"), 4))])
        self.assertEqual(
            dump(struct),
            "Struct {\n"
            "    name: 'Foo',\n"
            "    fields: [\n"
            "        Field {\n"
            "            name: 'm',\n"
            "            ty: Array {\n"
            "                ty: Ident('u8'),\n"
            "                len: 4,\n"
            "            },\n"
            "        },\n"
            "    ],\n"
            "}",
        )

    def test_dump_empty(self):
        self.assertEqual(dump(Struct("E")), "Struct {\n    name: 'E',\n    fields: [\n    ],\n}")


class TestToDict(unittest.TestCase):
    """JSON-ready conversion."""

    def test_to_dict(self):
        struct = parse("struct Foo { a: u8, m: [[u8; 4]; 3] }")
        self.assertEqual(
            to_dict(struct),
            {
                "name": "Foo",
                "fields": [
                    {"name": "a", "ty": {"ident": "u8"}},
                    {"name": "m", "ty": {"array": {
                        "ty": {"array": {"ty": {"ident": "u8"}, "len": 4}},
                        "len": 3,
                    }}},
                ],
            },
        )

    def test_to_dict_is_json_serializable(self):
        data = to_dict(parse("struct A { b: [c; 18446744073709551615] }"))
        self.assertEqual(json.loads(json.dumps(data)), data)


if __name__ == '__main__':
    unittest.main()
