import json
import tempfile
import unittest
from pathlib import Path

from typegraph import loader
from typegraph.repository import Repository
from tests._util import tmp_json, tmp_text


class LoaderTests(unittest.TestCase):
    def test_load_schema_from_file(self):
        data = {"version": "0.14.2", "types": {"Root": "Int"}}
        path = tmp_json(data)
        try:
            self.assertEqual(loader.load_schema(path), data)
            self.assertEqual(loader.load_schema(str(path)), data)
        finally:
            path.unlink(missing_ok=True)

    def test_load_schema_from_package_resource(self):
        schema = loader.load_schema("example.json")
        self.assertEqual(schema["root"], "Post")
        self.assertEqual(loader.load_schema("some/dir/example.json"), schema)

    def test_load_schema_returns_fresh_copies(self):
        first = loader.load_schema("example.json")
        first["types"].clear()
        self.assertIn("Post", loader.load_schema("example.json")["types"])

    def test_load_schema_not_found(self):
        with self.assertRaises(FileNotFoundError):
            loader.load_schema("does_not_exist.json")

    def test_invalid_json_raises_value_error(self):
        p = tmp_text("{not json")
        try:
            with self.assertRaises(ValueError):
                loader.load_schema(p)
        finally:
            p.unlink(missing_ok=True)

    def test_empty_file_raises_value_error(self):
        with tempfile.NamedTemporaryFile("w+", delete=False) as tmp:
            p = Path(tmp.name)  # File is created but empty

        try:
            with self.assertRaises(ValueError):
                loader.load_schema(p)
        finally:
            p.unlink(missing_ok=True)

    def test_load_repository(self):
        repo = loader.load_repository("example.json")
        self.assertIsInstance(repo, Repository)
        self.assertEqual(repo.resolve_root_type(), "Post")
        self.assertIn("OddRangedInt", repo.type_names)
