import unittest

from typegraph import utils
from typegraph.errors import Category, DiagnosticCollector, ErrorCode, ValidationError


class UtilsTests(unittest.TestCase):
    def test_json_kind(self):
        self.assertEqual(utils._json_kind(None), "null")
        self.assertEqual(utils._json_kind(True), "boolean")
        self.assertEqual(utils._json_kind(1), "number")
        self.assertEqual(utils._json_kind(1.5), "number")
        self.assertEqual(utils._json_kind("x"), "string")
        self.assertEqual(utils._json_kind([]), "array")
        self.assertEqual(utils._json_kind({}), "object")

    def test_stringify(self):
        self.assertEqual(utils._stringify(None), "")
        self.assertEqual(utils._stringify(False), "false")
        self.assertEqual(utils._stringify(3.0), "3")
        self.assertEqual(utils._stringify(2.5), "2.5")
        self.assertEqual(utils._stringify([1, "a"]), '[1,"a"]')

    def test_is_datetime_various_inputs(self):
        good = [
            "2025-08-03T12:00:00Z",
            "2023-01-02T03:04:05+00:00",
            "2024-12-31T23:59:59-05:00",
        ]
        bad = ["not-dt", "2025-13-01T00:00:00Z", 42, "2025-08-03T12:00:00"]  # Missing timezone

        for g in good:
            self.assertTrue(utils._is_datetime(g), g)

        for b in bad:
            self.assertFalse(utils._is_datetime(b), str(b))

    def test_is_date(self):
        self.assertTrue(utils._is_date("2024-02-29"))
        self.assertFalse(utils._is_date("2023-02-29"))
        self.assertFalse(utils._is_date("24-02-01"))


class ErrorModelTests(unittest.TestCase):
    def test_category_follows_code(self):
        table = {
            ErrorCode.INVALID_EXPRESSION: Category.PARSE,
            ErrorCode.UNKNOWN_TYPE: Category.TYPE,
            ErrorCode.TYPE_MISMATCH: Category.TYPE,
            ErrorCode.FIELD_MISSING: Category.VALIDATION,
            ErrorCode.FIELD_MUST_BE_ABSENT: Category.VALIDATION,
            ErrorCode.UNKNOWN_CONSTRAINT: Category.SEMANTIC,
            ErrorCode.CONSTRAINT_VIOLATION: Category.VALIDATION,
            ErrorCode.VALIDATOR_FAILED: Category.VALIDATION,
        }
        for code, category in table.items():
            self.assertEqual(ValidationError.of(code, "$", "m").category, category)

    def test_codes_compare_as_strings(self):
        err = ValidationError.of(ErrorCode.FIELD_MISSING, "$.a", "Missing required field.")
        self.assertEqual(err.code, "FieldMissing")
        self.assertEqual(err.category, "ValidationError")
        self.assertEqual(str(err), "$.a: Missing required field.")
        self.assertEqual(err.as_dict()["code"], "FieldMissing")

    def test_collector_preserves_order_and_duplicates(self):
        collector = DiagnosticCollector()
        self.assertEqual(len(collector), 0)
        collector.add(ErrorCode.TYPE_MISMATCH, "$", "x")
        collector.add(ErrorCode.TYPE_MISMATCH, "$", "x")
        self.assertEqual(len(collector), 2)
        self.assertEqual(collector.errors[0], collector.errors[1])
        self.assertEqual([e.path for e in collector], ["$", "$"])
