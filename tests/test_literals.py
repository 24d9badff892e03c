import unittest

from typegraph.literals import coerce, decode_string_literal


class CoerceTests(unittest.TestCase):
    def test_keywords(self):
        self.assertIs(coerce("true"), True)
        self.assertIs(coerce(" false "), False)
        self.assertIsNone(coerce("null"))

    def test_numbers(self):
        self.assertEqual(coerce("42"), 42)
        self.assertIsInstance(coerce("42"), int)
        self.assertEqual(coerce("-3"), -3)
        self.assertEqual(coerce("2.5"), 2.5)
        self.assertEqual(coerce("-0.25"), -0.25)

    def test_non_numbers_stay_text(self):
        # no exponent, no leading dot, no plus sign
        for raw in ("1e3", ".5", "+1", "1.", "0x10"):
            self.assertEqual(coerce(raw), raw, raw)

    def test_quoted_strings(self):
        self.assertEqual(coerce('"Rejected"'), "Rejected")
        self.assertEqual(coerce("'single'"), "single")
        self.assertEqual(coerce('"42"'), "42")
        self.assertEqual(coerce('""'), "")

    def test_escapes(self):
        self.assertEqual(coerce(r'"a\nb"'), "a\nb")
        self.assertEqual(coerce(r"'\t\r'"), "\t\r")
        self.assertEqual(coerce(r'"say \"hi\""'), 'say "hi"')
        self.assertEqual(coerce(r'"back\\slash"'), "back\\slash")
        self.assertEqual(coerce(r'"\q"'), "q")

    def test_mismatched_quotes_are_raw(self):
        self.assertEqual(coerce("'abc\""), "'abc\"")

    def test_other_text_is_trimmed(self):
        self.assertEqual(coerce("  hello world "), "hello world")

    def test_non_strings_pass_through(self):
        for value in (None, 3, 1.5, True, [1, "2"], {"a": 1}):
            self.assertEqual(coerce(value), value)
        self.assertIs(coerce(True), True)

    def test_decode_string_literal_strips_quotes(self):
        self.assertEqual(decode_string_literal("'x'"), "x")
