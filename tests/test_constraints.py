import unittest

from typegraph.constraints import apply_constraint, bind_params, resolve_argument
from typegraph.errors import Category, DiagnosticCollector, ErrorCode
from typegraph.nodes import ConstraintUsage, Named, Param, Scope, ValidatorDefinition
from typegraph.repository import Repository


def _apply(repo, target, usage, value):
    collector = DiagnosticCollector()
    apply_constraint(target, usage, value, "$", repo, collector, Scope.at_root(value))
    return collector.errors


class ResolveArgumentTests(unittest.TestCase):
    def test_single_call_arg_is_coerced(self):
        self.assertEqual(resolve_argument(ConstraintUsage("min", call_args=("3",))), 3)

    def test_several_call_args_become_a_list(self):
        usage = ConstraintUsage("between", call_args=("1", "'x'", "true"))
        self.assertEqual(resolve_argument(usage), [1, "x", True])

    def test_no_call_args_uses_raw_argument(self):
        self.assertEqual(resolve_argument(ConstraintUsage("min", argument="3")), "3")
        self.assertIsNone(resolve_argument(ConstraintUsage("unique")))


class BindParamsTests(unittest.TestCase):
    def setUp(self):
        self.validator = ValidatorDefinition(
            name="range",
            body="this >= $min and this <= $max",
            params=(Param("min", "0"), Param("max", "100")),
        )

    def test_positional_binding(self):
        usage = ConstraintUsage("range", call_args=("5", "9"))
        self.assertEqual(bind_params(self.validator, usage), {"min": 5, "max": 9})

    def test_defaults_fill_gaps(self):
        usage = ConstraintUsage("range", call_args=("5",))
        self.assertEqual(bind_params(self.validator, usage), {"min": 5, "max": 100})
        self.assertEqual(bind_params(self.validator, ConstraintUsage("range")), {"min": 0, "max": 100})

    def test_single_argument_binds_first_param(self):
        usage = ConstraintUsage("range", argument=7)
        self.assertEqual(bind_params(self.validator, usage), {"min": 7, "max": 100})

    def test_param_without_default_is_null(self):
        validator = ValidatorDefinition(name="v", body="this = $x", params=(Param("x"),))
        self.assertEqual(bind_params(validator, ConstraintUsage("v")), {"x": None})


class ApplyConstraintTests(unittest.TestCase):
    def setUp(self):
        self.repo = Repository(
            {"Small": Named("Int")},
            {"Int": {
                "range": ValidatorDefinition(
                    name="range",
                    body="this >= $min and this <= $max",
                    params=(Param("min", "0"), Param("max", "100")),
                ),
                "fancy": ValidatorDefinition(name="fancy", body="this is very fancy"),
            }},
        )

    def test_unknown_constraint(self):
        errors = _apply(self.repo, "Int", ConstraintUsage("unknownRule", argument=1), 10)
        self.assertEqual(len(errors), 1)
        self.assertEqual(errors[0].code, ErrorCode.UNKNOWN_CONSTRAINT)
        self.assertEqual(errors[0].category, Category.SEMANTIC)
        self.assertIn("Int.unknownRule", errors[0].message)

    def test_builtin_pass_and_fail(self):
        self.assertEqual(_apply(self.repo, "Int", ConstraintUsage("min", call_args=("3",)), 3), [])
        errors = _apply(self.repo, "Int", ConstraintUsage("min", call_args=("3",)), 2)
        self.assertEqual([e.code for e in errors], ["ConstraintViolation"])
        self.assertEqual(errors[0].category, "ValidationError")

    def test_builtin_not_applicable_is_silent(self):
        self.assertEqual(_apply(self.repo, "Int", ConstraintUsage("min", call_args=("3",)), "abc"), [])

    def test_custom_validator(self):
        usage = ConstraintUsage("range", call_args=("1", "5"))
        self.assertEqual(_apply(self.repo, "Int", usage, 3), [])
        errors = _apply(self.repo, "Int", usage, 9)
        self.assertEqual([e.code for e in errors], [ErrorCode.VALIDATOR_FAILED])
        self.assertEqual(errors[0].path, "$")

    def test_unrecognized_custom_body_passes(self):
        self.assertEqual(_apply(self.repo, "Int", ConstraintUsage("fancy"), 3), [])

    def test_alias_inherits_base_validators(self):
        self.assertEqual(_apply(self.repo, "Small", ConstraintUsage("max", argument=3), 2), [])
        errors = _apply(self.repo, "Small", ConstraintUsage("max", argument=3), 4)
        self.assertEqual([e.code for e in errors], [ErrorCode.CONSTRAINT_VIOLATION])
        self.assertIn("Small.max", errors[0].message)
