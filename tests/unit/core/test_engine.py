"""
Test cases for the jsonmend recovery engine.

Tests focus on stage ordering and outcomes; the individual text stages are
covered in the preprocessing tests.
"""

import json
import sys
import unittest
from unittest.mock import patch

import jsonmend
from jsonmend.core.constants import BACKSLASH_PLACEHOLDER
from jsonmend.core.engine import parse, parse_outcome, try_direct, try_repaired
from jsonmend.core.outcome import FailureKind, ParseMethod
from jsonmend.preprocessing.escapes import restore_placeholders
from jsonmend.utils.config import ParseConfig


class TestDirectParsing(unittest.TestCase):
    """Valid JSON must come back untouched via the direct path."""

    def test_valid_object_matches_json_loads(self):
        """Test that valid input parses exactly like json.loads."""
        text = '{"a": 1, "b": [true, null, 2.5], "c": {"d": "e"}}'
        outcome = parse_outcome(text)

        self.assertTrue(outcome.ok)
        self.assertEqual(outcome.method, ParseMethod.DIRECT)
        self.assertEqual(outcome.value, json.loads(text))

    def test_valid_input_skips_repair(self):
        """Test that repair stages never run for valid input."""
        with patch("jsonmend.core.engine.try_repaired") as repaired:
            result = parse('{"a": "\\\\lambda"}')

        repaired.assert_not_called()
        self.assertEqual(result, {"a": "\\lambda"})

    def test_valid_escapes_are_decoded(self):
        """Test that legitimate JSON escapes keep their JSON meaning."""
        result = parse('{"path": "C:\\\\temp", "text": "one\\ntwo", "u": "\\u00e9"}')
        self.assertEqual(result, {"path": "C:\\temp", "text": "one\ntwo", "u": "\u00e9"})

    def test_key_order_preserved(self):
        """Test that object keys keep their declaration order."""
        result = parse('{"z": 1, "a": 2, "m": 3}')
        self.assertEqual(list(result), ["z", "a", "m"])

    def test_fenced_object(self):
        """Test fence stripping on a fenced completion."""
        outcome = parse_outcome('```json\n{"a":1}\n```')
        self.assertEqual(outcome.value, {"a": 1})
        self.assertEqual(outcome.method, ParseMethod.DIRECT)

    def test_prose_around_object(self):
        """Test extraction from surrounding commentary."""
        text = 'Sure! Here is the JSON:\n{"a": 1}\nLet me know if you need more.'
        self.assertEqual(parse(text), {"a": 1})


class TestRepairedParsing(unittest.TestCase):
    """Broken spans must be recovered through the repair stages."""

    def test_backslash_preservation(self):
        """Test that a LaTeX command keeps its single backslash."""
        outcome = parse_outcome(r'{"definition": "scaled by \lambda"}')

        self.assertEqual(outcome.method, ParseMethod.REPAIRED)
        self.assertEqual(outcome.value, {"definition": r"scaled by \lambda"})

    def test_commands_that_look_like_escapes(self):
        """Test that \\frac and \\theta are not read as form feed and tab."""
        text = r'{"formula": "$\frac{a}{b} + \theta + \lambda$"}'
        self.assertEqual(parse(text), {"formula": r"$\frac{a}{b} + \theta + \lambda$"})

    def test_escaped_quotes_survive_repair(self):
        """Test that escaped quotes stay quotes in the repaired value."""
        text = r'{"q": "She said \"hi\" to \alpha"}'
        self.assertEqual(parse(text), {"q": 'She said "hi" to \\alpha'})

    def test_truncation_repair(self):
        """Test that missing ']' and '}' are both synthesized."""
        outcome = parse_outcome('{"a":1,"b":[1,2,3')

        self.assertEqual(outcome.method, ParseMethod.REPAIRED)
        self.assertEqual(outcome.value, {"a": 1, "b": [1, 2, 3]})

    def test_truncated_inside_string(self):
        """Test that an open string is closed."""
        self.assertEqual(parse('{"title": "Quantum mech'), {"title": "Quantum mech"})

    def test_truncated_after_separator(self):
        """Test dangling comma and colon handling."""
        self.assertEqual(parse('{"a": [1, 2,'), {"a": [1, 2]})
        self.assertEqual(parse('{"a": 1, "b":'), {"a": 1, "b": None})

    def test_literal_newline_in_string(self):
        """Test that a raw newline inside a string keeps both lines."""
        self.assertEqual(parse('{"text": "line one\nline two"}'), {"text": "line one\nline two"})

    def test_literal_crlf_and_tab_in_string(self):
        """Test CRLF and tab normalization inside strings."""
        self.assertEqual(parse('{"text": "a\r\nb\tc"}'), {"text": "a\nb\tc"})

    def test_pretty_printed_with_latex(self):
        """Test that structural newlines survive alongside repaired strings."""
        text = '{\n  "a": "\\lambda x",\n  "b": 2\n}'
        self.assertEqual(parse(text), {"a": "\\lambda x", "b": 2})

    def test_key_order_preserved_after_repair(self):
        """Test that repaired objects keep their declaration order."""
        result = parse(r'{"z": "\x", "a": 2, "m": [3')
        self.assertEqual(list(result), ["z", "a", "m"])

    def test_restoration_runs_once(self):
        """Test that placeholders are restored exactly once per repaired parse."""
        with patch(
            "jsonmend.core.engine.restore_placeholders", wraps=restore_placeholders
        ) as restore:
            result = parse(r'{"a": "\beta", "b": ["\gamma"')

        self.assertEqual(restore.call_count, 1)
        self.assertEqual(result, {"a": r"\beta", "b": [r"\gamma"]})

    def test_restoration_not_run_on_direct_path(self):
        """Test that the direct path never restores placeholders."""
        with patch("jsonmend.core.engine.restore_placeholders") as restore:
            parse('{"a": 1}')
        restore.assert_not_called()


class TestFailures(unittest.TestCase):
    """Failures must be values, never exceptions."""

    def test_no_object(self):
        """Test the no-object case logs and returns None."""
        with self.assertLogs("jsonmend.core.engine", level="WARNING") as logs:
            result = parse("Sorry, I can't help with that.")

        self.assertIsNone(result)
        self.assertIn("No JSON object found", logs.output[0])

    def test_no_object_outcome(self):
        """Test the failure kind and diagnostic for text without an object."""
        outcome = parse_outcome("Sorry, I can't help with that.")

        self.assertFalse(outcome.ok)
        self.assertEqual(outcome.failure, FailureKind.NO_JSON_OBJECT)
        self.assertEqual(outcome.diagnostic, "Sorry, I can't help with that.")

    def test_empty_and_none_input(self):
        """Test that empty input is a clean failure."""
        self.assertIsNone(parse(""))
        self.assertIsNone(parse(None))
        self.assertEqual(parse_outcome("   ").failure, FailureKind.NO_JSON_OBJECT)

    def test_bytes_input(self):
        """Test that bytes are decoded as UTF-8."""
        self.assertEqual(parse('{"a": "\u00e9"}'.encode("utf-8")), {"a": "\u00e9"})
        self.assertEqual(parse(bytearray(b'{"a": 1}')), {"a": 1})

    def test_repair_failed(self):
        """Test that unrepairable text fails with a diagnostic."""
        with self.assertLogs("jsonmend.core.engine", level="WARNING"):
            outcome = parse_outcome('{"a" 1}')

        self.assertEqual(outcome.failure, FailureKind.REPAIR_FAILED)
        self.assertEqual(outcome.diagnostic, '{"a" 1}')
        self.assertIsNone(outcome.value)

    def test_diagnostic_is_bounded(self):
        """Test that the diagnostic keeps only both ends of the span."""
        text = '{"a" ' + "x" * 500 + " 1}"
        outcome = parse_outcome(text, ParseConfig(max_error_context=10))

        self.assertEqual(outcome.failure, FailureKind.REPAIR_FAILED)
        self.assertTrue(outcome.diagnostic.startswith(text[:10]))
        self.assertTrue(outcome.diagnostic.endswith(text[-10:]))
        self.assertLess(len(outcome.diagnostic), 40)

    def test_stray_closing_brace_in_trailing_prose(self):
        """Test the known greedy-span tolerance."""
        outcome = parse_outcome('Here {"a": 1} and then } oops')
        self.assertEqual(outcome.failure, FailureKind.REPAIR_FAILED)

    def test_input_size_limit(self):
        """Test that oversized input is rejected as a value."""
        outcome = parse_outcome('{"a": "' + "x" * 100 + '"}', ParseConfig(max_input_size=50))

        self.assertEqual(outcome.failure, FailureKind.LIMIT_EXCEEDED)
        self.assertIn("exceeds limit 50", outcome.diagnostic)

    def test_nesting_depth_limit(self):
        """Test that deeply nested input is rejected as a value."""
        outcome = parse_outcome('{"a": {"b": {"c": {"d": 1}}}}', ParseConfig(max_nesting_depth=3))
        self.assertEqual(outcome.failure, FailureKind.LIMIT_EXCEEDED)

    def test_placeholder_collision_refuses_repair(self):
        """Test that text already holding a placeholder is not repaired."""
        text = '{"a": "' + BACKSLASH_PLACEHOLDER + '", "b": [1'
        self.assertEqual(parse_outcome(text).failure, FailureKind.REPAIR_FAILED)

    def test_placeholder_in_valid_json_parses_directly(self):
        """Test that valid JSON holding a placeholder is returned as is."""
        text = json.dumps({"a": BACKSLASH_PLACEHOLDER})
        self.assertEqual(parse(text), {"a": BACKSLASH_PLACEHOLDER})

    @unittest.skipUnless(
        hasattr(sys, "get_int_max_str_digits"), "needs the int conversion digit limit"
    )
    def test_oversized_integer_is_a_failure(self):
        """Test that json's integer digit limit becomes a failed outcome."""
        digits = "1" * (sys.get_int_max_str_digits() + 100)

        self.assertEqual(
            parse_outcome('{"n": ' + digits + "}", ParseConfig(strict=True)).failure,
            FailureKind.INVALID_JSON,
        )
        self.assertEqual(
            parse_outcome('{"n": ' + digits + "}").failure, FailureKind.REPAIR_FAILED
        )
        self.assertEqual(
            parse_outcome('{"f": "\\lambda", "n": ' + digits).failure,
            FailureKind.REPAIR_FAILED,
        )

    def test_plain_value_error_from_decoder(self):
        """Test that ValueErrors other than JSONDecodeError are absorbed."""
        with patch("jsonmend.core.engine.json.loads", side_effect=ValueError("too long")):
            self.assertEqual(try_direct('{"a": 1}').failure, FailureKind.INVALID_JSON)
            self.assertEqual(try_repaired('{"a": 1}').failure, FailureKind.REPAIR_FAILED)

    def test_restoration_recursion_is_a_failure(self):
        """Test that a value too deep to restore is reported, not raised."""
        with patch(
            "jsonmend.core.engine.restore_placeholders", side_effect=RecursionError()
        ):
            with self.assertLogs("jsonmend.core.engine", level="WARNING"):
                outcome = parse_outcome(r'{"a": "\lambda"}')

        self.assertEqual(outcome.failure, FailureKind.REPAIR_FAILED)

    def test_deep_nesting_with_raised_limit_never_raises(self):
        """Test depths around the interpreter recursion limit with a lifted cap."""
        config = ParseConfig(max_nesting_depth=5000)
        for depth in range(900, 1001, 25):
            text = '{"a": ' + "[" * depth + '"\\lambda"' + "]" * depth + "}"
            with self.subTest(depth=depth):
                outcome = parse_outcome(text, config)
                self.assertIn(outcome.failure, (None, FailureKind.REPAIR_FAILED))

    def test_strict_mode_does_not_repair(self):
        """Test that the conservative preset only accepts valid JSON."""
        config = ParseConfig(strict=True)

        self.assertEqual(parse_outcome('{"a": [1', config).failure, FailureKind.INVALID_JSON)
        self.assertEqual(parse('```json\n{"a": 1}\n```', config), {"a": 1})


class TestStageFunctions(unittest.TestCase):
    """Test the two parse attempts on their own."""

    def test_try_direct(self):
        """Test that try_direct reports invalid JSON as a value."""
        self.assertEqual(try_direct('{"a": 1}').value, {"a": 1})
        outcome = try_direct('{"a": [1')
        self.assertEqual(outcome.failure, FailureKind.INVALID_JSON)

    def test_try_repaired(self):
        """Test that try_repaired marks its results as repaired."""
        outcome = try_repaired('{"a": [1')
        self.assertEqual(outcome.method, ParseMethod.REPAIRED)
        self.assertEqual(outcome.value, {"a": [1]})

    def test_or_else_chain(self):
        """Test the direct-then-repaired chain used by the engine."""
        span = r'{"a": "\lambda"}'
        outcome = try_direct(span).or_else(lambda: try_repaired(span))
        self.assertEqual(outcome.value, {"a": r"\lambda"})


class TestDeterminism(unittest.TestCase):
    """Test that repeated calls agree."""

    def test_repeated_calls_are_identical(self):
        """Test that every kind of input yields equal outcomes twice."""
        inputs = [
            '{"a": 1}',
            r'{"a": "\lambda", "b": [1, 2',
            "no json here",
            '{"a" 1}',
            '```json\n{"x": "y\nz"}\n```',
        ]
        for text in inputs:
            with self.subTest(text=text):
                self.assertEqual(parse_outcome(text), parse_outcome(text))

    def test_package_exports(self):
        """Test the top-level convenience exports."""
        self.assertIs(jsonmend.parse, parse)
        self.assertEqual(jsonmend.parse('{"a": 1}'), {"a": 1})


if __name__ == "__main__":
    unittest.main()
