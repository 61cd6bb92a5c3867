"""
Metrics Tests

Function detection and per-function measurements.
"""

from codegen_gate import Parameter, extract
from codegen_gate.metrics import calculate_complexity, parse_parameters

from .conftest import BRANCHY_FUNCTION, GUARDED_FUNCTION, NESTED_FUNCTIONS, long_function


class TestDetection:
    """Which declarations become function records."""

    def test_function_declaration(self):
        """A plain exported function is measured from header to brace."""
        records = extract("export function add(a: number, b: number): number {\n  return a + b;\n}")
        assert len(records) == 1
        add = records[0]
        assert add.name == 'add'
        assert add.line_span == (1, 3)
        assert add.line_count == 3
        assert add.complexity == 1
        assert add.parameters == (Parameter('a', 'number'), Parameter('b', 'number'))
        assert add.return_type == 'number'

    def test_expression_arrow(self):
        """An expression-bodied arrow ends at its semicolon."""
        records = extract("const double = (x: number) => x * 2;")
        assert [r.name for r in records] == ['double']
        assert records[0].line_span == (1, 1)
        assert records[0].uses_magic_number is True

    def test_single_parameter_arrow(self):
        """Unparenthesized arrow parameters are recognized."""
        records = extract("const inc = n => n + 1;")
        assert records[0].parameters == (Parameter('n'),)
        assert records[0].uses_magic_number is False

    def test_class_method(self):
        """Methods at the start of a line are functions."""
        source = "class Greeter {\n  greet(name: string): string {\n    return name;\n  }\n}\n"
        records = extract(source)
        assert [(r.name, r.line_span) for r in records] == [('greet', (2, 4))]

    def test_calls_are_not_functions(self):
        """A call statement has no body and is skipped."""
        assert extract("run(a, b);\nsetup();\n") == []

    def test_nested_functions_counted_independently(self):
        """The outer span still includes the inner function's lines."""
        records = extract(NESTED_FUNCTIONS)
        assert [(r.name, r.line_span, r.line_count) for r in records] == [
            ('outer', (1, 6), 6),
            ('inner', (2, 4), 3),
        ]

    def test_functions_inside_strings_are_ignored(self):
        """Masked strings never produce records."""
        assert extract("const src = 'function fake() { return 1; }';") == []


class TestMeasurements:
    """Complexity, guards and flags."""

    def test_complexity_counts_branches(self):
        """if, for, while, && and || each add one."""
        records = extract(BRANCHY_FUNCTION)
        assert records[0].complexity == 6

    def test_complexity_ignores_strings(self):
        """Branch words inside strings are masked before counting."""
        records = extract("function quiet() {\n  return 'if && || while';\n}")
        assert records[0].complexity == 1

    def test_calculate_complexity_minimum(self):
        """Complexity is never below 1."""
        assert calculate_complexity('') == 1

    def test_early_validation_detected(self):
        """if + throw on the next line is a guard clause."""
        assert extract(GUARDED_FUNCTION)[0].has_early_validation is True

    def test_inline_guard(self):
        """if + return on one line is a guard clause."""
        records = extract("function pick(x: string) {\n  if (!x) return null;\n  return x;\n}")
        assert records[0].has_early_validation is True

    def test_no_early_validation(self):
        """Plain statements are not guards."""
        assert extract(long_function())[0].has_early_validation is False

    def test_uses_any_type(self):
        """An 'any' parameter or return marks the function."""
        records = extract("function f(data: any): string {\n  return '';\n}")
        assert records[0].uses_any_type is True

    def test_magic_number_ignores_constants(self):
        """UPPER_CASE constants do not count as magic numbers."""
        source = "function wait() {\n  const LIMIT_MS = 500;\n  return LIMIT_MS;\n}"
        assert extract(source)[0].uses_magic_number is False


class TestParameters:
    """Parameter list parsing."""

    def test_defaults_rest_and_optional(self):
        """'...', '?' and defaults are stripped from names."""
        params = parse_parameters("id?: string, retries = 3, ...rest: number[]")
        assert params == (
            Parameter('id', 'string'),
            Parameter('retries', ''),
            Parameter('rest', 'number[]'),
        )

    def test_function_typed_parameter(self):
        """Arrow types inside a parameter do not split it."""
        params = parse_parameters("cb: (err: Error, value: string) => void, opts: Options")
        assert [p.name for p in params] == ['cb', 'opts']
        assert params[0].type == '(err: Error, value: string) => void'


class TestMalformedInput:
    """Extraction never raises."""

    def test_empty_input(self):
        assert extract('') == []

    def test_unbalanced_input(self):
        """Unclosed parameter lists and stray braces yield nothing."""
        assert extract("function broken(a, b {") == []
        assert extract("}}}{{{") == []
