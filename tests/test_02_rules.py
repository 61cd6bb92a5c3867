"""
Rule Tests

One group per rule family, plus table ordering.
"""

import pytest

from codegen_gate import RULES, Category, GateConfig, Severity, analyze, evaluate, extract

from .conftest import CLEAN_SOURCE, long_function, numbered_constants, rule_ids


def violations_for(text: str, rule_id: str, config: GateConfig = GateConfig()):
    return [v for v in analyze(text, config).violations if v.rule_id == rule_id]


class TestRuleTable:
    """The rule table itself."""

    def test_table_order(self):
        """Rules are evaluated in a fixed order."""
        assert [r.rule_id for r in RULES] == [
            'any-type', 'ts-ignore', 'eslint-disable', 'console-log',
            'max-lines-per-function', 'complexity', 'max-lines', 'max-lines-warning',
            'max-params', 'jsdoc', 'duplicate-import', 'duplication',
            'early-validation', 'result-property-access', 'type-assignment', 'null-safety',
        ]

    def test_violations_ordered_by_rule_then_line(self):
        """A later line of an earlier rule still comes first."""
        ids = rule_ids("console.log(1);\nlet a: any;\n")
        assert ids == ['any-type', 'console-log']

    def test_lint_marker_category_value(self):
        """Suppressed lint markers report under the plain 'eslint' identifier."""
        assert Category.ESLINT.value == 'eslint'
        assert Category('eslint') is Category.ESLINT

    def test_clean_source_has_no_violations(self):
        assert rule_ids(CLEAN_SOURCE) == []

    def test_evaluate_is_deterministic(self):
        """Same input, same ordered list."""
        text = long_function() + "let a: any;\nconsole.log(a);\n"
        functions = extract(text)
        assert evaluate(text, functions) == evaluate(text, functions)


class TestDisallowedConstructs:
    """any, @ts-ignore, eslint-disable and console calls."""

    def test_any_annotations(self):
        """Each annotation is one error."""
        found = violations_for("let a: any;\nlet b: any[];\nconst c = d as any;\n", 'any-type')
        assert [v.line for v in found] == [1, 2, 3]
        assert all(v.category == Category.TYPESCRIPT and v.severity == Severity.ERROR for v in found)

    def test_any_in_comments_and_strings_ignored(self):
        """Only code counts."""
        assert violations_for("// value: any\nconst s = ': any';\n", 'any-type') == []

    def test_ts_suppressions(self):
        """@ts-ignore and @ts-nocheck are both reported."""
        found = violations_for("// @ts-ignore\nconst a = 1;\n// @ts-nocheck\n", 'ts-ignore')
        assert [v.line for v in found] == [1, 3]

    def test_eslint_disable(self):
        """Block and line disables are reported under eslint."""
        found = violations_for("/* eslint-disable */\n// eslint-disable-next-line no-console\n", 'eslint-disable')
        assert len(found) == 2
        assert found[0].category == Category.ESLINT

    def test_console_calls(self):
        """console.log is an error by default; comments and warn are ignored."""
        text = "console.log('x');\n// console.log('y');\nconsole.warn('z');\nconst s = 'console.info(1)';\n"
        found = violations_for(text, 'console-log')
        assert [v.line for v in found] == [1]

    def test_console_severity_configurable(self):
        """logging_severity='warning' keeps the report valid."""
        config = GateConfig(logging_severity='warning')
        report = analyze("console.debug('x');\n", config)
        assert report.violations[0].severity == Severity.WARNING
        assert report.valid is True


class TestSize:
    """Function length, complexity and file length."""

    def test_long_function(self):
        """20 non-blank lines exceed the 15 line limit."""
        found = violations_for(long_function(body_lines=18), 'max-lines-per-function')
        assert len(found) == 1
        assert found[0].category == Category.COMPLEXITY
        assert found[0].line == 1

    def test_complex_function(self):
        """Ten '&&' give complexity 11."""
        text = ("function gate(a, b, c, d) {\n"
                "  return a && b && c && d && a && b && c && d && a && b && c;\n"
                "}\n")
        found = violations_for(text, 'complexity')
        assert len(found) == 1
        assert 'complexity 11' in found[0].message

    def test_file_too_large(self):
        """More than 300 non-blank lines is a hard error."""
        assert rule_ids(numbered_constants(301)) == ['max-lines']

    def test_file_approaching_limit(self):
        """Between the soft and hard limit is a warning."""
        assert rule_ids(numbered_constants(260)) == ['max-lines-warning']

    def test_file_at_soft_limit(self):
        """Exactly 250 lines is fine."""
        assert rule_ids(numbered_constants(250)) == []


class TestStructure:
    """Parameters, docs, imports, duplication and guards."""

    def test_too_many_parameters(self):
        text = "function many(a: number, b: number, c: number, d: number, e: number) {\n  return a;\n}\n"
        found = violations_for(text, 'max-params')
        assert len(found) == 1
        assert '(5, max: 4)' in found[0].message

    def test_exported_function_needs_doc(self):
        """The declaration line is reported."""
        found = violations_for("export function load() {\n  return 1;\n}\n", 'jsdoc')
        assert [v.line for v in found] == [1]

    @pytest.mark.parametrize('header, name', [
        ("export async function loadUser(id: string) {", 'loadUser'),
        ("export function* walk(node: Node) {", 'walk'),
        ("export default function render() {", 'render'),
    ])
    def test_exported_function_forms(self, header, name):
        """The name is read past async, generator and default markers."""
        found = violations_for(header + "\n  return 1;\n}\n", 'jsdoc')
        assert [v.message for v in found] == [f"Exported function '{name}' lacks JSDoc documentation"]
        assert found[0].severity == Severity.ERROR

    def test_documented_export(self):
        text = "/**\n * Load.\n */\nexport function load() {\n  return 1;\n}\n"
        assert violations_for(text, 'jsdoc') == []

    def test_exported_constant_needs_doc(self):
        found = violations_for("export const LIMIT = 5;\n", 'jsdoc')
        assert "'LIMIT'" in found[0].message

    def test_reexports_are_not_declarations(self):
        assert violations_for("export { a } from './a';\nexport type { B } from './b';\n", 'jsdoc') == []

    def test_duplicate_import(self):
        """Reported once per module, at its first import."""
        text = "import { a } from 'x';\nimport { b } from 'x';\nimport c from 'y';\n"
        found = violations_for(text, 'duplicate-import')
        assert [(v.line, v.category) for v in found] == [(1, Category.IMPORT)]

    def test_duplicate_lines(self):
        """A line seen three times is reported at its first occurrence."""
        text = "start();\ndoWork();\ndoWork();\nfinish();\ndoWork();\n"
        found = violations_for(text, 'duplication')
        assert [v.line for v in found] == [2]
        assert found[0].severity == Severity.WARNING

    def test_punctuation_lines_are_not_duplication(self):
        text = "if (a) {\n  run();\n}\nif (b) {\n  go();\n}\nif (c) {\n  stop();\n}\n"
        assert violations_for(text, 'duplication') == []

    def test_missing_early_validation(self):
        """12 lines without a guard is a pattern warning."""
        found = violations_for(long_function(body_lines=10), 'early-validation')
        assert len(found) == 1
        assert found[0].category == Category.PATTERN

    def test_short_function_exempt_from_early_validation(self):
        assert violations_for(long_function(body_lines=5), 'early-validation') == []


class TestTypeHygiene:
    """Result access, loose types and null safety."""

    def test_unchecked_result_data(self):
        found = violations_for("const value = result.data;\n", 'result-property-access')
        assert len(found) == 1
        assert found[0].category == Category.PROPERTY_ACCESS

    def test_checked_result_data(self):
        """An if-condition on the receiver counts as a check."""
        text = "if (result.success) {\n  use(result.data);\n}\n"
        assert violations_for(text, 'result-property-access') == []

    def test_is_ok_always_reported(self):
        """isOk/isErr are reported even under a check."""
        text = "if (loadResult.success) {\n  flag(loadResult.isOk);\n}\n"
        assert len(violations_for(text, 'result-property-access')) == 1

    def test_loose_types(self):
        found = violations_for("function f(cb: Function, opts: Object) {}\n", 'type-assignment')
        assert len(found) == 2
        assert found[0].category == Category.TYPE_ASSIGNMENT

    def test_object_static_call_is_not_a_type(self):
        assert violations_for("const keys = Object.keys(map);\n", 'type-assignment') == []

    def test_unguarded_chain(self):
        found = violations_for("show(user.profile.name);\n", 'null-safety')
        assert len(found) == 1
        assert "'user.profile.name'" in found[0].message

    def test_guarded_chain(self):
        text = "if (user && user.profile) {\n  show(user.profile.name);\n}\n"
        assert violations_for(text, 'null-safety') == []

    def test_subscript_access(self):
        assert len(violations_for("total += items[index];\n", 'null-safety')) == 1

    def test_optional_chaining_and_builtins_ignored(self):
        text = "show(user?.profile.name);\nconst n = Math.max.apply(null, xs);\nthis.state.value = 1;\n"
        assert violations_for(text, 'null-safety') == []
