"""
Rule engine - the fixed rule table and its evaluation.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from .config import DEFAULT_CONFIG, GateConfig
from .lexer import SourceText
from .models import Category, FunctionRecord, Violation
from .checks import (
    check_any_type,
    check_ts_suppressions,
    check_eslint_disable,
    check_console_leaks,
    check_long_functions,
    check_complexity,
    check_file_size,
    check_file_size_warning,
    check_parameter_count,
    check_missing_docs,
    check_duplicate_imports,
    check_duplicate_lines,
    check_early_validation,
    check_result_access,
    check_type_assignment,
    check_null_safety,
)

Check = Callable[[SourceText, List[FunctionRecord], GateConfig], List[Violation]]


@dataclass(frozen=True)
class Rule:
    """One entry of the rule table, bound to a single category."""
    rule_id: str
    category: Category
    check: Check


# Evaluation order is table order
RULES = (
    Rule('any-type', Category.TYPESCRIPT, check_any_type),
    Rule('ts-ignore', Category.TYPESCRIPT, check_ts_suppressions),
    Rule('eslint-disable', Category.ESLINT, check_eslint_disable),
    Rule('console-log', Category.LOGGING, check_console_leaks),
    Rule('max-lines-per-function', Category.COMPLEXITY, check_long_functions),
    Rule('complexity', Category.COMPLEXITY, check_complexity),
    Rule('max-lines', Category.FILE_SIZE, check_file_size),
    Rule('max-lines-warning', Category.FILE_SIZE, check_file_size_warning),
    Rule('max-params', Category.PARAMETERS, check_parameter_count),
    Rule('jsdoc', Category.JSDOC, check_missing_docs),
    Rule('duplicate-import', Category.IMPORT, check_duplicate_imports),
    Rule('duplication', Category.DUPLICATION, check_duplicate_lines),
    Rule('early-validation', Category.PATTERN, check_early_validation),
    Rule('result-property-access', Category.PROPERTY_ACCESS, check_result_access),
    Rule('type-assignment', Category.TYPE_ASSIGNMENT, check_type_assignment),
    Rule('null-safety', Category.NULL_SAFETY, check_null_safety),
)


def _line_key(violation: Violation) -> int:
    # File-level violations (no line) sort first within their rule
    return violation.line if violation.line is not None else 0


def evaluate(
    source_text: str,
    functions: Sequence[FunctionRecord],
    config: GateConfig = DEFAULT_CONFIG,
    log: Optional[Callable[[str], None]] = None,
) -> List[Violation]:
    """Run every rule over one unit of text.

    Violations come back grouped by rule (table order) and sorted by line
    within a rule. A rule whose check fails contributes nothing; the failure
    is reported through ``log``.
    """
    log = log or (lambda msg: None)
    source = SourceText.of(source_text or '')
    functions = list(functions)
    violations: List[Violation] = []

    for rule in RULES:
        try:
            found = rule.check(source, functions, config)
        except Exception as e:  # analysis never raises
            log(f"⚠️  Rule '{rule.rule_id}' failed: {e}")
            continue
        violations.extend(sorted(found, key=_line_key))

    return violations
