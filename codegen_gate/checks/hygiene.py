"""
Type-system hygiene checks.

Scanned line by line over masked text rather than per function:
- result-style property access without a success check
- loose ``Object`` / ``Function`` annotations
- chained or subscript access without a null/undefined guard
"""

from typing import List

from ..config import GateConfig
from ..lexer import SourceText
from ..models import Category, FunctionRecord, Severity, Violation
from ..patterns import (
    LOOSE_TYPE_PATTERN,
    SUBSCRIPT_PATTERN,
    previous_code_lines,
    result_accesses,
    unguarded_accesses,
)


def check_result_access(source: SourceText, functions: List[FunctionRecord], config: GateConfig) -> List[Violation]:
    """Check for result.data/.error/.isOk/.isErr used without a safety check."""
    violations = []
    lines = list(source.masked_lines)

    for idx, line in enumerate(lines):
        previous = previous_code_lines(lines, idx)
        for match in result_accesses(line, previous):
            recv, prop = match.group('recv'), match.group('prop')
            if prop in ('isOk', 'isErr'):
                hint = f"use {'!' if prop == 'isErr' else ''}{recv}.success instead"
            else:
                hint = f'check {recv}.success first'
            violations.append(Violation(
                rule_id='result-property-access',
                category=Category.PROPERTY_ACCESS,
                severity=Severity.WARNING,
                message=f'Result property access {recv}.{prop} without safety check ({hint})',
                line=idx + 1,
            ))

    return violations


def check_type_assignment(source: SourceText, functions: List[FunctionRecord], config: GateConfig) -> List[Violation]:
    """Check for the loosest object/function annotations."""
    violations = []

    for idx, line in enumerate(source.masked_lines):
        for match in LOOSE_TYPE_PATTERN.finditer(line):
            loose = match.group('type')
            wanted = 'Record<string, unknown>' if loose == 'Object' else 'a proper function signature'
            violations.append(Violation(
                rule_id='type-assignment',
                category=Category.TYPE_ASSIGNMENT,
                severity=Severity.WARNING,
                message=f'{loose} type instead of {wanted}',
                line=idx + 1,
            ))

    return violations


def check_null_safety(source: SourceText, functions: List[FunctionRecord], config: GateConfig) -> List[Violation]:
    """Check for chained/subscript property access without a null guard."""
    violations = []
    lines = list(source.masked_lines)

    for idx, line in enumerate(lines):
        previous = previous_code_lines(lines, idx)
        for match in unguarded_accesses(line, previous):
            what = 'Array access' if match.re is SUBSCRIPT_PATTERN else 'Nested property access'
            violations.append(Violation(
                rule_id='null-safety',
                category=Category.NULL_SAFETY,
                severity=Severity.WARNING,
                message=f"{what} '{match.group(0)}' without null safety check",
                line=idx + 1,
            ))

    return violations
