"""
Disallowed construct detection.
Finds unsafe 'any' annotations, type-check suppressions and lint suppressions.
"""

from typing import List

from ..config import GateConfig
from ..lexer import SourceText, line_number
from ..models import Category, FunctionRecord, Severity, Violation
from ..patterns import ANY_TYPE_PATTERN, ESLINT_DISABLE_PATTERN, TS_SUPPRESS_PATTERN


def check_any_type(source: SourceText, functions: List[FunctionRecord], config: GateConfig) -> List[Violation]:
    """Check for 'any' used as a type annotation, assertion or type argument."""
    violations = []

    for match in ANY_TYPE_PATTERN.finditer(source.masked):
        violations.append(Violation(
            rule_id='any-type',
            category=Category.TYPESCRIPT,
            severity=Severity.ERROR,
            message='Using "any" type is prohibited',
            line=line_number(source.text, match.start()),
        ))

    return violations


def check_ts_suppressions(source: SourceText, functions: List[FunctionRecord], config: GateConfig) -> List[Violation]:
    """Check for @ts-ignore style comments."""
    violations = []

    # Markers live in comments, so search with only strings blanked
    for match in TS_SUPPRESS_PATTERN.finditer(source.no_strings):
        violations.append(Violation(
            rule_id='ts-ignore',
            category=Category.TYPESCRIPT,
            severity=Severity.ERROR,
            message=f'@ts-{match.group(1)} comments are prohibited',
            line=line_number(source.text, match.start()),
        ))

    return violations


def check_eslint_disable(source: SourceText, functions: List[FunctionRecord], config: GateConfig) -> List[Violation]:
    """Check for eslint-disable comments."""
    violations = []

    for match in ESLINT_DISABLE_PATTERN.finditer(source.no_strings):
        violations.append(Violation(
            rule_id='eslint-disable',
            category=Category.ESLINT,
            severity=Severity.ERROR,
            message='ESLint disable comments are prohibited',
            line=line_number(source.text, match.start()),
        ))

    return violations
