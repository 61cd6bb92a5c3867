"""
Early validation check.
Longer functions should open with a guard clause.
"""

from typing import List

from ..config import GateConfig
from ..lexer import SourceText
from ..models import Category, FunctionRecord, Severity, Violation


def check_early_validation(source: SourceText, functions: List[FunctionRecord], config: GateConfig) -> List[Violation]:
    violations = []

    for func in functions:
        if func.line_count > config.early_validation_min_lines and not func.has_early_validation:
            violations.append(Violation(
                rule_id='early-validation',
                category=Category.PATTERN,
                severity=Severity.WARNING,
                message=(f"Function '{func.name}' lacks early validation "
                         f"(no guard clause in the first {config.early_validation_lines} lines)"),
                line=func.start_line,
            ))

    return violations
