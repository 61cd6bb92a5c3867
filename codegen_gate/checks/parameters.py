"""
Parameter count check (ESLint max-params analog).
"""

from typing import List

from ..config import GateConfig
from ..lexer import SourceText
from ..models import Category, FunctionRecord, Severity, Violation


def check_parameter_count(source: SourceText, functions: List[FunctionRecord], config: GateConfig) -> List[Violation]:
    violations = []

    for func in functions:
        count = len(func.parameters)
        if count > config.max_params:
            violations.append(Violation(
                rule_id='max-params',
                category=Category.PARAMETERS,
                severity=Severity.ERROR,
                message=(f"Function '{func.name}' has too many parameters "
                         f"({count}, max: {config.max_params})"),
                line=func.start_line,
            ))

    return violations
