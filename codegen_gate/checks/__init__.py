"""
Check registry - exports all available checks.

Every check has the same shape: ``check(source, functions, config)`` and
returns the violations of exactly one rule.
"""

from .constructs import check_any_type, check_ts_suppressions, check_eslint_disable
from .console_leaks import check_console_leaks
from .size import check_long_functions, check_complexity, check_file_size, check_file_size_warning
from .parameters import check_parameter_count
from .docs import check_missing_docs
from .imports import check_duplicate_imports
from .duplicates import check_duplicate_lines
from .early_validation import check_early_validation
from .hygiene import check_result_access, check_type_assignment, check_null_safety

__all__ = [
    'check_any_type',
    'check_ts_suppressions',
    'check_eslint_disable',
    'check_console_leaks',
    'check_long_functions',
    'check_complexity',
    'check_file_size',
    'check_file_size_warning',
    'check_parameter_count',
    'check_missing_docs',
    'check_duplicate_imports',
    'check_duplicate_lines',
    'check_early_validation',
    'check_result_access',
    'check_type_assignment',
    'check_null_safety',
]
