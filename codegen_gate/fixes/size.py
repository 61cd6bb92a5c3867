"""
Pass 7: prepend a size warning banner to files approaching the limit.
"""

from ..config import GateConfig
from ..lexer import count_code_lines
from ..models import FixOutcome

BANNER_MARK = 'FILE SIZE WARNING'


def size_banner(text: str, config: GateConfig) -> FixOutcome:
    lines = text.split('\n')
    if any(BANNER_MARK in line for line in lines[:3]):
        return FixOutcome(text)

    # Code lines only; inserted comments never change the count
    total = count_code_lines(text)
    if total <= config.soft_file_lines:
        return FixOutcome(text)

    banner = [
        '/**',
        f' * ⚠️  {BANNER_MARK}: This file has {total} lines (ESLint max-lines: {config.max_file_lines})',
        ' * Consider breaking into smaller modules to maintain code quality.',
        ' */',
        '',
    ]
    return FixOutcome('\n'.join(banner + lines))
