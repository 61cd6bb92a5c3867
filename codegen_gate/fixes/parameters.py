"""
Pass 5: flag functions with too many parameters.

Adds a refactor TODO instead of rewriting the signature.
"""

from typing import Dict

from ..config import GateConfig
from ..lexer import indent_of, is_doc_line
from ..metrics import extract
from ..models import FixOutcome

MARKER = '// TODO: Consider using an options object for'


def _insertion_row(lines, decl_row: int) -> int:
    """Row above the declaration's doc block (or the declaration itself)."""
    row = decl_row
    while row > 0 and is_doc_line(lines[row - 1]):
        row -= 1
        if lines[row].strip().startswith('/**'):
            break
    return row


def flag_parameters(text: str, config: GateConfig) -> FixOutcome:
    lines = text.split('\n')
    markers: Dict[int, str] = {}

    for func in extract(text, config):
        count = len(func.parameters)
        if count <= config.max_params:
            continue

        row = _insertion_row(lines, func.start_line - 1)
        if row > 0 and lines[row - 1].strip().startswith(MARKER):
            continue
        if row in markers:
            continue

        indent = indent_of(lines[func.start_line - 1])
        markers[row] = f'{indent}{MARKER} {count} parameters (max: {config.max_params})'

    if not markers:
        return FixOutcome(text)

    fixed = []
    for idx, line in enumerate(lines):
        if idx in markers:
            fixed.append(markers[idx])
        fixed.append(line)

    return FixOutcome('\n'.join(fixed))
