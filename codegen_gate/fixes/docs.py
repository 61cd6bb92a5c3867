"""
Pass 4: inject doc comments above undocumented exported declarations.
"""

from typing import List

from ..config import GateConfig
from ..lexer import indent_of, is_doc_line, mask_code
from ..models import FixOutcome
from ..patterns import match_exported_declaration


def doc_block(name: str, kind: str, indent: str = '') -> List[str]:
    """Placeholder doc block for one declaration."""
    summary = f"{name[:1].upper()}{name[1:]} {kind}."
    return [
        f'{indent}/**',
        f'{indent} * {summary}',
        f'{indent} *',
        f'{indent} * @returns TODO: Document return type',
        f'{indent} * @throws TODO: Document error conditions',
        f'{indent} */',
    ]


def inject_docs(text: str, config: GateConfig) -> FixOutcome:
    lines = text.split('\n')
    masked_lines = mask_code(text).split('\n')
    fixed = []

    for idx, (line, masked) in enumerate(zip(lines, masked_lines)):
        decl = match_exported_declaration(masked)
        if decl and not (idx > 0 and is_doc_line(lines[idx - 1])):
            kind, name = decl
            fixed.extend(doc_block(name, kind, indent_of(line)))
        fixed.append(line)

    return FixOutcome('\n'.join(fixed))
