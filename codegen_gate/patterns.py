"""
Shared construct patterns.

Each hazard is detected in one place so that a check reporting it and a fix
pass rewriting it always agree on what counts as an occurrence.
"""

import re
from typing import Container, Iterator, List, Optional, Tuple

from .lexer import IMPORT_START, is_blank, is_comment_line

NAME = r'[A-Za-z_$][\w$]*'

# =============================================================================
# Disallowed constructs
# =============================================================================

# ": any", "as any", "<any>", ", any>" and ", any]" (searched in masked code)
ANY_TYPE_PATTERN = re.compile(r'(?P<lead>:\s*|\bas\s+|<\s*|,\s*(?=any\s*[>\]]))any\b(?![\w$])')

ANY_TYPE_NAMES = {'any', 'any[]', 'Array<any>'}

TS_SUPPRESS_PATTERN = re.compile(r'@ts-(ignore|nocheck|expect-error)\b')

ESLINT_DISABLE_PATTERN = re.compile(r'(?://|/\*)\s*eslint-disable')

# Debug-style console calls (searched in masked code)
CONSOLE_PATTERN = re.compile(r'\bconsole\.(log|debug|info|trace)\s*\(')

# =============================================================================
# Exported declarations
# =============================================================================

EXPORT_DECL_PATTERN = re.compile(
    r'^\s*export\s+(?:(?P<default>default)\s+)?(?:declare\s+)?(?:abstract\s+)?(?:async\s+)?'
    r'(?P<kind>function(?:\s*\*)?|const|let|var|class|interface|type|enum)'
    rf'(?:\s+(?P<name>{NAME}))?'
)


def match_exported_declaration(line: str) -> Optional[Tuple[str, str]]:
    """Return (kind, name) if the line opens an exported declaration."""
    match = EXPORT_DECL_PATTERN.match(line)
    if not match:
        return None

    kind = re.sub(r'\s+', '', match.group('kind'))
    name = match.group('name')

    if kind.startswith('function') or kind == 'class':
        if name is None and not match.group('default'):
            return None
        kind = 'function' if kind.startswith('function') else kind
        return kind, name or 'default'

    # "export type { A } from" and friends are re-exports, not declarations
    if name is None:
        return None

    if kind in ('const', 'let', 'var') and re.search(r'=>|\bfunction\b', line):
        return 'function', name

    return kind, name


def exported_declarations(lines: List[str]) -> List[Tuple[int, str, str]]:
    """(line index, kind, name) for every exported declaration."""
    found = []
    for idx, line in enumerate(lines):
        decl = match_exported_declaration(line)
        if decl:
            found.append((idx, decl[0], decl[1]))
    return found


# =============================================================================
# Guards
# =============================================================================

IF_LINE = re.compile(r'^(?:\}\s*)?(?:else\s+)?if\b')

# How many preceding code lines can hold a guarding if-condition
GUARD_WINDOW = 3


def previous_code_lines(lines: List[str], idx: int, count: int = GUARD_WINDOW) -> List[str]:
    """Up to ``count`` non-blank, non-comment lines before ``idx``, nearest first."""
    found = []
    k = idx - 1
    while k >= 0 and len(found) < count:
        if not is_blank(lines[k]) and not is_comment_line(lines[k]):
            found.append(lines[k])
        k -= 1
    return found


def guarded_by_if(receiver: str, previous: List[str], property_required: bool = False) -> bool:
    """True if a recent if-condition mentions ``receiver``."""
    if property_required:
        mention = re.compile(rf'(?<![\w$.]){re.escape(receiver)}[?!]?\.')
    else:
        mention = re.compile(rf'(?<![\w$.]){re.escape(receiver)}\b')
    return any(IF_LINE.match(line.strip()) and mention.search(line) for line in previous)


def is_assignment_target(line: str, end: int) -> bool:
    """True if the expression ending at ``end`` is being assigned or mutated."""
    return bool(re.match(r'\s*(?:=(?![=>])|[-+*/%&|^]=|\+\+|--|\?\?=|&&=|\|\|=)', line[end:]))


def followed_by_call(line: str, end: int) -> bool:
    return bool(re.match(r'\s*\(', line[end:]))


# =============================================================================
# Result-style property access
# =============================================================================

RESULT_ACCESS_PATTERN = re.compile(
    r'(?<![\w$.])(?P<recv>result|outcome|[a-z_$][\w$]*Result)\.(?P<prop>data|error|isOk|isErr)\b(?![\w$])'
)


def _in_guarded_form(line: str, recv: str, prop: str, start: int, end: int) -> bool:
    """True if the access already sits inside the guarded ternary form."""
    if prop == 'data':
        return (line[:start].endswith(f'({recv}.success ? ')
                and line[end:].startswith(' : undefined)'))
    if prop == 'error':
        return (line[:start].endswith(f'({recv}.success ? undefined : ')
                and line[end:].startswith(')'))
    return False


def _checked_earlier_on_line(line: str, recv: str, start: int) -> bool:
    check = re.compile(rf'(?<![\w$.]){re.escape(recv)}\.(?:success|ok)\b')
    return bool(check.search(line[:start]))


def result_accesses(masked_line: str, previous: List[str], checked: Container[str] = ()) -> Iterator[re.Match]:
    """Unchecked result-style accesses on one (masked) line, left to right.

    ``checked`` lists receivers already known to be checked before this
    line position (used by the fix pass as it rewrites left to right).
    """
    for match in RESULT_ACCESS_PATTERN.finditer(masked_line):
        recv, prop = match.group('recv'), match.group('prop')
        if followed_by_call(masked_line, match.end()):
            continue
        if prop in ('isOk', 'isErr'):
            yield match
            continue
        if _in_guarded_form(masked_line, recv, prop, match.start(), match.end()):
            continue
        if recv in checked or _checked_earlier_on_line(masked_line, recv, match.start()):
            continue
        if guarded_by_if(recv, previous, property_required=True):
            continue
        yield match


# =============================================================================
# Loose object/function annotations
# =============================================================================

LOOSE_TYPE_PATTERN = re.compile(r':\s*(?P<type>Object|Function)\b(?![\w$])(?!\s*[.(\[])')

NARROWED_TYPES = {
    'Object': 'Record<string, unknown>',
    'Function': '((...args: unknown[]) => unknown)',
}

# =============================================================================
# Unguarded chained / subscript access
# =============================================================================

CHAIN_PATTERN = re.compile(rf'(?<![\w$.?!])(?P<recv>{NAME})(?P<rest>(?:\.{NAME}){{2,}})')
SUBSCRIPT_PATTERN = re.compile(rf'(?<![\w$.?!])(?P<recv>{NAME})\[(?P<key>[\w$]+)\]')

# Receivers that are never null in practice
SAFE_RECEIVERS = {
    'this', 'super', 'Math', 'JSON', 'Object', 'Array', 'Number', 'String', 'Boolean',
    'Promise', 'Date', 'Symbol', 'Reflect', 'Intl', 'console', 'process', 'window',
    'document', 'globalThis', 'module', 'exports', 'import', 'Buffer',
}

KEYWORDS = {
    'if', 'for', 'while', 'switch', 'catch', 'with', 'return', 'function', 'typeof',
    'new', 'await', 'yield', 'else', 'do', 'delete', 'void', 'throw', 'case', 'in',
    'of', 'instanceof', 'let', 'const', 'var', 'class', 'extends', 'import', 'export',
}


def _checked_on_line(line: str, recv: str, start: int) -> bool:
    check = re.compile(rf'(?<![\w$.]){re.escape(recv)}\s*(?:&&|!==?|\?\?)')
    return bool(check.search(line[:start]))


def skips_null_safety(line: str) -> bool:
    """Lines the null-safety scan never looks at."""
    trimmed = line.strip()
    return (not trimmed
            or is_comment_line(line)
            or IMPORT_START.match(trimmed) is not None
            or re.match(r'^export\s.*\bfrom\s*[\'"]', trimmed) is not None
            or re.match(r'^(?:export\s+)?(?:declare\s+)?type\s', trimmed) is not None
            or '?.' in line
            or '!.' in line)


def unguarded_accesses(masked_line: str, previous: List[str]) -> List[re.Match]:
    """Unguarded chained and subscript accesses on one (masked) line."""
    if skips_null_safety(masked_line):
        return []

    found = []
    for pattern in (CHAIN_PATTERN, SUBSCRIPT_PATTERN):
        for match in pattern.finditer(masked_line):
            recv = match.group('recv')
            if recv in SAFE_RECEIVERS or recv in KEYWORDS:
                continue
            if pattern is SUBSCRIPT_PATTERN and masked_line[:match.start()].rstrip().endswith(':'):
                # Indexed access type, e.g. "key: Keys[K]"
                continue
            if _checked_on_line(masked_line, recv, match.start()):
                continue
            if guarded_by_if(recv, previous):
                continue
            found.append(match)

    found.sort(key=lambda m: m.start())
    return found
