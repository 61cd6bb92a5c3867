"""
Function metrics extraction.

Finds function-like declarations in TypeScript/JavaScript text and measures
each one: span, non-blank lines, heuristic complexity, parameters and a few
structural flags. Pattern based; nested functions are measured on their own
and still count toward the enclosing function's lines.
"""

import re
from typing import List, NamedTuple, Optional, Tuple

from .config import DEFAULT_CONFIG, GateConfig
from .lexer import (
    find_matching,
    find_top_level,
    line_number,
    mask_code,
    split_top_level,
)
from .models import FunctionRecord, Parameter
from .patterns import ANY_TYPE_NAMES, KEYWORDS, NAME

# function name(...)  /  function* name<T>(...)
FUNCTION_PATTERN = re.compile(
    rf'\bfunction\b\s*\*?\s*(?P<name>{NAME})\s*(?:<[^>\n]*>)?\s*(?P<paren>\()'
)

# const name = (...) =>  /  const name = async function (...)
CONST_PATTERN = re.compile(
    rf'\b(?:const|let|var)\s+(?P<name>{NAME})\s*(?::[^=\n]+)?=\s*(?:async\s+)?'
    rf'(?P<fn>function\b\s*\*?\s*(?:{NAME})?\s*)?(?:<[^>\n]*>\s*)?(?P<paren>\()'
)

# const name = x =>
CONST_SINGLE_PATTERN = re.compile(
    rf'\b(?:const|let|var)\s+(?P<name>{NAME})\s*=\s*(?:async\s+)?(?P<param>{NAME})\s*(?P<arrow>=>)'
)

# name: (...) =>  /  name = async (...) =>  /  this.name = function (...)
FIELD_PATTERN = re.compile(
    r'^[ \t]*(?:this\.)?(?:(?:public|private|protected|static|readonly|override)\s+)*'
    rf'(?P<name>{NAME})\s*[:=]\s*(?:async\s+)?'
    rf'(?P<fn>function\b\s*\*?\s*(?:{NAME})?\s*)?(?:<[^>\n]*>\s*)?(?P<paren>\()',
    re.MULTILINE,
)

# name(...) {   (class methods)
METHOD_PATTERN = re.compile(
    r'^[ \t]*(?:(?:public|private|protected|static|async|override|abstract|get|set)\s+)*'
    rf'(?P<name>{NAME})\s*(?:<[^>\n]*>)?\s*(?P<paren>\()',
    re.MULTILINE,
)

# Branching tokens (each adds 1 to complexity)
BRANCH_PATTERNS = [
    r'\bif\b',
    r'\bfor\b',
    r'\bwhile\b',
    r'\bcase\b',
    r'&&',
    r'\|\|',
]
BRANCH_PATTERN = re.compile('|'.join(BRANCH_PATTERNS))

GUARD_IF = re.compile(r'^(?:\}\s*)?(?:else\s+)?if\b')
EXITS = re.compile(r'\b(?:return|throw)\b')
STARTS_WITH_EXIT = re.compile(r'^\{?\s*(?:return|throw)\b')

NUMBER_PATTERN = re.compile(r'(?<![\w$.])-?(?:0[xX][0-9a-fA-F]+|\d+(?:\.\d+)?(?:[eE][+-]?\d+)?)\b')
CONSTANT_DECL = re.compile(r'^\s*(?:export\s+)?const\s+[A-Z][A-Z0-9_]*\b')

PARAM_MODIFIERS = re.compile(r'^(?:(?:public|private|protected|readonly|override)\s+)+')


class _Candidate(NamedTuple):
    name: str
    start: int
    paren: Optional[int]
    single_param: Optional[str]
    arrow_pos: Optional[int]
    kind: str
    has_function_keyword: bool


class _Tail(NamedTuple):
    return_type: str
    is_arrow: bool
    body_start: int


def _parse_tail(masked: str, pos: int) -> _Tail:
    """Parse ``: ReturnType`` and an optional ``=>`` after a parameter list."""
    n = len(masked)
    i = pos
    while i < n and masked[i].isspace():
        i += 1

    return_type = ''
    if i < n and masked[i] == ':':
        j = i + 1
        depth = 0
        while j < n:
            ch = masked[j]
            if depth <= 0 and (ch == '{' or masked.startswith('=>', j) or ch == ';'):
                break
            if ch in '(<[':
                depth += 1
            elif ch in ')]':
                depth -= 1
            elif ch == '>' and masked[j - 1] != '=':
                depth -= 1
            j += 1
        return_type = ' '.join(masked[i + 1:j].split())
        i = j

    while i < n and masked[i].isspace():
        i += 1

    is_arrow = masked.startswith('=>', i)
    if is_arrow:
        i += 2
        while i < n and masked[i].isspace():
            i += 1

    return _Tail(return_type, is_arrow, i)


def _expression_end(masked: str, start: int) -> int:
    """End index (inclusive) of an arrow function's expression body."""
    depth = 0
    last = start
    for pos in range(start, len(masked)):
        ch = masked[pos]
        if ch in '([{':
            depth += 1
        elif ch in ')]}':
            depth -= 1
            if depth < 0:
                return last
        elif depth == 0 and ch in ';\n':
            return pos if ch == ';' else last
        elif depth == 0 and ch == ',':
            return last
        if not ch.isspace():
            last = pos
    return last


def _candidates(masked: str) -> List[_Candidate]:
    found = []

    for match in FUNCTION_PATTERN.finditer(masked):
        found.append(_Candidate(match.group('name'), match.start('name'),
                                match.start('paren'), None, None, 'function', True))

    for match in CONST_PATTERN.finditer(masked):
        found.append(_Candidate(match.group('name'), match.start('name'),
                                match.start('paren'), None, None, 'const', bool(match.group('fn'))))

    for match in CONST_SINGLE_PATTERN.finditer(masked):
        found.append(_Candidate(match.group('name'), match.start('name'),
                                None, match.group('param'), match.end('arrow'), 'const', False))

    for match in FIELD_PATTERN.finditer(masked):
        if match.group('name') in KEYWORDS:
            continue
        found.append(_Candidate(match.group('name'), match.start('name'),
                                match.start('paren'), None, None, 'field', bool(match.group('fn'))))

    for match in METHOD_PATTERN.finditer(masked):
        if match.group('name') in KEYWORDS:
            continue
        found.append(_Candidate(match.group('name'), match.start('name'),
                                match.start('paren'), None, None, 'method', False))

    found.sort(key=lambda c: c.start)
    return found


def parse_parameters(param_text: str) -> Tuple[Parameter, ...]:
    """Split a declared parameter list into (name, type) pairs."""
    params = []
    for part in split_top_level(param_text):
        part = part.strip()
        if not part:
            continue

        colon = find_top_level(part, ':')
        eq = find_top_level(part, '=')
        if colon != -1 and (eq == -1 or colon < eq):
            name = part[:colon]
            type_end = eq if eq > colon else len(part)
            ptype = ' '.join(part[colon + 1:type_end].split())
        else:
            name = part[:eq] if eq != -1 else part
            ptype = ''

        name = PARAM_MODIFIERS.sub('', name.strip())
        name = name.lstrip('.').rstrip('?').strip()
        params.append(Parameter(name=name, type=ptype))

    return tuple(params)


def has_early_validation(body: str, window: int) -> bool:
    """True if a guard clause (if + return/throw) opens the body."""
    lines = [l.strip() for l in body.split('\n') if l.strip()][:window]
    for k, line in enumerate(lines):
        if not GUARD_IF.match(line):
            continue
        if EXITS.search(line):
            return True
        if k + 1 < len(lines) and STARTS_WITH_EXIT.match(lines[k + 1]):
            return True
    return False


def uses_magic_number(span: str) -> bool:
    """True if a numeric literal other than -1, 0 or 1 appears outside a constant."""
    for line in span.split('\n'):
        if CONSTANT_DECL.match(line):
            continue
        for match in NUMBER_PATTERN.finditer(line):
            literal = match.group(0)
            try:
                value = int(literal, 16) if literal.lower().lstrip('-').startswith('0x') else float(literal)
            except ValueError:
                continue
            if value not in (-1, 0, 1):
                return True
    return False


def calculate_complexity(code: str) -> int:
    """1 + number of branching tokens (never below 1)."""
    return 1 + len(BRANCH_PATTERN.findall(code))


def extract(source_text: str, config: GateConfig = DEFAULT_CONFIG) -> List[FunctionRecord]:
    """Extract function records from raw source text.

    Never raises; text with no recognizable functions yields an empty list.
    """
    if not source_text or not source_text.strip():
        return []

    masked = mask_code(source_text)
    uncommented = mask_code(source_text, strings=False)
    raw_lines = source_text.split('\n')

    records = []
    seen_bodies = set()

    for cand in _candidates(masked):
        if cand.single_param is not None:
            params = (Parameter(name=cand.single_param),)
            tail = _parse_tail(masked, cand.arrow_pos)
            tail = _Tail('', True, tail.body_start)
        else:
            close = find_matching(masked, cand.paren)
            if close == -1:
                continue
            params = parse_parameters(uncommented[cand.paren + 1:close])
            tail = _parse_tail(masked, close + 1)

        body_start = tail.body_start
        if body_start >= len(masked):
            continue

        has_brace = masked[body_start] == '{'
        if cand.kind == 'function' and not has_brace:
            continue
        if cand.kind in ('const', 'field') and not (tail.is_arrow or (cand.has_function_keyword and has_brace)):
            continue
        if cand.kind == 'method' and (tail.is_arrow or not has_brace):
            continue

        if body_start in seen_bodies:
            continue

        if has_brace:
            end = find_matching(masked, body_start)
            if end == -1:
                continue
            body = masked[body_start + 1:end]
        else:
            end = _expression_end(masked, body_start)
            body = ''

        seen_bodies.add(body_start)

        start_line = line_number(source_text, cand.start)
        end_line = line_number(source_text, end)
        span_lines = raw_lines[start_line - 1:end_line]
        span_masked = masked[masked.rfind('\n', 0, cand.start) + 1:end + 1]

        return_type = tail.return_type
        records.append(FunctionRecord(
            name=cand.name,
            line_span=(start_line, end_line),
            line_count=len([l for l in span_lines if l.strip()]),
            complexity=calculate_complexity(span_masked),
            parameters=params,
            has_early_validation=has_early_validation(body, config.early_validation_lines),
            uses_any_type=(return_type in ANY_TYPE_NAMES
                           or any(p.type in ANY_TYPE_NAMES for p in params)),
            uses_magic_number=uses_magic_number(span_masked),
            return_type=return_type,
        ))

    records.sort(key=lambda r: r.line_span)
    return records
