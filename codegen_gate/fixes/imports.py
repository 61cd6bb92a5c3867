"""
Pass 2: organize import statements.

All import statements are gathered at the position of the first one and
sorted: Node built-in modules first, then by module path. Everything else
keeps its relative order.
"""

from typing import List

from ..config import GateConfig
from ..lexer import ImportUnit, parse_imports
from ..models import FixOutcome

NODE_BUILTINS = {
    'assert', 'async_hooks', 'buffer', 'child_process', 'cluster', 'console', 'constants',
    'crypto', 'dgram', 'diagnostics_channel', 'dns', 'domain', 'events', 'fs', 'http',
    'http2', 'https', 'inspector', 'module', 'net', 'os', 'path', 'perf_hooks', 'process',
    'punycode', 'querystring', 'readline', 'repl', 'stream', 'string_decoder', 'timers',
    'tls', 'trace_events', 'tty', 'url', 'util', 'v8', 'vm', 'wasi', 'worker_threads', 'zlib',
}


def is_builtin(module: str) -> bool:
    """True for Node core modules ('fs', 'fs/promises', 'node:path')."""
    if module.startswith('node:'):
        return True
    return module.split('/')[0] in NODE_BUILTINS


def import_sort_key(unit: ImportUnit):
    return (not is_builtin(unit.module), unit.module.lower(), unit.text)


def organize_imports(text: str, config: GateConfig) -> FixOutcome:
    lines = text.split('\n')
    units = parse_imports(lines)
    if not units:
        return FixOutcome(text)

    import_rows = set()
    for unit in units:
        import_rows.update(range(unit.start, unit.end + 1))

    ordered: List[str] = []
    for unit in sorted(units, key=import_sort_key):
        ordered.extend(unit.lines)

    first = units[0].start
    rest = [line for idx, line in enumerate(lines) if idx not in import_rows]

    # Lines before the first import are untouched
    result = rest[:first] + ordered + rest[first:]
    return FixOutcome('\n'.join(result))
