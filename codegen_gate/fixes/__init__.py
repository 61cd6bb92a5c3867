"""
Auto-fix pipeline - ordered, idempotent text rewrites.

Each pass is a pure ``(text, config) -> FixOutcome`` function and checks
its own "already applied" condition, so running the pipeline on its own
output changes nothing.
"""

from typing import Callable, List, Optional

from ..config import DEFAULT_CONFIG, GateConfig
from ..models import Category, FixNote, FixPass, FixResult
from .types import widen_any
from .imports import organize_imports
from .console import strip_console
from .docs import inject_docs
from .parameters import flag_parameters
from .duplicates import dedupe_lines
from .size import size_banner
from .hygiene import type_hygiene

PIPELINE = (
    FixPass('widen-any', 1, Category.TYPESCRIPT, widen_any),
    FixPass('organize-imports', 2, Category.IMPORT, organize_imports),
    FixPass('strip-console', 3, Category.LOGGING, strip_console),
    FixPass('inject-docs', 4, Category.JSDOC, inject_docs),
    FixPass('flag-parameters', 5, Category.PARAMETERS, flag_parameters),
    FixPass('dedupe-lines', 6, Category.DUPLICATION, dedupe_lines),
    FixPass('size-banner', 7, Category.FILE_SIZE, size_banner),
    FixPass('type-hygiene', 8, Category.NULL_SAFETY, type_hygiene),
)

PASSES_BY_NAME = {p.name: p for p in PIPELINE}


def run_pipeline(
    source_text: str,
    config: GateConfig = DEFAULT_CONFIG,
    log: Optional[Callable[[str], None]] = None,
) -> FixResult:
    """Run every pass in order, collecting the notes of passes that held back.

    A pass that raises is skipped: its input is handed to the next pass
    and the failure is recorded as a note.
    """
    log = log or (lambda msg: None)
    text = source_text or ''
    notes: List[FixNote] = []

    for fix_pass in PIPELINE:
        try:
            outcome = fix_pass.apply(text, config)
        except Exception as e:  # fixing never raises
            log(f"⚠️  Fix pass '{fix_pass.name}' failed: {e}")
            notes.append(FixNote(fix_pass.name, f'Pass failed and was skipped: {e}'))
            continue

        if outcome.text != text:
            log(f"🔧 {fix_pass.name}")
        text = outcome.text
        notes.extend(outcome.notes)

    return FixResult(text, tuple(notes))


def fix(source_text: str, config: GateConfig = DEFAULT_CONFIG) -> str:
    """Fixed text only."""
    return run_pipeline(source_text, config).text


__all__ = ['PIPELINE', 'PASSES_BY_NAME', 'run_pipeline', 'fix']
