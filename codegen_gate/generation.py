"""
Generation flow: pre-validate, render, fix once, analyze.
"""

from typing import Any, Callable, Dict, List

from .analysis import build_report
from .config import DEFAULT_CONFIG, GateConfig
from .engine import evaluate
from .fixes import PASSES_BY_NAME, run_pipeline
from .metrics import extract
from .models import GenerationRequest, GenerationResult, Severity, Violation
from .prevalidate import ensure_valid

Renderer = Callable[[str, Dict[str, Any]], str]


def skip_violations(notes) -> List[Violation]:
    """Turn fix notes into zero-weight fix-skipped warnings."""
    violations = []
    for note in notes:
        fix_pass = PASSES_BY_NAME.get(note.pass_name)
        if fix_pass is None:
            continue
        violations.append(Violation(
            rule_id='fix-skipped',
            category=fix_pass.category,
            severity=Severity.WARNING,
            message=f'{note.pass_name}: {note.message}',
            line=note.line,
        ))
    return violations


def generate(
    request: GenerationRequest,
    render: Renderer,
    config: GateConfig = DEFAULT_CONFIG,
    warn: Callable[[str], None] = print,
) -> GenerationResult:
    """Run one generation cycle.

    Raises RequestError when pre-validation fails; nothing is rendered then.
    The fix pipeline runs exactly once and the final analysis never triggers
    another fix.
    """
    outcome = ensure_valid(request, config, warn)

    rendered = render(request.template_name, request.variables())
    fixed = run_pipeline(rendered, config)

    functions = extract(fixed.text, config)
    violations = evaluate(fixed.text, functions, config)
    if config.record_fix_skips:
        violations.extend(skip_violations(fixed.notes))
    report = build_report(violations, functions, config)

    warnings = list(outcome.warnings)
    if config.strict_mode:
        for v in report.errors:
            where = f' (line {v.line})' if v.line else ''
            message = f'[{v.category.value}] {v.message}{where}'
            warn(f"⚠️  {message}")
            warnings.append(message)

    return GenerationResult(
        text=fixed.text,
        report=report,
        notes=fixed.notes,
        warnings=tuple(warnings),
    )
