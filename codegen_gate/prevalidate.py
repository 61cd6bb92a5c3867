"""
Pre-validation of generation requests.

Runs before any text exists and only looks at the request shape. Hard
failures abort generation; soft failures are reported as warnings.
"""

import re
from typing import Callable, List, Optional, Tuple

from .config import DEFAULT_CONFIG, GateConfig
from .lexer import find_top_level, split_top_level
from .models import GenerationRequest, Parameter, ValidationOutcome
from .patterns import ANY_TYPE_NAMES

# Single-letter names allowed for loop counters
LOOP_COUNTERS = {'i', 'j', 'k'}

MIN_PARAM_NAME_LENGTH = 2

# Global identifiers a generated function must not shadow
CONFLICTING_NAMES = [
    'Error', 'Array', 'Object', 'String', 'Number', 'Boolean', 'Date', 'RegExp',
    'Promise', 'Map', 'Set', 'JSON', 'Math', 'console', 'document', 'window',
]

# Parameter types that compile but usually cause type errors later
LOOSE_PARAM_TYPES = {'Object', 'object', 'Function', 'unknown[]'}

# Size estimate (lines): template overhead plus per-feature extras
BASE_SIZE = 50
LINES_PER_PARAM = 10
PROMISE_RETURN_SIZE = 20
ASYNC_SIZE = 15
THROWS_SIZE = 10

RESULT_PROPERTY = re.compile(r'\bresult\.(data|error|isOk|isErr)\b')
RESULT_PROPERTY_HINTS = {
    'data': 'Check result.success before reading it',
    'error': 'Check result.success before reading it',
    'isOk': 'Consider using result.success instead',
    'isErr': 'Consider using !result.success instead',
}


class RequestError(ValueError):
    """A generation request failed pre-validation.

    ``reason`` names the offending field and the constraint it broke.
    """

    def __init__(self, field: Optional[str], reason: str):
        super().__init__(reason)
        self.field = field
        self.reason = reason


def parse_param_spec(params: Optional[str]) -> List[Parameter]:
    """Parse a ``name:type,name:type`` parameter list."""
    if not params or not params.strip():
        return []

    parsed = []
    for part in split_top_level(params):
        part = part.strip()
        if not part:
            continue
        colon = find_top_level(part, ':')
        if colon == -1:
            parsed.append(Parameter(name=part))
        else:
            parsed.append(Parameter(name=part[:colon].strip(), type=part[colon + 1:].strip()))
    return parsed


def estimate_size(request: GenerationRequest, params: List[Parameter]) -> int:
    """Rough line count of the file the request would produce."""
    size = BASE_SIZE + LINES_PER_PARAM * len(params)
    if request.returns and 'Promise' in request.returns:
        size += PROMISE_RETURN_SIZE
    if request.is_async:
        size += ASYNC_SIZE
    if request.throws:
        size += THROWS_SIZE
    return size


def _hard_failure(params: List[Parameter], config: GateConfig) -> Optional[Tuple[str, str]]:
    """(field, reason) of the first hard failure, or None."""
    if len(params) > config.max_params:
        return 'params', (
            f"Too many parameters ({len(params)}). Maximum allowed is {config.max_params} parameters. "
            f"Consider using an options object or breaking down the function."
        )

    seen = set()
    for param in params:
        if param.type in ANY_TYPE_NAMES:
            return 'params', (
                f"Parameter '{param.name}' uses '{param.type}' type. Use specific TypeScript types instead."
            )

        if param.name not in LOOP_COUNTERS and len(param.name) < MIN_PARAM_NAME_LENGTH:
            return 'params', (
                f"Parameter name '{param.name}' is too short. Use descriptive names "
                f"(min {MIN_PARAM_NAME_LENGTH} characters) except for loop counters i/j/k."
            )

        if param.name in seen:
            return 'params', (
                f"Duplicate parameter name '{param.name}' detected. Each parameter must have a unique name."
            )
        seen.add(param.name)

    return None


def _param_type_warnings(param: Parameter) -> List[str]:
    warnings = []
    if param.type in LOOSE_PARAM_TYPES:
        warnings.append(
            f"Parameter '{param.name}' uses '{param.type}' type. "
            f"Consider using more specific types to prevent TypeScript errors."
        )
    if 'Promise<' in param.type and 'Result<' not in param.type:
        warnings.append(
            f"Parameter '{param.name}' uses Promise without Result type. "
            f"Consider using Result<T, Error> pattern for better error handling."
        )
    if 'undefined' in param.type:
        warnings.append(
            f"Parameter '{param.name}' includes undefined type. Ensure proper null checks in implementation."
        )
    return warnings


def _soft_warnings(request: GenerationRequest, params: List[Parameter], config: GateConfig) -> List[str]:
    warnings = []

    for param in params:
        warnings.extend(_param_type_warnings(param))

    estimated = estimate_size(request, params)
    if estimated > config.max_file_lines:
        warnings.append(
            f"Generated file may be large (~{estimated} lines). "
            f"Consider breaking into smaller modules (max: {config.max_file_lines} lines)."
        )

    if request.name and not request.description:
        warnings.append(
            f"Function '{request.name}' lacks description. JSDoc will be auto-generated but should be customized."
        )

    if request.name in CONFLICTING_NAMES:
        warnings.append(
            f"Function name '{request.name}' conflicts with built-in global type. "
            f"Consider using a different name to avoid TypeScript conflicts."
        )

    if request.template_name == 'ai-function' and not request.returns:
        warnings.append('AI function template should specify return type for better JSDoc generation.')

    if request.description:
        for prop in sorted(set(RESULT_PROPERTY.findall(request.description))):
            warnings.append(f'Result type may not have .{prop} property. {RESULT_PROPERTY_HINTS[prop]}.')

    return warnings


def validate(
    request: GenerationRequest,
    config: GateConfig = DEFAULT_CONFIG,
    log: Optional[Callable[[str], None]] = None,
) -> ValidationOutcome:
    """Check a generation request before rendering.

    The first hard failure wins and is returned with ``ok=False``. Soft
    failures never block; each one is passed to ``log`` and collected in
    ``warnings``.
    """
    log = log or (lambda msg: None)
    params = parse_param_spec(request.params)

    failure = _hard_failure(params, config)
    if failure:
        field, reason = failure
        return ValidationOutcome(ok=False, reason=reason, field=field)

    warnings = _soft_warnings(request, params, config)
    for warning in warnings:
        log(f"⚠️  {warning}")

    return ValidationOutcome(ok=True, warnings=tuple(warnings))


def ensure_valid(
    request: GenerationRequest,
    config: GateConfig = DEFAULT_CONFIG,
    log: Optional[Callable[[str], None]] = None,
) -> ValidationOutcome:
    """Like validate(), but raise RequestError on a hard failure."""
    outcome = validate(request, config, log)
    if not outcome.ok:
        raise RequestError(outcome.field, outcome.reason)
    return outcome
