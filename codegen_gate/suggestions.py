"""
Fix suggestions, one per violated category.
"""

from typing import Iterable, Tuple

from .models import Category, Violation

SUGGESTIONS = {
    Category.JSDOC: 'Add JSDoc comments to all exported functions (@param, @returns, @throws)',
    Category.IMPORT: 'Consolidate duplicate imports and organize them (built-in modules first, then alphabetical)',
    Category.PARAMETERS: 'Use an options object or function decomposition for functions with more than 4 parameters',
    Category.FILE_SIZE: 'Break large files into smaller modules (max 300 lines per file)',
    Category.DUPLICATION: 'Extract duplicated code into reusable functions or constants',
    Category.PROPERTY_ACCESS: 'Check result.success before reading result.data or result.error (result.isOk → result.success)',
    Category.TYPE_ASSIGNMENT: 'Fix type assignments (Object → Record<string, unknown>, Function → proper signature)',
    Category.NULL_SAFETY: 'Add null safety checks (obj.prop → obj?.prop, or proper null/undefined guards)',
    Category.TYPESCRIPT: 'Replace "any" types with specific TypeScript types and remove @ts-ignore comments',
    Category.COMPLEXITY: 'Split large functions into smaller, focused functions (max 15 lines)',
    Category.PATTERN: 'Add input validation at the beginning of functions',
    Category.LOGGING: 'Use a proper logger instead of console.log',
    Category.ESLINT: 'Fix the underlying lint problems instead of disabling ESLint rules',
}

# Emission order
PRIORITY = (
    Category.JSDOC,
    Category.IMPORT,
    Category.PARAMETERS,
    Category.FILE_SIZE,
    Category.DUPLICATION,
    Category.PROPERTY_ACCESS,
    Category.TYPE_ASSIGNMENT,
    Category.NULL_SAFETY,
    Category.TYPESCRIPT,
    Category.COMPLEXITY,
    Category.PATTERN,
    Category.LOGGING,
    Category.ESLINT,
)


def suggest(violations: Iterable[Violation]) -> Tuple[str, ...]:
    """One suggestion per distinct category present, in priority order."""
    present = {v.category for v in violations}
    return tuple(SUGGESTIONS[c] for c in PRIORITY if c in present)
