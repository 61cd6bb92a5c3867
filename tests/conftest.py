"""
Shared sources and helpers for the quality gate tests.

Sources are plain TypeScript snippets; helpers build larger inputs.
"""

from codegen_gate import DEFAULT_CONFIG, analyze

# ============================================
# Sample sources
# ============================================

CLEAN_SOURCE = """const total = 1;
let label = 'ready';
"""

ANY_SCENARIO = "export function f(data: any): any { return data; }"

GUARDED_FUNCTION = """function guarded(input: string): string {
  if (!input) {
    throw new Error('missing');
  }
  return input.trim();
}
"""

BRANCHY_FUNCTION = """function branchy(a, b) {
  if (a && b) {
    return 1;
  }
  for (const x of b) {
    while (x) {
      break;
    }
  }
  return a || b;
}
"""

NESTED_FUNCTIONS = """function outer() {
  const inner = () => {
    return 1;
  };
  return inner();
}
"""

KITCHEN_SINK = """import { z } from 'zod';
import fs from 'fs';
import { helper } from './helper';

export function process(result: any, user: any, a: number, b: number, c: number) {
  console.log('processing');
  if (result.isOk) {
    return result.data;
  }
  const name = user.profile.name;
  return user.settings.theme;
}

export const handler = (cb: Function) => cb;
"""


# ============================================
# Builders
# ============================================

def long_function(name: str = 'bigOne', body_lines: int = 18) -> str:
    """A function with distinct one-call body lines and no guard clause."""
    lines = [f"function {name}() {{"]
    lines.extend(f"  step{i}();" for i in range(body_lines))
    lines.append("}")
    return '\n'.join(lines) + '\n'


def numbered_constants(count: int, start: int = 0) -> str:
    """``count`` distinct constant declarations, one per line."""
    return '\n'.join(f"const v{i} = {i};" for i in range(start, start + count)) + '\n'


def rule_ids(text: str, config=DEFAULT_CONFIG) -> list:
    return [v.rule_id for v in analyze(text, config).violations]
