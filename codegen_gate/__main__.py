#!/usr/bin/env python3
"""
Entry point for codegen_gate module.

Usage:
    python -m codegen_gate analyze PATH [--report] [--output FILE] [--threshold 80]
    python -m codegen_gate fix PATH [--write]
    python -m codegen_gate validate --template NAME [--name N] [--params P] ...
"""

import argparse
import sys
from pathlib import Path

from . import QualityGate
from .config import DEFAULT_CONFIG, ConfigError, load_config
from .models import GenerationRequest
from .prevalidate import RequestError, ensure_valid
from .report import average_score, generate_markdown_report, print_summary
from .scoring import score_emoji

DEFAULT_THRESHOLD = 80

# Worst files listed for a directory run
WORST_FILES = 5


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Generated code quality gate')
    parser.add_argument('--config', type=str, help='YAML config file')
    parser.add_argument('--verbose', '-v', action='store_true', help='Verbose output')
    parser.add_argument('--workers', type=int, default=4, help='Parallel workers for directories')
    sub = parser.add_subparsers(dest='command', required=True)

    analyze = sub.add_parser('analyze', help='Analyze a file or directory')
    analyze.add_argument('path', type=str, help='File or directory to analyze')
    analyze.add_argument('--report', action='store_true', help='Generate markdown report')
    analyze.add_argument('--output', type=str, help='Output file for report')
    analyze.add_argument('--threshold', type=int, default=DEFAULT_THRESHOLD, help='Minimum passing score')

    fix = sub.add_parser('fix', help='Auto-fix a file')
    fix.add_argument('path', type=str, help='File to fix')
    fix.add_argument('--write', action='store_true', help='Write the fixed text back')

    validate = sub.add_parser('validate', help='Pre-validate a generation request')
    validate.add_argument('--template', required=True, help='Template name')
    validate.add_argument('--name', help='Function/class name')
    validate.add_argument('--params', help='Parameters as name:type,name:type')
    validate.add_argument('--returns', help='Return type')
    validate.add_argument('--description', help='Human-readable description')
    validate.add_argument('--async', dest='is_async', action='store_true', help='Async function')
    validate.add_argument('--throws', help='Thrown error type')

    return parser


def run_analyze(gate: QualityGate, args) -> int:
    root = Path(args.path).resolve()
    if not root.exists():
        print(f"❌ Path not found: {root}")
        return 1

    results = gate.analyze_path(root, workers=args.workers)
    if not results:
        print("⚠️  No source files found")
        return 0

    if args.report:
        report = generate_markdown_report(results)
        if args.output:
            Path(args.output).write_text(report, encoding='utf-8')
            print(f"\n📄 Report written to: {args.output}")
        else:
            print("\n" + report)
    elif len(results) == 1:
        print_summary(*results[0], config=gate.config)
    else:
        avg = average_score(results)
        print(f"\n{score_emoji(avg)} Average Score: {avg}/100 across {len(results)} files")
        worst = sorted(results, key=lambda item: item[1].score)[:WORST_FILES]
        print("\n🔍 Files needing attention:")
        for label, report in worst:
            print(f"  {score_emoji(report.score)} {label}: {report.score}/100 "
                  f"({len(report.errors)} errors, {len(report.warnings)} warnings)")

    avg = average_score(results)
    if avg >= args.threshold:
        print(f"\n✅ Score {avg} meets threshold ({args.threshold})")
        return 0
    print(f"\n❌ Score {avg} below threshold ({args.threshold})")
    return 1


def run_fix(gate: QualityGate, args) -> int:
    path = Path(args.path)
    try:
        text = path.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        print(f"❌ Not UTF-8 text: {path} ({e.reason})")
        return 1

    before = gate.analyze(text)
    result = gate.fix(text)
    after = gate.analyze(result.text)

    if args.write:
        if result.text != text:
            path.write_text(result.text, encoding='utf-8')
            print(f"🔧 Fixed: {path}")
        else:
            print(f"✅ Nothing to fix: {path}")
    else:
        print(result.text)

    for note in result.notes:
        where = f" (line {note.line})" if note.line else ""
        print(f"   ⏭️  [{note.pass_name}] {note.message}{where}", file=sys.stderr)

    print(f"\n📊 Score: {before.score} → {after.score}", file=sys.stderr)
    return 0 if after.valid else 1


def run_validate(gate: QualityGate, args) -> int:
    request = GenerationRequest(
        template_name=args.template,
        name=args.name,
        params=args.params,
        returns=args.returns,
        description=args.description,
        is_async=args.is_async,
        throws=args.throws,
    )
    ensure_valid(request, gate.config, log=print)
    print("✅ Request is valid")
    return 0


COMMANDS = {
    'analyze': run_analyze,
    'fix': run_fix,
    'validate': run_validate,
}


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config else DEFAULT_CONFIG
        gate = QualityGate(config, verbose=args.verbose)
        return COMMANDS[args.command](gate, args)
    except (RequestError, ConfigError, OSError) as e:
        print(f"❌ {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
