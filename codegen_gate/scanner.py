"""
File scanner for the command line.
Finds TypeScript/JavaScript sources under a path.
"""

from pathlib import Path
from typing import Callable, List

from .models import SourceFile

ANALYZE_EXTENSIONS = {'.ts', '.tsx', '.js', '.jsx'}

IGNORE_DIRS = {'node_modules', 'dist', 'build', '.git', 'coverage'}


def should_ignore(path: Path) -> bool:
    """Check if path lies in an ignored directory."""
    return any(part in IGNORE_DIRS for part in path.parts)


def read_content(path: Path, log: Callable[[str], None] = lambda x: None) -> str:
    """Read file content, empty on decoding or OS errors."""
    try:
        return path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        log(f"Unreadable: {path} ({e})")
        return ""


def scan_files(root: Path, log: Callable[[str], None] = lambda x: None) -> List[SourceFile]:
    """Scan all analyzable files under root (or root itself if it is a file)."""
    if root.is_file():
        return [SourceFile(path=root, content=read_content(root, log))]

    files = []
    for path in sorted(root.rglob('*')):
        if path.is_file() and path.suffix in ANALYZE_EXTENSIONS:
            if should_ignore(path.relative_to(root)):
                continue
            files.append(SourceFile(path=path, content=read_content(path, log)))
            log(f"Scanned: {path}")

    return files
