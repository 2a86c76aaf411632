"""Merge coverage profile files found under a directory into one file."""

from __future__ import annotations

import os
import re
import sys
from pathlib import Path
from typing import Iterator, Sequence

USAGE = (
    "Usage: coverage [root] [out]\n\n"
    "Collects all .coverprofile files rooted in [root] and concatenantes them "
    "into a single file at [out].\n"
    "[root] defaults to the current directory, [out] to 'coverage.out'."
)

_INT = re.compile(r"[+-]?[0-9]+")


class CoverageError(Exception):
    """Raised when a profile cannot be read or parsed."""


def _walk(path: Path) -> Iterator[Path]:
    """Yield path and everything below it in lexical order, not following links."""
    yield path
    if path.is_dir() and not path.is_symlink():
        for entry in sorted(os.scandir(path), key=lambda e: e.name):
            yield from _walk(Path(entry.path))


def _parse_int(text: str, what: str, line: str) -> int:
    if not _INT.fullmatch(text):
        raise CoverageError(f"incorrect {what} in coverprofile line: {line}")
    return int(text)


def merge_profiles(root: str | os.PathLike, out: str | os.PathLike) -> list[str]:
    """Merge every .coverprofile under root into out and return the written lines.

    Counts of the same block are summed; the statement count of the first
    occurrence is kept. The file at out itself is skipped.
    """
    out_abs = Path(out).resolve()
    coverage: dict[str, tuple[int, int]] = {}

    for path in _walk(Path(root)):
        if path.suffix != ".coverprofile" or path.resolve() == out_abs:
            continue
        try:
            text = path.read_text()
        except OSError as exc:
            raise CoverageError(f"could not read {path}: {exc}") from exc
        for line in text.splitlines():
            if line.startswith("mode:"):
                continue
            parts = line.split(" ")
            if len(parts) != 3:
                raise CoverageError(f"incorrect coverprofile line: {line}")
            block, stmt_text, count_text = parts
            num_stmt = _parse_int(stmt_text, "num stmt", line)
            count = _parse_int(count_text, "count", line)
            if block in coverage:
                first_stmt, total = coverage[block]
                coverage[block] = (first_stmt, total + count)
            else:
                coverage[block] = (num_stmt, count)

    lines = sorted(f"{block} {stmt} {count}" for block, (stmt, count) in coverage.items())
    try:
        Path(out).write_text("\n".join(lines))
    except OSError as exc:
        raise CoverageError(f"could not write to out: {exc}") from exc
    return lines


def main(argv: Sequence[str] | None = None) -> int:
    """Command entry point; returns the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) == 1:
        root, out = args[0], "coverage.out"
    elif len(args) == 2:
        root, out = args
    else:
        print(USAGE)
        return 1

    try:
        merge_profiles(root, out)
    except CoverageError as exc:
        print(f"coverage: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())