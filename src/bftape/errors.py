from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


def _build_context(lines: List[str], line_no_1: int, *, context: int = 2) -> str:
    idx = max(1, line_no_1)
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
    return "\n".join(out)


def _hint_for(kind: str) -> Optional[str]:
    if kind == ']':
        return 'Remove the extra "]" or add the "[" that should open this loop.'
    if kind == '[':
        return 'Every "[" needs a matching "]"; check the end of the program.'
    return None


@dataclass
class BFError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class UnmatchedBracketError(BFError):
    index: int
    kind: str


@dataclass
class BFCompileError(BFError):
    line: int
    column: int
    context: str


@dataclass
class SourceReadError(BFError):
    path: str


@dataclass
class UnknownTargetError(BFError):
    target: str


@dataclass
class StepLimitExceeded(BFError):
    steps: int


def unmatched_bracket(*, index: int, kind: str) -> UnmatchedBracketError:
    if kind == ']':
        message = f"Found a ] before any [ (at index {index})"
    else:
        message = f"Unclosed [ at end of program (at index {index})"
    return UnmatchedBracketError(message=message, index=index, kind=kind)


def make_compile_error(*, error: UnmatchedBracketError, source: str, line: int, column: int) -> BFCompileError:
    lines = source.split('\n')
    ctx = _build_context(lines, line)
    hint = _hint_for(error.kind)
    hint_block = f"\nHint: {hint}" if hint else ""
    return BFCompileError(
        message=f"CompileError: {error.message} (line {line}, column {column})\n{ctx}{hint_block}",
        line=line,
        column=column,
        context=ctx,
    )
