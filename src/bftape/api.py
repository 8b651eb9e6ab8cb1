from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import IO, Any, List, Optional, Union

from .builder import build
from .codegen import DEFAULT_CELLS, DEFAULT_TARGET, generate
from .engine import MAX_ADDRESS, execute
from .errors import SourceReadError, UnmatchedBracketError, make_compile_error
from .instructions import Instruction
from .lexer import token_positions, tokenize

logger = logging.getLogger(__name__)


class Mode(Enum):
    INTERPRET = "interpret"
    GENERATE = "generate"


@dataclass(frozen=True)
class RunOptions:
    max_address: int = MAX_ADDRESS
    strict: bool = True
    max_steps: Optional[int] = None


@dataclass(frozen=True)
class GenerateOptions:
    target: str = DEFAULT_TARGET
    cells: int = DEFAULT_CELLS
    strict: bool = True


@dataclass(frozen=True)
class RunResult:
    memory: List[int]
    pointer: int
    steps: int
    instructions: List[Instruction]


@dataclass(frozen=True)
class GenerateResult:
    code: str
    target: str
    instructions: List[Instruction]


def parse(source: str, *, strict: bool = True) -> List[Instruction]:
    tokens = tokenize(source)
    logger.debug("lexed %d tokens from %d characters", len(tokens), len(source))
    try:
        return build(tokens, strict=strict)
    except UnmatchedBracketError as e:
        positions = token_positions(source)
        line, column = positions[e.index] if e.index < len(positions) else (1, 1)
        raise make_compile_error(error=e, source=source, line=line, column=column) from e


def run_string(
    source: str,
    *,
    options: Optional[RunOptions] = None,
    stdin: Optional[IO[Any]] = None,
    stdout: Optional[IO[str]] = None,
) -> RunResult:
    opts = options or RunOptions()
    instructions = parse(source, strict=opts.strict)
    result = execute(
        instructions,
        stdin=stdin,
        stdout=stdout,
        max_address=opts.max_address,
        max_steps=opts.max_steps,
    )
    return RunResult(memory=result.memory, pointer=result.pointer, steps=result.steps, instructions=instructions)


def generate_string(source: str, *, options: Optional[GenerateOptions] = None) -> GenerateResult:
    opts = options or GenerateOptions()
    instructions = parse(source, strict=opts.strict)
    code = generate(instructions, target=opts.target, cells=opts.cells)
    return GenerateResult(code=code, target=opts.target, instructions=instructions)


def read_source(path: Union[str, Path], *, encoding: str = "utf-8") -> str:
    p = Path(path)
    try:
        return p.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(message=f"could not read file {str(p)!r}: {e}", path=str(p)) from e


def run_file(
    path: Union[str, Path],
    *,
    options: Optional[RunOptions] = None,
    stdin: Optional[IO[Any]] = None,
    stdout: Optional[IO[str]] = None,
    encoding: str = "utf-8",
) -> RunResult:
    return run_string(read_source(path, encoding=encoding), options=options, stdin=stdin, stdout=stdout)


def generate_file(
    path: Union[str, Path],
    *,
    options: Optional[GenerateOptions] = None,
    encoding: str = "utf-8",
) -> GenerateResult:
    return generate_string(read_source(path, encoding=encoding), options=options)


def process(
    source: str,
    mode: Mode,
    *,
    run_options: Optional[RunOptions] = None,
    generate_options: Optional[GenerateOptions] = None,
    stdin: Optional[IO[Any]] = None,
    stdout: Optional[IO[str]] = None,
) -> Union[RunResult, GenerateResult]:
    """Lex and build `source`, then hand it to the interpreter or the code generator."""
    if mode is Mode.INTERPRET:
        return run_string(source, options=run_options, stdin=stdin, stdout=stdout)
    if mode is Mode.GENERATE:
        return generate_string(source, options=generate_options)
    raise ValueError(f"Unknown mode: {mode!r}")
