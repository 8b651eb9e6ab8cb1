from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import IO, Any, List, Optional, Sequence

from .errors import StepLimitExceeded
from .instructions import Add, Input, Instruction, JumpIfNonZero, JumpIfZero, Output, Shift

logger = logging.getLogger(__name__)

MAX_ADDRESS = 100000


class Tape:
    """Zero-filled cells that grow to the right as the pointer reaches them."""

    def __init__(self, max_address: int = MAX_ADDRESS) -> None:
        if max_address < 0:
            raise ValueError("max_address must be >= 0")
        self.cells: List[int] = []
        self.pointer = 0
        self.max_address = max_address

    def grow_to(self, address: int) -> None:
        missing = address + 1 - len(self.cells)
        if missing > 0:
            self.cells.extend([0] * missing)

    def shift(self, delta: int) -> None:
        self.pointer = min(max(self.pointer + delta, 0), self.max_address)

    @property
    def current(self) -> int:
        return self.cells[self.pointer]

    @current.setter
    def current(self, value: int) -> None:
        self.cells[self.pointer] = value

    def __getitem__(self, address: int) -> int:
        return self.cells[address]

    def __len__(self) -> int:
        return len(self.cells)

    def dump(self) -> List[int]:
        return list(self.cells)


@dataclass(frozen=True)
class ExecutionResult:
    memory: List[int]
    pointer: int
    steps: int


def _read_byte(stream: IO[Any]) -> Optional[int]:
    data = stream.read(1)
    if not data:
        return None
    if isinstance(data, (bytes, bytearray)):
        return data[0]
    return ord(data) & 0xFF


def execute(
    instructions: Sequence[Instruction],
    *,
    stdin: Optional[IO[Any]] = None,
    stdout: Optional[IO[str]] = None,
    max_address: int = MAX_ADDRESS,
    max_steps: Optional[int] = None,
) -> ExecutionResult:
    """
    Run resolved instructions until control falls off the end.

    Cells hold unbounded ints; only Output truncates to 8 bits. The pointer is
    clamped to [0, max_address]. Input reads one byte from `stdin` (bytes or
    text stream, default sys.stdin.buffer) and leaves the cell alone at EOF.
    `max_steps` is off by default: a program that never ends runs forever.
    """
    if stdin is None:
        stdin = sys.stdin.buffer
    if stdout is None:
        stdout = sys.stdout

    tape = Tape(max_address)
    length = len(instructions)
    i = 0
    steps = 0
    while i < length:
        if max_steps is not None and steps >= max_steps:
            raise StepLimitExceeded(message=f"Step limit of {max_steps} exceeded", steps=steps)
        steps += 1
        tape.grow_to(tape.pointer)
        ins = instructions[i]
        i += 1

        if isinstance(ins, Shift):
            tape.shift(ins.delta)
        elif isinstance(ins, Add):
            tape.current += ins.delta
        elif isinstance(ins, Output):
            stdout.write(chr(tape.current & 0xFF))
            stdout.flush()
        elif isinstance(ins, Input):
            value = _read_byte(stdin)
            if value is not None:
                tape.current = value
        elif isinstance(ins, JumpIfZero):
            if tape.current == 0:
                i = ins.target
        elif isinstance(ins, JumpIfNonZero):
            if tape.current != 0:
                i = ins.target
        else:
            raise TypeError(f"Unknown instruction: {ins!r}")

    logger.debug("ran %d steps, pointer=%d, tape length=%d", steps, tape.pointer, len(tape))
    return ExecutionResult(memory=tape.dump(), pointer=tape.pointer, steps=steps)
