from __future__ import annotations

from dataclasses import dataclass
from typing import List, Union


@dataclass(frozen=True)
class Shift:
    delta: int  # net >/<


@dataclass(frozen=True)
class Add:
    delta: int  # net +/- on current cell


@dataclass(frozen=True)
class Output:
    pass


@dataclass(frozen=True)
class Input:
    pass


@dataclass(frozen=True)
class JumpIfZero:
    target: int  # matching JumpIfNonZero index + 1


@dataclass(frozen=True)
class JumpIfNonZero:
    target: int  # matching JumpIfZero index + 1


Instruction = Union[Shift, Add, Output, Input, JumpIfZero, JumpIfNonZero]


def describe(instructions: List[Instruction]) -> str:
    """One instruction per line, prefixed by its index."""
    width = len(str(max(len(instructions) - 1, 0)))
    return "\n".join(f"{i:{width}d}: {ins!r}" for i, ins in enumerate(instructions))
