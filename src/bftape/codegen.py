from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple, Type

from .engine import MAX_ADDRESS
from .errors import UnknownTargetError, unmatched_bracket
from .instructions import Add, Input, Instruction, JumpIfNonZero, JumpIfZero, Output, Shift

logger = logging.getLogger(__name__)

DEFAULT_TARGET = "c"
DEFAULT_CELLS = MAX_ADDRESS + 1


def _signed(op: str, delta: int) -> str:
    # "p + 3" / "p - 3" instead of "p + -3"
    return f"{op} {'+' if delta > 0 else '-'} {abs(delta)}"


class Emitter(ABC):
    """
    Writes one target's program text.

    Loops nest by an explicit depth count. Once a function already holds
    `max_inline_loops` open loops, the next loop is moved into a helper
    function that takes and returns the pointer, so deep nesting never runs
    into the target's block limits. Helpers are emitted before `main`, inner
    ones first.
    """

    indent_unit = "    "
    max_inline_loops = 8
    helper_gap = 1

    def __init__(self, cells: int) -> None:
        if cells < 1:
            raise ValueError("cells must be >= 1")
        self.cells = cells
        self.lines: List[str] = []
        self.depth = 1
        self.helpers: List[List[str]] = []
        self._loops: List[Tuple[int, Optional[str]]] = []  # (body start, helper name)
        self._frames: List[Tuple[List[str], int, int]] = []  # suspended (lines, depth, inline)
        self._inline = 0
        self._helper_count = 0

    def line(self, text: str) -> None:
        self.lines.append(self.indent_unit * self.depth + text if text else "")

    def emit(self, instructions: Sequence[Instruction]) -> str:
        for index, ins in enumerate(instructions):
            if isinstance(ins, Shift):
                if ins.delta:
                    self.shift(ins.delta)
            elif isinstance(ins, Add):
                if ins.delta:
                    self.add(ins.delta)
            elif isinstance(ins, Output):
                self.output()
            elif isinstance(ins, Input):
                self.input()
            elif isinstance(ins, JumpIfZero):
                self._open_loop()
            elif isinstance(ins, JumpIfNonZero):
                if not self._loops:
                    raise unmatched_bracket(index=index, kind=']')
                self._close_loop()
            else:
                raise TypeError(f"Unknown instruction: {ins!r}")
        if self._loops:
            raise unmatched_bracket(index=len(instructions), kind='[')

        out = self.preamble()
        for helper in self.helpers:
            out.extend(helper)
            out.extend([""] * self.helper_gap)
        out.extend(self.main_function(self.lines))
        return "\n".join(out) + "\n"

    def _open_loop(self) -> None:
        name = None
        if self._inline >= self.max_inline_loops:
            self._helper_count += 1
            name = f"_loop{self._helper_count}"
            self._frames.append((self.lines, self.depth, self._inline))
            self.lines = self.helper_header(name)
            self.depth = 1
            self._inline = 0
        self.open_loop()
        self._loops.append((len(self.lines), name))
        self.depth += 1
        self._inline += 1

    def _close_loop(self) -> None:
        start, name = self._loops.pop()
        self.depth -= 1
        self._inline -= 1
        self.close_loop(empty=len(self.lines) == start)
        if name is not None:
            self.helpers.append(self.lines + self.helper_footer())
            self.lines, self.depth, self._inline = self._frames.pop()
            self.call_helper(name)

    @abstractmethod
    def preamble(self) -> List[str]:
        ...

    @abstractmethod
    def main_function(self, body: List[str]) -> List[str]:
        ...

    @abstractmethod
    def helper_header(self, name: str) -> List[str]:
        ...

    @abstractmethod
    def helper_footer(self) -> List[str]:
        ...

    @abstractmethod
    def call_helper(self, name: str) -> None:
        ...

    @abstractmethod
    def shift(self, delta: int) -> None:
        ...

    @abstractmethod
    def add(self, delta: int) -> None:
        ...

    @abstractmethod
    def output(self) -> None:
        ...

    @abstractmethod
    def input(self) -> None:
        ...

    @abstractmethod
    def open_loop(self) -> None:
        ...

    @abstractmethod
    def close_loop(self, *, empty: bool) -> None:
        ...


class CEmitter(Emitter):
    def preamble(self) -> List[str]:
        return [
            "#include <stdio.h>",
            "",
            f"#define CELLS {self.cells}L",
            "",
            "static long long cells[CELLS];",
            "",
            "static long clamp(long p)",
            "{",
            "    return p < 0 ? 0 : (p > CELLS - 1 ? CELLS - 1 : p);",
            "}",
            "",
            # low byte as one character, UTF-8 encoded like the interpreter's text output
            "static void put_cell(long long v)",
            "{",
            "    unsigned char b = (unsigned char)v;",
            "    if (b < 0x80) {",
            "        putchar(b);",
            "    } else {",
            "        putchar(0xC0 | (b >> 6));",
            "        putchar(0x80 | (b & 0x3F));",
            "    }",
            "}",
            "",
        ]

    def main_function(self, body: List[str]) -> List[str]:
        return [
            "int main(void)",
            "{",
            "    long p = 0;",
            "    int c;",
            "",
            *body,
            "    (void)c;",
            "    return 0;",
            "}",
        ]

    def helper_header(self, name: str) -> List[str]:
        return [f"static long {name}(long p)", "{", "    int c;", ""]

    def helper_footer(self) -> List[str]:
        return ["    (void)c;", "    return p;", "}"]

    def call_helper(self, name: str) -> None:
        self.line(f"p = {name}(p);")

    def shift(self, delta: int) -> None:
        self.line(f"p = clamp({_signed('p', delta)});")

    def add(self, delta: int) -> None:
        self.line(f"cells[p] {'+' if delta > 0 else '-'}= {abs(delta)};")

    def output(self) -> None:
        self.line("put_cell(cells[p]);")

    def input(self) -> None:
        self.line("if ((c = getchar()) != EOF) cells[p] = c;")

    def open_loop(self) -> None:
        self.line("while (cells[p]) {")

    def close_loop(self, *, empty: bool) -> None:
        self.line("}")


class PythonEmitter(Emitter):
    helper_gap = 2

    def preamble(self) -> List[str]:
        return ["import sys", "", f"CELLS = {self.cells}", "", ""]

    def main_function(self, body: List[str]) -> List[str]:
        return [
            "def main(stdin=None, stdout=None):",
            "    if stdin is None:",
            "        stdin = sys.stdin.buffer",
            "    if stdout is None:",
            "        stdout = sys.stdout",
            "    cells = [0] * CELLS",
            "    p = 0",
            *body,
            "    stdout.flush()",
            "    return cells",
            "",
            "",
            'if __name__ == "__main__":',
            "    main()",
        ]

    def helper_header(self, name: str) -> List[str]:
        return [f"def {name}(cells, p, stdin, stdout):"]

    def helper_footer(self) -> List[str]:
        return ["    return p"]

    def call_helper(self, name: str) -> None:
        self.line(f"p = {name}(cells, p, stdin, stdout)")

    def shift(self, delta: int) -> None:
        self.line(f"p = min(max({_signed('p', delta)}, 0), CELLS - 1)")

    def add(self, delta: int) -> None:
        self.line(f"cells[p] {'+' if delta > 0 else '-'}= {abs(delta)}")

    def output(self) -> None:
        self.line("stdout.write(chr(cells[p] & 0xFF))")

    def input(self) -> None:
        self.line("data = stdin.read(1)")
        self.line("if data:")
        self.line("    cells[p] = data[0] if isinstance(data, bytes) else ord(data) & 0xFF")

    def open_loop(self) -> None:
        self.line("while cells[p]:")

    def close_loop(self, *, empty: bool) -> None:
        if empty:
            self.depth += 1
            self.line("pass")
            self.depth -= 1


TARGETS: Dict[str, Type[Emitter]] = {
    "c": CEmitter,
    "python": PythonEmitter,
}


def generate(instructions: Sequence[Instruction], *, target: str = DEFAULT_TARGET, cells: int = DEFAULT_CELLS) -> str:
    """
    Lower resolved instructions into a standalone program for `target`.

    The program uses a fixed array of `cells` cells and clamps the pointer to
    it, so with the default size it behaves like engine.execute(). Output
    writes each cell's low byte as one character, UTF-8 encoded.
    """
    emitter_cls = TARGETS.get(target)
    if emitter_cls is None:
        raise UnknownTargetError(
            message=f"Unknown target {target!r} (expected one of: {', '.join(sorted(TARGETS))})",
            target=target,
        )
    text = emitter_cls(cells).emit(instructions)
    logger.debug("generated %d lines of %s", text.count("\n"), target)
    return text
