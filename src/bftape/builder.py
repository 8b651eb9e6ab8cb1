from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .errors import unmatched_bracket
from .instructions import Add, Input, Instruction, JumpIfNonZero, JumpIfZero, Output, Shift
from .lexer import Token

logger = logging.getLogger(__name__)


def token_to_instruction(token: Token) -> Instruction:
    if token is Token.SHIFT_RIGHT:
        return Shift(1)
    if token is Token.SHIFT_LEFT:
        return Shift(-1)
    if token is Token.INCREMENT:
        return Add(1)
    if token is Token.DECREMENT:
        return Add(-1)
    if token is Token.OUTPUT:
        return Output()
    if token is Token.INPUT:
        return Input()
    if token is Token.LEFT_JUMP:
        return JumpIfZero(0)  # placeholder until the matching ] is seen
    if token is Token.RIGHT_JUMP:
        return JumpIfNonZero(0)
    raise TypeError(f"Unknown token: {token!r}")


def merge(instruction: Instruction, token: Token) -> Optional[Instruction]:
    """Fold `token` into `instruction` if they are the same run, else None."""
    if isinstance(instruction, Shift):
        if token is Token.SHIFT_RIGHT:
            return Shift(instruction.delta + 1)
        if token is Token.SHIFT_LEFT:
            return Shift(instruction.delta - 1)
    elif isinstance(instruction, Add):
        if token is Token.INCREMENT:
            return Add(instruction.delta + 1)
        if token is Token.DECREMENT:
            return Add(instruction.delta - 1)
    return None


def build(tokens: Iterable[Token], *, strict: bool = True) -> List[Instruction]:
    """
    Turn a token stream into instructions.

    Runs of >/< and +/- collapse into a single Shift/Add. Brackets are matched
    with an explicit stack and rewritten into a JumpIfZero/JumpIfNonZero pair,
    each targeting the instruction right after its partner.

    A ] with nothing to close always raises UnmatchedBracketError. A [ left open
    at the end raises too unless `strict` is False, in which case it becomes
    JumpIfZero(1): a zero cell there sends control to instruction 1.
    """
    res: List[Instruction] = []
    pending: List[int] = []  # indices of open JumpIfZero
    token_idx_of_open: List[int] = []
    merged = 0

    for token_idx, token in enumerate(tokens):
        if res:
            folded = merge(res[-1], token)
            if folded is not None:
                res[-1] = folded
                merged += 1
                continue

        new_index = len(res)
        ins = token_to_instruction(token)
        if token is Token.LEFT_JUMP:
            pending.append(new_index)
            token_idx_of_open.append(token_idx)
        elif token is Token.RIGHT_JUMP:
            if not pending:
                raise unmatched_bracket(index=token_idx, kind=']')
            open_index = pending.pop()
            token_idx_of_open.pop()
            ins = JumpIfNonZero(open_index + 1)
            res[open_index] = JumpIfZero(new_index + 1)
        res.append(ins)

    if pending:
        if strict:
            raise unmatched_bracket(index=token_idx_of_open[-1], kind='[')
        # an unpaired guard jumps to instruction 1, never back to 0
        for open_index in pending:
            res[open_index] = JumpIfZero(1)
        logger.warning("%d unclosed [ left as JumpIfZero(1)", len(pending))

    logger.debug("built %d instructions (%d tokens merged)", len(res), merged)
    return res
