from __future__ import annotations

from enum import Enum
from typing import Dict, List, Tuple


class Token(Enum):
    SHIFT_RIGHT = '>'
    SHIFT_LEFT = '<'
    INCREMENT = '+'
    DECREMENT = '-'
    OUTPUT = '.'
    INPUT = ','
    LEFT_JUMP = '['
    RIGHT_JUMP = ']'


_CHAR_TO_TOKEN: Dict[str, Token] = {t.value: t for t in Token}


def is_code_char(ch: str) -> bool:
    return ch in _CHAR_TO_TOKEN


def tokenize(source: str) -> List[Token]:
    # Everything that is not one of the eight commands is a comment.
    return [_CHAR_TO_TOKEN[ch] for ch in source if ch in _CHAR_TO_TOKEN]


def token_positions(source: str) -> List[Tuple[int, int]]:
    """(line, column) of every recognized character, 1-based, aligned with tokenize()."""
    out: List[Tuple[int, int]] = []
    line = 1
    col = 1
    for ch in source:
        if ch in _CHAR_TO_TOKEN:
            out.append((line, col))
        if ch == '\n':
            line += 1
            col = 1
        else:
            col += 1
    return out
