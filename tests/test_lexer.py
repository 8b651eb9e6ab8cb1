#!/usr/bin/env python3
"""
Lexer tests: the eight commands map to tokens, everything else is dropped.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

from bftape.lexer import Token, is_code_char, token_positions, tokenize


def test_every_command_maps_to_a_token():
    assert tokenize("><+-.,[]") == [
        Token.SHIFT_RIGHT,
        Token.SHIFT_LEFT,
        Token.INCREMENT,
        Token.DECREMENT,
        Token.OUTPUT,
        Token.INPUT,
        Token.LEFT_JUMP,
        Token.RIGHT_JUMP,
    ]


def test_comments_are_skipped():
    assert tokenize("add one: + then print it . ünïcödé ✓") == [Token.INCREMENT, Token.OUTPUT]
    assert tokenize("no commands here") == []
    assert tokenize("") == []


def test_is_code_char():
    assert is_code_char("[")
    assert not is_code_char("a")


def test_positions_follow_lines_and_columns():
    source = "+ a\n  [\n]"
    assert len(token_positions(source)) == len(tokenize(source))
    assert token_positions(source) == [(1, 1), (2, 3), (3, 1)]
