#!/usr/bin/env python3
"""
End-to-end tests through the public API.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import io

import pytest

from bftape import (
    BFCompileError,
    GenerateOptions,
    GenerateResult,
    Mode,
    RunOptions,
    RunResult,
    SourceReadError,
    UnmatchedBracketError,
    generate_file,
    generate_string,
    parse,
    process,
    run_file,
    run_string,
)
from bftape.instructions import Add, Output


def test_parse_merges_and_ignores_comments():
    assert parse("inc: +++ print: .") == [Add(3), Output()]


def test_run_string_reports_memory_and_output():
    out = io.StringIO()
    result = run_string("+++++ +++++[>++++++++<-]>+.", stdin=io.BytesIO(), stdout=out)
    assert out.getvalue() == "Q"
    assert result.memory == [0, 81]
    assert result.pointer == 1
    assert result.steps > 0
    assert result.instructions[0] == Add(10)


def test_compile_error_points_at_source_line():
    source = "+++\n++ ]\n+"
    with pytest.raises(BFCompileError) as exc:
        parse(source)
    err = exc.value
    assert err.line == 2
    assert err.column == 4
    assert "> " in err.context and "2 | ++ ]" in err.context
    assert "Hint:" in str(err)
    assert isinstance(err.__cause__, UnmatchedBracketError)


def test_unclosed_bracket_strict_and_permissive():
    with pytest.raises(BFCompileError) as exc:
        run_string("+\n[", stdin=io.BytesIO(), stdout=io.StringIO())
    assert exc.value.line == 2

    result = run_string("+[", options=RunOptions(strict=False), stdin=io.BytesIO(), stdout=io.StringIO())
    # the unpaired guard sees a non-zero cell, falls through and the run ends
    assert result.memory == [1]


def test_run_options_max_address():
    result = run_string(">" * 10 + "+", options=RunOptions(max_address=3), stdin=io.BytesIO(), stdout=io.StringIO())
    assert result.pointer == 3
    assert result.memory == [0, 0, 0, 1]


def test_generate_string_uses_options():
    result = generate_string("+.", options=GenerateOptions(target="python", cells=16))
    assert result.target == "python"
    assert "CELLS = 16" in result.code
    assert result.instructions == [Add(1), Output()]


def test_generate_string_rejects_unbalanced_source():
    with pytest.raises(BFCompileError):
        generate_string("]")


def test_files(tmp_path):
    src = tmp_path / "prog.bf"
    src.write_text("comment ++>+++++[<+>-]", encoding="utf-8")
    result = run_file(src, stdin=io.BytesIO(), stdout=io.StringIO())
    assert result.memory == [7, 0]
    assert "while (cells[p])" in generate_file(str(src)).code


def test_missing_file_is_a_read_error(tmp_path):
    missing = tmp_path / "nope.bf"
    with pytest.raises(SourceReadError) as exc:
        run_file(missing)
    assert exc.value.path == str(missing)


def test_process_selects_backend():
    run = process("+++", Mode.INTERPRET, stdin=io.BytesIO(), stdout=io.StringIO())
    assert isinstance(run, RunResult)
    assert run.memory == [3]

    gen = process("+++", Mode.GENERATE, generate_options=GenerateOptions(target="c"))
    assert isinstance(gen, GenerateResult)
    assert "cells[p] += 3;" in gen.code


def test_process_rejects_unknown_mode():
    with pytest.raises(ValueError):
        process("+", "interpret")


def test_permissive_unclosed_bracket_with_zero_cell():
    options = RunOptions(strict=False, max_steps=10000)
    result = run_string("[+", options=options, stdin=io.BytesIO(), stdout=io.StringIO())
    assert result.memory == [1]
