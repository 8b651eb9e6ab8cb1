#!/usr/bin/env python3
"""
Command line tests.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import io

import pytest

from bftape.cli import main


def _write(tmp_path, text):
    path = tmp_path / "prog.bf"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_usage_without_file(capsys):
    assert main([]) == 1
    assert "Please provide an input file" in capsys.readouterr().out


def test_interpret_prints_output_then_memory(tmp_path, capsys, monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"")))
    path = _write(tmp_path, "+++++ +++++[>++++++++<-]>+.")
    assert main([path]) == 0
    out = capsys.readouterr().out
    assert out == "Q\n\nMemory: [0, 81]\n"


def test_generate_to_file(tmp_path, capsys):
    path = _write(tmp_path, "+[-]")
    target = tmp_path / "out.py"
    assert main([path, "--generate", "--target", "python", "-o", str(target)]) == 0
    assert "while cells[p]:" in target.read_text(encoding="utf-8")
    assert capsys.readouterr().out == ""


def test_generate_to_stdout(tmp_path, capsys):
    path = _write(tmp_path, "+.")
    assert main([path, "--generate"]) == 0
    assert "put_cell(cells[p]);" in capsys.readouterr().out


def test_dump_instructions(tmp_path, capsys):
    path = _write(tmp_path, "++[-]")
    assert main([path, "--dump-instructions"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["0: Add(delta=2)", "1: JumpIfZero(target=4)", "2: Add(delta=-1)", "3: JumpIfNonZero(target=2)"]


def test_unmatched_bracket_exits_with_error(tmp_path, capsys):
    path = _write(tmp_path, "+]")
    assert main([path]) == 1
    captured = capsys.readouterr()
    assert "Found a ] before any [" in captured.err
    assert "Memory" not in captured.out


def test_permissive_accepts_unclosed_bracket(tmp_path, capsys, monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"")))
    path = _write(tmp_path, "+[")
    assert main([path]) == 1
    assert main([path, "--permissive"]) == 0
    assert "Memory: [1]" in capsys.readouterr().out


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.bf")]) == 1
    assert "could not read file" in capsys.readouterr().err


def test_negative_max_address_is_rejected(tmp_path, capsys):
    path = _write(tmp_path, "+")
    with pytest.raises(SystemExit) as exc:
        main([path, "--max-address", "-1"])
    assert exc.value.code == 2
    assert "must be >= 0" in capsys.readouterr().err


def test_max_address_reaches_both_backends(tmp_path, capsys, monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"")))
    path = _write(tmp_path, ">>>>>+")
    assert main([path, "--max-address", "2"]) == 0
    assert "Memory: [0, 0, 1]" in capsys.readouterr().out
    assert main([path, "--generate", "--max-address", "2"]) == 0
    assert "#define CELLS 3L" in capsys.readouterr().out
