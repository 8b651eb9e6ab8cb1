
from .api import (
    GenerateOptions,
    GenerateResult,
    Mode,
    RunOptions,
    RunResult,
    generate_file,
    generate_string,
    parse,
    process,
    run_file,
    run_string,
)
from .builder import build
from .codegen import generate
from .engine import MAX_ADDRESS, Tape, execute
from .errors import (
    BFCompileError,
    BFError,
    SourceReadError,
    StepLimitExceeded,
    UnknownTargetError,
    UnmatchedBracketError,
)
from .instructions import Add, Input, Instruction, JumpIfNonZero, JumpIfZero, Output, Shift
from .lexer import Token, tokenize

__all__ = [
    'Token',
    'tokenize',
    'build',
    'execute',
    'generate',
    'Tape',
    'MAX_ADDRESS',
    'Instruction',
    'Shift',
    'Add',
    'Output',
    'Input',
    'JumpIfZero',
    'JumpIfNonZero',
    'BFError',
    'BFCompileError',
    'UnmatchedBracketError',
    'SourceReadError',
    'UnknownTargetError',
    'StepLimitExceeded',
    'Mode',
    'RunOptions',
    'RunResult',
    'GenerateOptions',
    'GenerateResult',
    'parse',
    'run_string',
    'run_file',
    'generate_string',
    'generate_file',
    'process',
]
