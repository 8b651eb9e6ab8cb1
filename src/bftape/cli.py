from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

from .api import GenerateOptions, GenerateResult, Mode, RunOptions, parse, process, read_source
from .codegen import DEFAULT_TARGET, TARGETS
from .engine import MAX_ADDRESS
from .errors import BFError
from .instructions import describe

logger = logging.getLogger("bftape")


def _non_negative(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bftape",
        description="Run a Brainfuck program, or translate it to C or Python.",
    )
    parser.add_argument("file", nargs="?", help="source file")
    parser.add_argument("--generate", action="store_true", help="emit a program instead of running")
    parser.add_argument("--target", choices=sorted(TARGETS), default=DEFAULT_TARGET, help="output language for --generate")
    parser.add_argument("-o", "--output", help="write generated code here (default: stdout)")
    parser.add_argument("--permissive", action="store_true", help="accept a [ that is never closed")
    parser.add_argument("--max-address", type=_non_negative, default=MAX_ADDRESS, help="highest tape address (default 100000)")
    parser.add_argument("--dump-instructions", action="store_true", help="print the built instructions and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.file:
        print("Please provide an input file as first argument")
        return 1

    strict = not args.permissive
    mode = Mode.GENERATE if args.generate else Mode.INTERPRET
    try:
        source = read_source(args.file)
        if args.dump_instructions:
            print(describe(parse(source, strict=strict)))
            return 0

        start = time.time()
        result = process(
            source,
            mode,
            run_options=RunOptions(max_address=args.max_address, strict=strict),
            generate_options=GenerateOptions(target=args.target, cells=args.max_address + 1, strict=strict),
        )
        logger.info("%s took %.2f ms", mode.value.capitalize(), (time.time() - start) * 1000)
    except BFError as e:
        print(e, file=sys.stderr)
        return 1

    if isinstance(result, GenerateResult):
        if args.output:
            Path(args.output).write_text(result.code, encoding="utf-8")
        else:
            sys.stdout.write(result.code)
        return 0

    print("")
    print("")
    print(f"Memory: {result.memory}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
