from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .api import execute_line, parse_file, run_file
from .dump import dump_program
from .errors import SlpyError
from .interpreter import Context


logger = logging.getLogger(__name__)

PROMPT = ">>> "


def repl(ctx: Context | None = None, *, stdin=None, stdout=None, stderr=None) -> int:
    """Read-eval-print loop over one long-lived context.

    A failing line is reported and dropped; end of input ends the session.
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    if ctx is None:
        ctx = Context(output=stdout, input=stdin)

    while True:
        stdout.write(PROMPT)
        stdout.flush()
        line = stdin.readline()
        if not line:
            stdout.write("\n")
            return 0
        try:
            value = execute_line(line, ctx)
        except SlpyError as e:
            print(e, file=stderr)
            continue
        if value is not None:
            print(value, file=stdout)


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="slpy", description="The slpy programming language")
    ap.add_argument("file", nargs="?", help="Program to run; starts a REPL when omitted")
    ap.add_argument("--dump", action="store_true", help="Print the parsed AST instead of running it")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.file is None:
        if args.dump:
            ap.error("--dump needs a file")
        return repl()

    path = Path(args.file)
    try:
        if args.dump:
            print(dump_program(parse_file(path)), end="")
        else:
            logger.debug("running %s", path)
            run_file(path)
    except SlpyError as e:
        print(e.format(str(path)), file=sys.stderr)
        return 1
    except OSError as e:
        print(f"slpy: cannot read {path}: {e.strerror}", file=sys.stderr)
        return 1
    return 0
