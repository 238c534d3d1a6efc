from __future__ import annotations

from .api import execute_line, parse_and_evaluate, parse_file, parse_source, run_file, run_source
from .dump import dump_program
from .errors import ErrorKind, SlpyError
from .interpreter import Context, evaluate
from .lexer import tokenize
from .parser import parse

__all__ = [
    "Context",
    "ErrorKind",
    "SlpyError",
    "dump_program",
    "evaluate",
    "execute_line",
    "parse",
    "parse_and_evaluate",
    "parse_file",
    "parse_source",
    "run_file",
    "run_source",
    "tokenize",
]
