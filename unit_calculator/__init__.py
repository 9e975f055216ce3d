"""The main module for Unit Calculator."""

import argparse
import logging
import sys
from contextlib import suppress
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from .errors import UnitCalculatorError
from .interpreter import Interpreter
from .latex import render_evaluation, to_latex

with suppress(PackageNotFoundError):
    __version__ = version("unit-calculator")


def _run_program(text: str, name: str, show_variables: bool) -> bool:
    """Run one program and print its output; return whether it succeeded."""
    interpreter = Interpreter()
    try:
        for evaluation in interpreter.run(text):
            print(render_evaluation(evaluation))
    except UnitCalculatorError as exc:
        print(f"{name}: {exc}", file=sys.stderr)
        return False
    if show_variables:
        print("Variables:")
        for key, val in interpreter.variables.items():
            print(f"{key} = {to_latex(val)}")
    return True


def run() -> None:
    """Run the calculator on provided filenames, or on standard input."""
    parser = argparse.ArgumentParser(
        description="Unit Calculator: Evaluate arithmetic with physical units."
    )
    parser.add_argument(
        "files",
        metavar="file",
        nargs="*",
        help="Program files to evaluate (standard input when omitted)",
    )
    parser.add_argument(
        "-v",
        "--show-variables",
        action="store_true",
        help="Show the value of every declared variable",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log parsing and evaluation details",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.files:
        paths = [Path(path_str) for path_str in args.files]
        if missing := [str(path) for path in paths if not path.is_file()]:
            parser.error(f"file not found: {', '.join(missing)}")
        programs = [(str(path), path.read_text()) for path in paths]
    else:
        programs = [("<stdin>", sys.stdin.read())]

    results = [
        _run_program(text, name, args.show_variables) for name, text in programs
    ]
    if not all(results):
        sys.exit(1)
