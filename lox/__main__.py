"""Command line front end: run a script, or start a prompt without one."""

import argparse
import sys

from termcolor import colored

from lox.errors import ErrorKind
from lox.lox import Lox

EX_USAGE = 64
EX_DATAERR = 65
EX_SOFTWARE = 70


def format_error(error):
    """Render a pipeline error for the terminal."""
    label = colored(f"{error.kind} error", "red", attrs=["bold"])
    if error.line is None:
        return f"{label}: {error.message}"
    location = colored(f"[line {error.line}]", attrs=["bold"])
    return f"{location} {label}{error.where}: {error.message}"


def report(errors):
    for error in errors:
        print(format_error(error), file=sys.stderr)


def exit_status(errors):
    if not errors:
        return 0
    if any(error.kind == ErrorKind.RUNTIME for error in errors):
        return EX_SOFTWARE
    return EX_DATAERR


def run_file(filename):
    try:
        with open(filename, "r") as file:
            source = file.read()
    except OSError as error:
        print(colored(f"could not open '{filename}': {error.strerror}", "red"), file=sys.stderr)
        return EX_USAGE
    errors = Lox().run(source)
    report(errors)
    return exit_status(errors)


def run_prompt():
    lox = Lox()
    while True:
        try:
            line = input("> ")
        except EOFError:
            print()
            break
        # Errors are reported and forgotten; the session keeps its globals.
        report(lox.run(line))
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="pylox", description="Run Lox scripts")
    parser.add_argument("script", nargs="?")
    args = parser.parse_args(argv)

    if args.script is not None:
        return run_file(args.script)
    return run_prompt()


if __name__ == "__main__":
    sys.exit(main())
