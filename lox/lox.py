import sys

from lox.errors import LoxResolutionError
from lox.interpreter import Interpreter
from lox.parser import Parser
from lox.resolver import Resolver
from lox.scanner import Scanner

# Every Lox call costs several Python frames, and the default limit of 1000
# would stop ordinary recursive programs after a couple hundred calls.
RECURSION_LIMIT = 20000


class Lox:
    """Runs source units through scanner, parser, resolver and interpreter.

    One `Lox` keeps one interpreter, so globals defined by one `run` are
    visible to the next. `run` returns the errors it hit, in order; an empty
    list means the source ran to completion.
    """

    def __init__(self, output=print):
        if sys.getrecursionlimit() < RECURSION_LIMIT:
            sys.setrecursionlimit(RECURSION_LIMIT)
        self.interpreter = Interpreter(output)

    def run(self, source):
        scanner = Scanner(source)
        tokens = scanner.scan_tokens()

        parser = Parser(tokens)
        statements = parser.parse()

        # Scan errors come first; they are usually the cause of parse errors.
        errors = scanner.errors + parser.errors
        if errors:
            return errors

        resolver = Resolver()
        try:
            depths = resolver.resolve(statements)
        except RecursionError:
            return [LoxResolutionError.at(tokens[-1], "Too much nesting.")]
        if resolver.errors:
            return resolver.errors

        self.interpreter.resolve(depths)
        if error := self.interpreter.interpret(statements):
            return [error]
        return []
