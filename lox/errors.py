"""Error values produced by each stage of the pipeline.

Static errors (scan, syntax, resolution) are collected by the stage that finds
them and handed back to the caller as a list. Runtime errors abort execution
and are handed back one at a time. Nothing in here prints.
"""

import enum

from lox.tokens import TokenType


class ErrorKind(enum.Enum):
    SCAN = "scan"
    SYNTAX = "syntax"
    RESOLUTION = "resolution"
    RUNTIME = "runtime"

    def __str__(self):
        return self.value


class LoxError(Exception):
    kind = None

    def __init__(self, line, message, where=""):
        super().__init__(message)
        self.line = line
        self.message = message
        self.where = where

    @classmethod
    def at(cls, token, message):
        """Build an error located at a token, the way the parser reports it."""
        if token.type == TokenType.EOF:
            return cls(token.line, message, " at end")
        return cls(token.line, message, f" at '{token.lexeme}'")

    def __str__(self):
        return f"[line {self.line}] Error{self.where}: {self.message}"

    def __repr__(self):
        return f"{self.__class__.__name__}({self.line!r}, {self.message!r}, {self.where!r})"

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return NotImplemented
        return (self.line, self.message, self.where) == (other.line, other.message, other.where)

    __hash__ = Exception.__hash__


class LoxScanError(LoxError):
    kind = ErrorKind.SCAN


class LoxSyntaxError(LoxError):
    kind = ErrorKind.SYNTAX


class LoxResolutionError(LoxError):
    kind = ErrorKind.RESOLUTION


class LoxRuntimeError(LoxError):
    kind = ErrorKind.RUNTIME

    def __init__(self, token, message):
        super().__init__(token.line if token is not None else None, message)
        self.token = token

    def __str__(self):
        if self.line is None:
            return self.message
        return f"{self.message}\n[line {self.line}]"

    def __repr__(self):
        return f"{self.__class__.__name__}({self.token!r}, {self.message!r})"


class LoxInternalError(RuntimeError):
    """The resolver and the interpreter disagree about the program."""
