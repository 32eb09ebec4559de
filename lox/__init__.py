from lox.errors import (
    ErrorKind,
    LoxError,
    LoxResolutionError,
    LoxRuntimeError,
    LoxScanError,
    LoxSyntaxError,
)
from lox.interpreter import Interpreter
from lox.lox import Lox
from lox.parser import Parser
from lox.resolver import Resolver
from lox.scanner import Scanner

__all__ = [
    "ErrorKind",
    "Interpreter",
    "Lox",
    "LoxError",
    "LoxResolutionError",
    "LoxRuntimeError",
    "LoxScanError",
    "LoxSyntaxError",
    "Parser",
    "Resolver",
    "Scanner",
]
