"""Shared fixtures for the pylox test suite."""

import pytest

from lox.lox import Lox
from lox.parser import Parser
from lox.resolver import Resolver
from lox.scanner import Scanner


class Session:
    """A Lox session whose printed output is captured line by line."""

    def __init__(self):
        self.output: list[str] = []
        self.lox = Lox(output=self.output.append)

    def run(self, source: str):
        self.output.clear()
        errors = self.lox.run(source)
        return list(self.output), errors


@pytest.fixture
def session() -> Session:
    return Session()


@pytest.fixture
def run(session):
    """Run a program that must succeed and return what it printed."""

    def _run(source: str) -> list[str]:
        output, errors = session.run(source)
        assert errors == [], errors
        return output

    return _run


def parse(source: str):
    """Scan and parse, asserting the source is free of static errors."""
    scanner = Scanner(source)
    parser = Parser(scanner.scan_tokens())
    statements = parser.parse()
    assert scanner.errors == [] and parser.errors == [], scanner.errors + parser.errors
    return statements


def resolve(source: str):
    statements = parse(source)
    resolver = Resolver()
    resolver.resolve(statements)
    return statements, resolver
