from lox.errors import LoxInternalError, LoxRuntimeError


class Environment:
    """One scope of variables, linked to the scope that encloses it.

    The globals environment has no enclosing scope. Closures keep a reference
    to the environment they were defined in, which keeps the whole chain
    alive for as long as the closure is reachable.
    """

    def __init__(self, enclosing=None):
        self.values = {}
        self.enclosing = enclosing

    def define(self, name, value):
        self.values[name] = value

    def get(self, name):
        if name.lexeme in self.values:
            return self.values[name.lexeme]
        if self.enclosing is not None:
            return self.enclosing.get(name)
        raise LoxRuntimeError(
            name, f"Undefined variable '{name.lexeme}'.")

    def assign(self, name, value):
        if name.lexeme in self.values:
            self.values[name.lexeme] = value
            return
        if self.enclosing is not None:
            self.enclosing.assign(name, value)
            return
        raise LoxRuntimeError(
            name, f"Undefined variable '{name.lexeme}'.")

    def get_at(self, distance, name):
        values = self.ancestor(distance).values
        if name not in values:
            raise LoxInternalError(
                f"'{name}' was resolved {distance} scopes out but is not defined there.")
        return values[name]

    def assign_at(self, distance, name, value):
        values = self.ancestor(distance).values
        if name.lexeme not in values:
            raise LoxRuntimeError(
                name, f"Undefined variable '{name.lexeme}'.")
        values[name.lexeme] = value

    def ancestor(self, distance):
        environment = self
        for _ in range(distance):
            if environment.enclosing is None:
                raise LoxInternalError(
                    f"Scope chain is shorter than {distance}.")
            environment = environment.enclosing
        return environment

    def __repr__(self):
        return f"Environment({self.values!r}, enclosing={self.enclosing is not None})"
