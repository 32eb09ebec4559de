import enum

from lox.errors import LoxInternalError, LoxResolutionError
from lox.syntax import Expr, Stmt


class FunctionType(enum.Enum):
    NONE = enum.auto()
    FUNCTION = enum.auto()
    INITIALIZER = enum.auto()
    METHOD = enum.auto()


class ClassType(enum.Enum):
    NONE = enum.auto()
    CLASS = enum.auto()
    SUBCLASS = enum.auto()


class Resolver:
    """Static pass computing how many scopes separate each variable use from
    its declaration.

    The result is `locals`, a mapping from the Variable, Assign, This and Super
    nodes that refer to a local to their hop-count. Names that are only found
    in the global scope are left out and looked up dynamically at run time.
    """

    def __init__(self):
        # scopes[0] is the global scope; it only tracks whether a name has
        # finished initializing and is never used for hop-counts.
        self.scopes = [{}]
        self.locals = {}
        self.errors = []
        self.current_function = FunctionType.NONE
        self.current_class = ClassType.NONE
        self.in_loop = False

    def resolve(self, statements):
        for statement in statements:
            self.resolve_stmt(statement)
        return self.locals

    def resolve_stmt(self, stmt):
        match stmt:
            case Stmt.Block(statements):
                self.begin_scope()
                self.resolve(statements)
                self.end_scope()
            case Stmt.Class():
                self.resolve_class(stmt)
            case Stmt.Expression(expression) | Stmt.Print(expression):
                self.resolve_expr(expression)
            case Stmt.Function(name):
                self.declare(name)
                self.define(name)
                self.resolve_function(stmt, FunctionType.FUNCTION)
            case Stmt.If(condition, then_branch, else_branch):
                self.resolve_expr(condition)
                self.resolve_stmt(then_branch)
                if else_branch is not None:
                    self.resolve_stmt(else_branch)
            case Stmt.Return(keyword, value):
                if self.current_function == FunctionType.NONE:
                    self.error(keyword, "Can't return from top-level code.")
                if value is not None:
                    if self.current_function == FunctionType.INITIALIZER:
                        self.error(keyword, "Can't return a value from an initializer.")
                    self.resolve_expr(value)
            case Stmt.Var(name, initializer):
                self.declare(name)
                if initializer is not None:
                    self.resolve_expr(initializer)
                self.define(name)
            case Stmt.While(condition, body, increment):
                self.resolve_expr(condition)
                enclosing_loop = self.in_loop
                self.in_loop = True
                self.resolve_stmt(body)
                self.in_loop = enclosing_loop
                if increment is not None:
                    self.resolve_expr(increment)
            case Stmt.Break(keyword):
                if not self.in_loop:
                    self.error(keyword, "Can't use 'break' outside of a loop.")
            case Stmt.Continue(keyword):
                if not self.in_loop:
                    self.error(keyword, "Can't use 'continue' outside of a loop.")
            case _:
                raise LoxInternalError(f"Unknown statement {stmt!r}")

    def resolve_class(self, stmt):
        enclosing_class = self.current_class
        self.current_class = ClassType.CLASS

        self.declare(stmt.name)
        self.define(stmt.name)

        if stmt.superclass is not None:
            if stmt.name.lexeme == stmt.superclass.name.lexeme:
                self.error(stmt.superclass.name, "A class can't inherit from itself.")
            self.current_class = ClassType.SUBCLASS
            self.resolve_expr(stmt.superclass)
            self.begin_scope()
            self.scopes[-1]["super"] = True

        self.begin_scope()
        self.scopes[-1]["this"] = True
        for method in stmt.methods:
            kind = FunctionType.METHOD
            if method.name.lexeme == "init":
                kind = FunctionType.INITIALIZER
            self.resolve_function(method, kind)
        self.end_scope()

        if stmt.superclass is not None:
            self.end_scope()

        self.current_class = enclosing_class

    def resolve_expr(self, expr):
        match expr:
            case Expr.Assign(name, value):
                self.resolve_expr(value)
                self.resolve_local(expr, name)
            case Expr.Binary(left, _, right) | Expr.Logical(left, _, right):
                self.resolve_expr(left)
                self.resolve_expr(right)
            case Expr.Call(callee, _, arguments):
                self.resolve_expr(callee)
                for argument in arguments:
                    self.resolve_expr(argument)
            case Expr.Get(obj):
                self.resolve_expr(obj)
            case Expr.Grouping(expression):
                self.resolve_expr(expression)
            case Expr.Literal():
                pass
            case Expr.Set(obj, _, value):
                self.resolve_expr(value)
                self.resolve_expr(obj)
            case Expr.Super(keyword):
                if self.current_class == ClassType.NONE:
                    self.error(keyword, "Can't use 'super' outside of a class.")
                elif self.current_class != ClassType.SUBCLASS:
                    self.error(keyword, "Can't use 'super' in a class with no superclass.")
                self.resolve_local(expr, keyword)
            case Expr.This(keyword):
                if self.current_class == ClassType.NONE:
                    self.error(keyword, "Can't use 'this' outside of a class.")
                    return
                self.resolve_local(expr, keyword)
            case Expr.Unary(_, right):
                self.resolve_expr(right)
            case Expr.Variable(name):
                if self.scopes[-1].get(name.lexeme) is False:
                    self.error(name, "Can't read local variable in its own initializer.")
                self.resolve_local(expr, name)
            case _:
                raise LoxInternalError(f"Unknown expression {expr!r}")

    def resolve_function(self, function, kind):
        enclosing_function = self.current_function
        enclosing_loop = self.in_loop
        self.current_function = kind
        self.in_loop = False

        self.begin_scope()
        for param in function.params:
            self.declare(param)
            self.define(param)
        self.resolve(function.body)
        self.end_scope()

        self.current_function = enclosing_function
        self.in_loop = enclosing_loop

    def resolve_local(self, expr, name):
        # Stop short of the global scope: globals stay late-bound.
        for depth, scope in enumerate(reversed(self.scopes[1:])):
            if name.lexeme in scope:
                self.locals[expr] = depth
                return

    def begin_scope(self):
        self.scopes.append({})

    def end_scope(self):
        self.scopes.pop()

    def declare(self, name):
        scope = self.scopes[-1]
        if len(self.scopes) > 1 and name.lexeme in scope:
            self.error(name, "Already a variable with this name in this scope.")
        scope[name.lexeme] = False

    def define(self, name):
        self.scopes[-1][name.lexeme] = True

    def error(self, token, message):
        self.errors.append(LoxResolutionError.at(token, message))
