import time
import weakref

from lox.environment import Environment
from lox.errors import LoxInternalError, LoxRuntimeError
from lox.runtime import (
    BREAK,
    CONTINUE,
    Completion,
    CompletionType,
    LoxCallable,
    LoxClass,
    LoxFunction,
    LoxInstance,
    NativeFunction,
    divide,
    is_equal,
    is_truthy,
    stringify,
)
from lox.syntax import Expr, Stmt
from lox.tokens import TokenType


class Interpreter:
    """Tree-walking evaluator.

    `evaluate` returns the value of an expression. `execute` runs a statement
    and returns its completion: None when control falls through, or a
    `Completion` when a `return`, `break` or `continue` is unwinding towards
    the enclosing call or loop.
    """

    def __init__(self, output=print):
        self.output = output
        self.globals = Environment()
        self.environment = self.globals
        # Hop-counts go away with their nodes once no closure holds them.
        self.locals = weakref.WeakKeyDictionary()

        self.define_native("clock", 0, time.time)

    def define_native(self, name, arity, function):
        self.globals.define(name, NativeFunction(name, arity, function))

    def resolve(self, depths):
        self.locals.update(depths)

    def interpret(self, statements):
        try:
            for statement in statements:
                self.execute(statement)
        except LoxRuntimeError as error:
            return error
        except RecursionError:
            return LoxRuntimeError(None, "Stack overflow.")
        return None

    def evaluate(self, expr):
        match expr:
            case Expr.Assign(name, value_expr):
                value = self.evaluate(value_expr)
                if (distance := self.locals.get(expr)) is not None:
                    self.environment.assign_at(distance, name, value)
                else:
                    self.globals.assign(name, value)
                return value
            case Expr.Binary(left, operator, right):
                return self.binary(operator, self.evaluate(left), self.evaluate(right))
            case Expr.Call(callee, paren, argument_exprs):
                return self.call(callee, paren, argument_exprs)
            case Expr.Get(obj_expr, name):
                obj = self.evaluate(obj_expr)
                if isinstance(obj, LoxInstance):
                    return obj.get(name)
                raise LoxRuntimeError(name, "Only instances have properties.")
            case Expr.Grouping(expression):
                return self.evaluate(expression)
            case Expr.Literal(value):
                return value
            case Expr.Logical(left_expr, operator, right_expr):
                left = self.evaluate(left_expr)
                if operator.type == TokenType.OR:
                    if is_truthy(left):
                        return left
                elif not is_truthy(left):
                    return left
                return self.evaluate(right_expr)
            case Expr.Set(obj_expr, name, value_expr):
                obj = self.evaluate(obj_expr)
                if not isinstance(obj, LoxInstance):
                    raise LoxRuntimeError(name, "Only instances have fields.")
                value = self.evaluate(value_expr)
                obj.set(name, value)
                return value
            case Expr.Super(_, method_name):
                return self.super_method(expr, method_name)
            case Expr.This(keyword):
                return self.lookup_variable(keyword, expr)
            case Expr.Unary(operator, right_expr):
                right = self.evaluate(right_expr)
                match operator.type:
                    case TokenType.BANG:
                        return not is_truthy(right)
                    case TokenType.MINUS:
                        self.check_operands(operator, right)
                        return -right
                raise LoxInternalError(f"Unknown unary operator {operator.lexeme!r}")
            case Expr.Variable(name):
                return self.lookup_variable(name, expr)
            case _:
                raise LoxInternalError(f"Unknown expression {expr!r}")

    def execute(self, stmt):
        match stmt:
            case Stmt.Block(statements):
                return self.execute_block(statements, Environment(self.environment))
            case Stmt.Break():
                return BREAK
            case Stmt.Class():
                self.execute_class(stmt)
            case Stmt.Continue():
                return CONTINUE
            case Stmt.Expression(expression):
                self.evaluate(expression)
            case Stmt.Function(name):
                function = LoxFunction(stmt, self.environment, False)
                self.environment.define(name.lexeme, function)
            case Stmt.If(condition, then_branch, else_branch):
                if is_truthy(self.evaluate(condition)):
                    return self.execute(then_branch)
                if else_branch is not None:
                    return self.execute(else_branch)
            case Stmt.Print(expression):
                self.output(stringify(self.evaluate(expression)))
            case Stmt.Return(_, value_expr):
                value = None
                if value_expr is not None:
                    value = self.evaluate(value_expr)
                return Completion(CompletionType.RETURN, value)
            case Stmt.Var(name, initializer):
                value = None
                if initializer is not None:
                    value = self.evaluate(initializer)
                self.environment.define(name.lexeme, value)
            case Stmt.While(condition, body, increment):
                return self.execute_while(condition, body, increment)
            case _:
                raise LoxInternalError(f"Unknown statement {stmt!r}")
        return None

    def execute_block(self, statements, environment):
        previous = self.environment
        try:
            self.environment = environment
            for statement in statements:
                if (completion := self.execute(statement)) is not None:
                    return completion
        finally:
            self.environment = previous
        return None

    def execute_while(self, condition, body, increment):
        while is_truthy(self.evaluate(condition)):
            completion = self.execute(body)
            if completion is not None:
                if completion.type == CompletionType.BREAK:
                    break
                if completion.type == CompletionType.RETURN:
                    return completion
            if increment is not None:
                self.evaluate(increment)
        return None

    def execute_class(self, stmt):
        superclass = None
        if stmt.superclass is not None:
            superclass = self.evaluate(stmt.superclass)
            if not isinstance(superclass, LoxClass):
                raise LoxRuntimeError(
                    stmt.superclass.name, "Superclass must be a class.")

        self.environment.define(stmt.name.lexeme, None)

        enclosing = self.environment
        if superclass is not None:
            self.environment = Environment(self.environment)
            self.environment.define("super", superclass)

        methods = {
            method.name.lexeme: LoxFunction(
                method, self.environment, method.name.lexeme == "init")
            for method in stmt.methods}

        klass = LoxClass(stmt.name.lexeme, superclass, methods)

        self.environment = enclosing
        self.environment.define(stmt.name.lexeme, klass)

    def call(self, callee_expr, paren, argument_exprs):
        callee = self.evaluate(callee_expr)
        arguments = [self.evaluate(argument) for argument in argument_exprs]
        if not isinstance(callee, LoxCallable):
            raise LoxRuntimeError(
                paren, "Can only call functions and classes.")
        if len(arguments) != callee.arity():
            raise LoxRuntimeError(
                paren, f"Expected {callee.arity()} arguments but got {len(arguments)}.")
        return callee.call(self, arguments)

    def super_method(self, expr, method_name):
        distance = self.locals.get(expr)
        if distance is None:
            raise LoxInternalError("'super' was not resolved.")
        superclass = self.environment.get_at(distance, "super")
        # `this` lives in the scope just inside the one holding `super`.
        instance = self.environment.get_at(distance - 1, "this")

        method = superclass.find_method(method_name.lexeme)
        if method is None:
            raise LoxRuntimeError(
                method_name, f"Undefined property '{method_name.lexeme}'.")
        return method.bind(instance)

    def binary(self, operator, left, right):
        match operator.type:
            case TokenType.BANG_EQUAL:
                return not is_equal(left, right)
            case TokenType.EQUAL_EQUAL:
                return is_equal(left, right)
            case TokenType.GREATER:
                self.check_operands(operator, left, right)
                return left > right
            case TokenType.GREATER_EQUAL:
                self.check_operands(operator, left, right)
                return left >= right
            case TokenType.LESS:
                self.check_operands(operator, left, right)
                return left < right
            case TokenType.LESS_EQUAL:
                self.check_operands(operator, left, right)
                return left <= right
            case TokenType.MINUS:
                self.check_operands(operator, left, right)
                return left - right
            case TokenType.PLUS:
                if isinstance(left, float) and isinstance(right, float):
                    return left + right
                if isinstance(left, str) and isinstance(right, str):
                    return left + right
                raise LoxRuntimeError(
                    operator, "Operands must be two numbers or two strings.")
            case TokenType.SLASH:
                self.check_operands(operator, left, right)
                return divide(left, right)
            case TokenType.STAR:
                self.check_operands(operator, left, right)
                return left * right
        raise LoxInternalError(f"Unknown binary operator {operator.lexeme!r}")

    def lookup_variable(self, name, expr):
        if (distance := self.locals.get(expr)) is not None:
            return self.environment.get_at(distance, name.lexeme)
        return self.globals.get(name)

    @staticmethod
    def check_operands(operator, *operands):
        if any(not isinstance(operand, float) for operand in operands):
            if len(operands) == 1:
                raise LoxRuntimeError(
                    operator, "Operand must be a number.")
            raise LoxRuntimeError(
                operator, "Operands must be numbers.")
