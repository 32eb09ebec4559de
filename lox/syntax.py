"""Syntax tree node variants.

Every node kind is generated by `make_syntax_tree_node` and hung off its base
class (`Expr.Binary`, `Stmt.While`, ...). Nodes are immutable, hash by
identity, and expose `__match_args__` so consumers can destructure them with
`match`:

    match expr:
        case Expr.Binary(left, operator, right): ...
"""


def make_syntax_tree_node(base_class, name, *attrs):
    def __init__(self, *values):
        if len(values) != len(attrs):
            message = f"{name}.__init__() take {len(attrs)} positional arguments but {len(values)} were given"
            raise TypeError(message)

        for attr, value in zip(attrs, values):
            object.__setattr__(self, attr, value)

    def __setattr__(self, attr, value):
        raise AttributeError(f"{base_class.__name__}.{name} nodes are immutable")

    def __repr__(self):
        fields = ", ".join(f"{attr}={getattr(self, attr)!r}" for attr in attrs)
        return f"{base_class.__name__}.{name}({fields})"

    subclass = type(
        name, (base_class,),
        {"__slots__": attrs + ("__weakref__",),
         "__match_args__": attrs,
         "__init__": __init__,
         "__setattr__": __setattr__,
         "__repr__": __repr__})
    subclass.__qualname__ = f"{base_class.__name__}.{name}"
    subclass.__module__ = __name__

    setattr(base_class, name, subclass)
    base_class.variants.append(subclass)
    return subclass


class Expr:
    __slots__ = ()
    variants = []


class Stmt:
    __slots__ = ()
    variants = []


# Expr subclasses
make_syntax_tree_node(Expr, "Assign", "name", "value")
make_syntax_tree_node(Expr, "Binary", "left", "operator", "right")
make_syntax_tree_node(Expr, "Call", "callee", "paren", "arguments")
make_syntax_tree_node(Expr, "Get", "object", "name")
make_syntax_tree_node(Expr, "Grouping", "expression")
make_syntax_tree_node(Expr, "Literal", "value")
make_syntax_tree_node(Expr, "Logical", "left", "operator", "right")
make_syntax_tree_node(Expr, "Set", "object", "name", "value")
make_syntax_tree_node(Expr, "Super", "keyword", "method")
make_syntax_tree_node(Expr, "This", "keyword")
make_syntax_tree_node(Expr, "Unary", "operator", "right")
make_syntax_tree_node(Expr, "Variable", "name")

# Stmt subclasses
make_syntax_tree_node(Stmt, "Block", "statements")
make_syntax_tree_node(Stmt, "Break", "keyword")
make_syntax_tree_node(Stmt, "Class", "name", "superclass", "methods")
make_syntax_tree_node(Stmt, "Continue", "keyword")
make_syntax_tree_node(Stmt, "Expression", "expression")
make_syntax_tree_node(Stmt, "Function", "name", "params", "body")
make_syntax_tree_node(Stmt, "If", "condition", "then_branch", "else_branch")
make_syntax_tree_node(Stmt, "Print", "expression")
make_syntax_tree_node(Stmt, "Return", "keyword", "value")
make_syntax_tree_node(Stmt, "Var", "name", "initializer")
# `increment` is only set by a desugared `for` loop and runs after every
# iteration, including one cut short by `continue`.
make_syntax_tree_node(Stmt, "While", "condition", "body", "increment")
