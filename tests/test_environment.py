import pytest

from lox.environment import Environment
from lox.errors import LoxInternalError, LoxRuntimeError
from lox.tokens import Token, TokenType


def name(lexeme):
    return Token(TokenType.IDENTIFIER, lexeme, None, 7)


@pytest.fixture
def chain():
    root = Environment()
    root.define("g", "global")
    middle = Environment(root)
    middle.define("m", "middle")
    inner = Environment(middle)
    inner.define("i", "inner")
    return root, middle, inner


def test_define_overwrites_in_current_scope_only(chain):
    root, middle, inner = chain
    inner.define("m", "shadow")
    inner.define("m", "shadow again")
    assert inner.get_at(0, "m") == "shadow again"
    assert middle.get_at(0, "m") == "middle"


def test_get_at_walks_exact_distance(chain):
    _, _, inner = chain
    assert inner.get_at(0, "i") == "inner"
    assert inner.get_at(1, "m") == "middle"
    assert inner.get_at(2, "g") == "global"


def test_get_at_missing_name_is_internal(chain):
    _, _, inner = chain
    with pytest.raises(LoxInternalError):
        inner.get_at(1, "i")
    with pytest.raises(LoxInternalError):
        inner.get_at(5, "g")


def test_assign_at(chain):
    root, middle, inner = chain
    inner.assign_at(1, name("m"), 42.0)
    assert middle.values["m"] == 42.0


def test_assign_at_never_creates_bindings(chain):
    _, middle, inner = chain
    with pytest.raises(LoxRuntimeError) as excinfo:
        inner.assign_at(1, name("nope"), 1.0)
    assert excinfo.value.message == "Undefined variable 'nope'."
    assert excinfo.value.line == 7
    assert "nope" not in middle.values


def test_global_lookup_and_assignment(chain):
    root, _, _ = chain
    assert root.get(name("g")) == "global"
    root.assign(name("g"), "changed")
    assert root.get(name("g")) == "changed"


def test_undefined_global(chain):
    root, _, _ = chain
    with pytest.raises(LoxRuntimeError, match="Undefined variable 'x'."):
        root.get(name("x"))
    with pytest.raises(LoxRuntimeError, match="Undefined variable 'x'."):
        root.assign(name("x"), 1.0)
