def test_class_and_instance_printing(run):
    assert run("""
class Bagel {}
print Bagel;
print Bagel();
""") == ["Bagel", "Bagel instance"]


def test_fields_grow_on_assignment(run):
    assert run("""
class Box {}
var box = Box();
box.value = 1;
box.value = box.value + 1;
print box.value;
print box.other = "set";
""") == ["2", "set"]


def test_undefined_property(session):
    _, errors = session.run("class A {} A().missing;")
    assert [error.message for error in errors] == ["Undefined property 'missing'."]


def test_methods_bind_this(run):
    assert run("""
class Person {
  init(name) { this.name = name; }
  greet() { return "hi " + this.name; }
}
var p = Person("ann");
print p.greet();
var greet = p.greet;
p.name = "bob";
print greet();
""") == ["hi ann", "hi bob"]


def test_bound_method_remembers_its_instance(run):
    assert run("""
class Cake {
  taste() { print "The " + this.flavor + " cake is delicious!"; }
}
var a = Cake();
a.flavor = "chocolate";
var b = Cake();
b.flavor = "lemon";
b.taste = a.taste;
b.taste();
""") == ["The chocolate cake is delicious!"]


def test_fields_shadow_methods(run):
    assert run("""
class A { m() { return "method"; } }
var a = A();
fun f() { return "field"; }
a.m = f;
print a.m();
""") == ["field"]


def test_init_always_returns_instance(run):
    assert run("""
class Foo {
  init() {
    this.ready = true;
    return;
  }
}
var foo = Foo();
print foo.ready;
print foo.init();
""") == ["true", "Foo instance"]


def test_class_arity_comes_from_init(session):
    _, errors = session.run("class P { init(a, b) {} } P(1);")
    assert [error.message for error in errors] == ["Expected 2 arguments but got 1."]
    _, errors = session.run("class Q {} Q(1);")
    assert [error.message for error in errors] == ["Expected 0 arguments but got 1."]


def test_inherited_methods(run):
    assert run("""
class Doughnut {
  cook() { print "Fry until golden brown."; }
}
class BostonCream < Doughnut {}
BostonCream().cook();
""") == ["Fry until golden brown."]


def test_inherited_init(run):
    assert run("""
class A { init(x) { this.x = x; } }
class B < A {}
print B(5).x;
""") == ["5"]


def test_super_calls_immediate_ancestor(run):
    assert run("""
class A {
  method() { print "A method"; }
}
class B < A {
  method() { print "B method"; }
  test() { super.method(); }
}
class C < B {}
C().test();
""") == ["A method"]


def test_super_keeps_original_this(run):
    assert run("""
class Base {
  describe() { return "I am " + this.name; }
}
class Derived < Base {
  init(name) { this.name = name; }
  describe() { return super.describe() + "!"; }
}
print Derived("derived").describe();
""") == ["I am derived!"]


def test_super_chain_over_three_levels(run):
    assert run("""
class A { say() { return "A"; } }
class B < A { say() { return "B" + super.say(); } }
class C < B { say() { return "C" + super.say(); } }
print C().say();
""") == ["CBA"]


def test_super_method_can_be_stored(run):
    assert run("""
class A { name() { return this.n; } }
class B < A {
  init() { this.n = "b"; }
  getter() { return super.name; }
}
var g = B().getter();
print g();
""") == ["b"]


def test_undefined_super_method(session):
    _, errors = session.run("""
class A {}
class B < A { m() { super.nope(); } }
B().m();""")
    assert [error.message for error in errors] == ["Undefined property 'nope'."]
    assert errors[0].line == 3


def test_superclass_must_be_a_class(session):
    _, errors = session.run("var NotAClass = 1; class Sub < NotAClass {}")
    assert [error.message for error in errors] == ["Superclass must be a class."]


def test_class_in_local_scope(run):
    assert run("""
fun make() {
  class Local {
    who() { return Local; }
  }
  return Local;
}
print make()().who();
""") == ["Local"]


def test_methods_close_over_class_environment(run):
    assert run("""
fun outer() {
  var prefix = ">";
  class Show {
    show(x) { return prefix + x; }
  }
  return Show();
}
print outer().show("ok");
""") == [">ok"]


def test_instances_are_compared_by_identity(run):
    assert run("""
class A {}
var a = A();
var b = A();
print a == a;
print a == b;
print A == A;
""") == ["true", "false", "true"]
