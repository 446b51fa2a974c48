from java_uml.adapters.java_adapter import JavaAdapter
from java_uml.adapters.preprocess import preprocess_code
from java_uml.cir.model import Field, Modifier, TypeKind


def extract(code: str):
    return JavaAdapter().extract_types(preprocess_code(code))


def by_name(items):
    return {i.name: i for i in items}


def test_single_class_name_kind_modifiers():
    types = extract("public final class Point { }")

    assert len(types) == 1
    point = types[0]
    assert point.name == "Point"
    assert point.kind is TypeKind.CLASS
    assert point.modifiers == {Modifier.PUBLIC, Modifier.FINAL}
    assert point.is_final
    assert not point.is_abstract
    assert point.super_type is None
    assert point.interfaces == []


def test_abstract_class_and_abstract_method():
    types = extract(
        """
        public abstract class Shape {
            public abstract double area();
            public String label() { return "shape"; }
        }
        """
    )

    shape = types[0]
    assert shape.kind is TypeKind.CLASS
    assert shape.is_abstract

    methods = by_name(shape.methods)
    assert methods["area"].is_abstract
    assert methods["area"].return_type == "double"
    assert not methods["label"].is_abstract


def test_derived_flags_follow_modifier_changes():
    shape = extract("class Shape { }")[0]
    assert not shape.is_abstract

    shape.modifiers.add(Modifier.ABSTRACT)
    assert shape.is_abstract


def test_interface_methods_are_always_abstract():
    greeter = extract(
        """
        public interface Greeter {
            String greet(String name);
            public void reset();
        }
        """
    )[0]

    assert greeter.is_interface
    assert greeter.kind is TypeKind.INTERFACE
    assert [m.name for m in greeter.methods] == ["greet", "reset"]
    assert all(m.is_abstract for m in greeter.methods)
    assert [(p.name, p.type_name) for p in greeter.methods[0].parameters] == [("name", "String")]


def test_enum_kind():
    color = extract("enum Color { RED, GREEN, BLUE }")[0]

    assert color.kind is TypeKind.ENUM
    assert color.is_enum


def test_extends_and_implements():
    dog = extract("class Dog extends Animal implements Runnable, Comparable<Dog> { }")[0]

    assert dog.super_type == "Animal"
    assert dog.interfaces == ["Runnable", "Comparable<Dog>"]


def test_nested_blocks_do_not_end_body_early():
    types = extract(
        """
        public class Calc {
            private int total;
            public void run(int x) {
                if (x > 0) {
                    if (x > 10) {
                        total = x;
                    }
                }
            }
            public int getTotal() { return total; }
        }
        class Other { }
        """
    )

    assert [t.name for t in types] == ["Calc", "Other"]
    calc = types[0]
    assert [m.name for m in calc.methods] == ["run", "getTotal"]
    assert [f.name for f in calc.fields] == ["total"]
    assert [(p.name, p.type_name) for p in calc.methods[0].parameters] == [("x", "int")]


def test_local_variables_are_not_fields():
    repo = extract(
        """
        class Repo {
            private String name;
            public void load() {
                String temp;
                int count = 0;
            }
        }
        """
    )[0]

    assert [f.name for f in repo.fields] == ["name"]


def test_constructors_are_separated_from_methods():
    car = extract(
        """
        public class Car {
            private Engine engine;
            public Car() { engine = new Engine(); }
            public Car(Engine engine) { this.engine = engine; }
            public void drive() { }
        }
        """
    )[0]

    assert len(car.constructors) == 2
    assert all(c.is_constructor and c.return_type is None for c in car.constructors)
    assert [(p.name, p.type_name) for p in car.constructors[1].parameters] == [("engine", "Engine")]
    assert [m.name for m in car.methods] == ["drive"]
    assert car.methods[0].return_type == "void"


def test_field_initialised_with_new_is_not_a_method():
    garage = extract("class Garage { private Car car = new Car(); }")[0]

    assert [f.name for f in garage.fields] == ["car"]
    assert garage.methods == []
    assert garage.constructors == []


def test_field_modifier_orderings():
    cfg = extract(
        """
        class Config {
            private static final int MAX = 10;
            final static String NAME = "x";
        }
        """
    )[0]

    fields = by_name(cfg.fields)
    assert fields["MAX"].modifiers == {Modifier.PRIVATE, Modifier.STATIC, Modifier.FINAL}
    assert fields["MAX"].type_name == "int"
    assert fields["NAME"].is_static and fields["NAME"].is_final
    assert fields["NAME"].visibility == "package"


def test_parameters_drop_final_and_keep_generics():
    cart = extract("class Cart { void add(final Item item, List<Item> items) { } }")[0]

    params = cart.methods[0].parameters
    assert [(p.name, p.type_name) for p in params] == [("item", "Item"), ("items", "List<Item>")]


def test_throws_clause():
    io = extract("class Io { public String read(Path p) throws IOException { return null; } }")[0]

    assert [m.name for m in io.methods] == ["read"]
    assert io.methods[0].return_type == "String"


def test_nested_type_members_stay_with_nested_type():
    types = extract(
        """
        class Outer {
            private int a;
            class Inner {
                private int b;
                void f() { }
            }
            void g() { }
        }
        """
    )

    outer, inner = types
    assert (outer.name, inner.name) == ("Outer", "Inner")
    assert [f.name for f in outer.fields] == ["a"]
    assert [m.name for m in outer.methods] == ["g"]
    assert [f.name for f in inner.fields] == ["b"]
    assert [m.name for m in inner.methods] == ["f"]


def test_visibility_symbols():
    cases = [
        ({Modifier.PUBLIC, Modifier.STATIC}, "+"),
        ({Modifier.PRIVATE, Modifier.FINAL}, "-"),
        ({Modifier.PROTECTED}, "#"),
        ({Modifier.STATIC, Modifier.FINAL}, "~"),
        (set(), "~"),
    ]
    for mods, symbol in cases:
        assert Field(name="f", type_name="int", modifiers=mods).visibility_symbol == symbol


def test_package_is_attached():
    t = JavaAdapter().extract_types(preprocess_code("class A { }"), "com.acme")[0]

    assert t.package == "com.acme"
    assert t.full_name == "com.acme.A"
