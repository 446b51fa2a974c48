import pytest

from java_uml import registry
from java_uml.converter import JavaToUmletConverter
from java_uml.errors import ConversionError, EmptyInputError, NoTypesFoundError

CAR_SOURCE = """
package com.example.garage;

import java.util.List;
import static java.lang.Math.max;

/** A car. */
public class Car {
    private Engine engine;
    private static int count;

    public Car() {
        engine = new Engine();
    }

    public void drive(Road road) { }
    public static int total() { return count; }
}
"""


def test_no_types_found_reports_package_and_imports(converter):
    with pytest.raises(NoTypesFoundError) as exc:
        converter.parse("int x = 5;")

    err = exc.value
    assert err.package_name == "none"
    assert err.import_count == 0
    assert "Package: none" in str(err)
    assert "Imports: 0" in str(err)


def test_no_types_found_with_package_and_imports(converter):
    with pytest.raises(NoTypesFoundError) as exc:
        converter.parse("package a.b; import java.util.List; int x;")

    assert exc.value.package_name == "a.b"
    assert exc.value.import_count == 1


@pytest.mark.parametrize("source", [None, "", "   \n\t"])
def test_empty_input_rejected(converter, source):
    with pytest.raises(EmptyInputError):
        converter.parse(source)


def test_errors_are_value_errors():
    assert issubclass(EmptyInputError, ConversionError)
    assert issubclass(NoTypesFoundError, ConversionError)
    assert issubclass(ConversionError, ValueError)


def test_parse_result(converter):
    result = converter.parse(CAR_SOURCE)

    assert result.package_name == "com.example.garage"
    assert [(i.path, i.is_static) for i in result.imports] == [
        ("java.util.List", False),
        ("java.lang.Math.max", True),
    ]
    assert [c.name for c in result.classes] == ["Car"]
    car = result.classes[0]
    assert car.package == "com.example.garage"
    assert [f.name for f in car.fields] == ["engine", "count"]
    assert [m.name for m in car.methods] == ["drive", "total"]
    assert [(r.target, r.kind.value) for r in result.relationships] == [
        ("Engine", "composition"),
        ("Road", "dependency"),
    ]


def test_parse_is_idempotent(converter):
    first = converter.parse(CAR_SOURCE).to_dict()
    second = converter.parse(CAR_SOURCE).to_dict()
    assert first == second

    assert JavaToUmletConverter().convert(CAR_SOURCE) == JavaToUmletConverter().convert(CAR_SOURCE)


def test_convert_envelope_success(converter):
    out = converter.convert(CAR_SOURCE)

    assert out["success"] is True
    assert out["summary"] == {
        "class_count": 1,
        "relationship_count": 2,
        "field_count": 2,
        "method_count": 2,
    }
    assert "<id>UMLClass</id>" in out["uml_text"]
    assert "Car ◆─── Engine" in out["relationship_text"]
    assert out["classes"][0]["modifiers"] == ["public"]


def test_convert_envelope_failure(converter):
    out = converter.convert("int x = 5;")

    assert out["success"] is False
    assert "Package: none" in out["error"]
    assert out["classes"] == []
    assert out["uml_text"] == ""
    assert out["summary"]["class_count"] == 0


def test_analyze_detailed(converter):
    out = converter.analyze_detailed("interface Shape { double area(); } class Sq implements Shape { }")

    assert out["success"] is True
    parsed = {c["name"]: c for c in out["debug"]["parsed_classes"]}
    assert parsed["Shape"]["type"] == "interface"
    assert parsed["Sq"]["interfaces"] == ["Shape"]
    assert len(out["debug"]["relationships_by_type"]["implementation"]) == 1
    assert out["debug"]["relationships_by_type"]["composition"] == []


def test_analyze_failure(converter):
    out = converter.analyze("")

    assert out["success"] is False
    assert out["relationships"] == []


def test_text_definitions(converter):
    result = converter.parse(CAR_SOURCE)

    classes = converter.generate_class_definitions(result)
    assert classes.startswith("Car\n--")
    assert "_- count : int_" in classes

    rel_text = converter.generate_relationship_definitions(result)
    assert rel_text.startswith("Relationship summary")
    assert "1. Composition:" in rel_text
    assert "- method: drive(road)" in rel_text


def test_registry_singleton():
    registry.reset_converter()
    first = registry.get_converter()

    assert registry.get_converter() is first
    assert registry.convert_java_to_umlet("int x;").startswith("Error: ")
    assert "Detected relationships" in registry.generate_relationship_text(CAR_SOURCE)

    registry.reset_converter()
    assert registry.get_converter() is not first
