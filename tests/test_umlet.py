from java_uml.cir.model import Field, Method, Modifier, Parameter, Relationship, RelationshipKind, TypeDecl, TypeKind
from java_uml.uml.umlet import UmletGenerator


def make_types(n: int):
    return [TypeDecl(name=f"T{i}") for i in range(n)]


def test_class_content_members_and_markers():
    account = TypeDecl(
        name="Account",
        fields=[
            Field("balance", "double", {Modifier.PRIVATE}),
            Field("COUNT", "int", {Modifier.PUBLIC, Modifier.STATIC}),
        ],
        constructors=[
            Method("Account", None, {Modifier.PUBLIC}, [Parameter("owner", "String")], is_constructor=True),
        ],
        methods=[
            Method("deposit", "void", {Modifier.PROTECTED}, [Parameter("amount", "double")]),
            Method("create", "Account", {Modifier.STATIC}),
        ],
    )

    content = UmletGenerator().generate_class_content(account)

    assert content.splitlines() == [
        "Account",
        "--",
        "- balance: double",
        "_+ COUNT: int_",
        "--",
        "+ Account(owner: String)",
        "# deposit(amount: double): void",
        "_~ create(): Account_",
    ]


def test_stereotypes():
    gen = UmletGenerator()

    assert gen.generate_class_content(TypeDecl("Shape", kind=TypeKind.INTERFACE)) == "<<interface>>\nShape"
    assert gen.generate_class_content(TypeDecl("Color", kind=TypeKind.ENUM)) == "<<enum>>\nColor"
    assert gen.generate_class_content(TypeDecl("Base", modifiers={Modifier.ABSTRACT})) == "/Base/"


def test_abstract_method_is_italic():
    m = Method("area", "double", {Modifier.PUBLIC, Modifier.ABSTRACT}, is_abstract=True)

    assert UmletGenerator().format_method(m) == "/+ area(): double/"


def test_panel_is_xml_escaped():
    xml = UmletGenerator().generate_class_diagram(TypeDecl("Shape", kind=TypeKind.INTERFACE))

    assert "<panel_attributes>&lt;&lt;interface&gt;&gt;\nShape</panel_attributes>" in xml


def test_grid_layout_defaults():
    text = UmletGenerator().generate_umlet(make_types(4), [])

    assert "<x>100</x>" in text
    assert "<x>400</x>" in text
    assert "<x>700</x>" in text
    # fourth class wraps to the second row
    assert "<y>300</y>" in text


def test_grid_layout_options():
    text = UmletGenerator().generate_umlet(make_types(2), [], {"spacing": 0, "base_x": 10, "base_y": 20})

    assert "<x>10</x>" in text
    assert "<x>210</x>" in text
    assert "<y>20</y>" in text


def test_class_height():
    gen = UmletGenerator()
    assert gen.calculate_class_height(TypeDecl("Empty")) == 80

    big = TypeDecl("Big", fields=[Field(f"f{i}", "int") for i in range(5)], methods=[Method("m", "void")])
    # 1 name + (1 + 5) fields + (1 + 1) methods
    assert gen.calculate_class_height(big) == 9 * 15 + 20


def test_relationship_elements():
    gen = UmletGenerator()
    rels = [
        Relationship("Dog", "Animal", RelationshipKind.INHERITANCE),
        Relationship("Car", "Engine", RelationshipKind.COMPOSITION),
        Relationship("Printer", "Doc", RelationshipKind.DEPENDENCY),
    ]
    text = gen.generate_umlet([], rels)

    assert text.count("<id>Relation</id>") == 3
    assert "lt=-|&gt;" in text
    assert "lt=&lt;&lt;&lt;&lt;-" in text
    assert "lt=..&gt;" in text


def test_simple_relationship_text_grouped_by_kind():
    rels = [
        Relationship("Printer", "Doc", RelationshipKind.DEPENDENCY),
        Relationship("Dog", "Animal", RelationshipKind.INHERITANCE),
    ]
    text = UmletGenerator().generate_simple_relationship_text(rels)

    assert text.index("[Inheritance]") < text.index("[Dependency]")
    assert "  Dog ──|▷ Animal\n" in text
    assert "[Composition]" not in text


def test_human_readable_without_relationships():
    text = UmletGenerator().generate_relationships_human_readable([])

    assert text.startswith("No relationships between classes were found.")


def test_class_text_for_interface_and_enum():
    gen = UmletGenerator()
    iface = TypeDecl("Shape", kind=TypeKind.INTERFACE, methods=[Method("area", "double", is_abstract=True)])

    assert gen.generate_class_text(iface).splitlines() == [
        "<<interface>>",
        "Shape",
        "--",
        "",
        "--",
        "/~ area() : double/",
    ]
    assert gen.generate_class_text(TypeDecl("Color", kind=TypeKind.ENUM)).startswith("<<enumeration>>\nColor")
