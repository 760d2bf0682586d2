import pytest

from codetree.model import EntityType
from codetree.typescript_parser import TypeScriptParser


def _parse(lines):
    return TypeScriptParser().parse("\n".join(lines))


SERVICE = [
    "/**",
    " * Manages users.",
    " */",
    "export class UserService extends BaseService {",
    "  private users: User[] = [];",
    "",
    "  /** Finds a user. */",
    "  async findUser(id: number): Promise<User> {",
    "    return this.users[id];",
    "  }",
    "",
    "  constructor(db: Database) {",
    "    super();",
    "  }",
    "}",
    "",
]


def test_parser_metadata():
    parser = TypeScriptParser()
    assert parser.language == "typescript"
    assert ".ts" in parser.extensions
    assert ".tsx" in parser.extensions
    assert "node_modules" in parser.lib_dirs


def test_empty_content_has_no_entities():
    assert TypeScriptParser().parse("") == []


def test_function_with_return_type():
    entities = _parse(
        ["export function greet(name: string): string {", "  return name;", "}"]
    )
    assert len(entities) == 1
    func = entities[0]
    assert func.name == "greet"
    assert func.type is EntityType.FUNCTION
    assert func.signature == "function greet(name: string): string"
    assert func.line_start == 1


def test_generic_parameters_are_dropped_from_signature():
    entities = _parse(["function identity<T>(value: T): T {", "  return value;", "}"])
    assert [e.name for e in entities] == ["identity"]
    assert "<" not in entities[0].signature
    assert entities[0].signature.startswith("function identity(value: T)")


def test_function_without_brace_on_same_line_is_ignored():
    assert _parse(["function later()", "{", "}"]) == []


def test_arrow_function():
    entities = _parse(["export const add = (a: number, b: number): number => a + b;"])
    assert len(entities) == 1
    assert entities[0].name == "add"
    assert entities[0].type is EntityType.FUNCTION
    assert entities[0].signature == "const add = (...) =>"


def test_enum_is_found():
    entities = _parse(["export const enum Color { Red, Green }"])
    assert [(e.name, e.type) for e in entities] == [("Color", EntityType.ENUM)]
    assert entities[0].signature == "enum Color"


def test_interface_with_properties_and_doc():
    entities = _parse(
        [
            "/** A user record. */",
            "export interface User {",
            "  id: number;",
            "  name?: string;",
            "}",
        ]
    )
    assert len(entities) == 1
    iface = entities[0]
    assert iface.type is EntityType.INTERFACE
    assert iface.name == "User"
    assert iface.docstring == "A user record."
    assert iface.signature == "interface User { id: number, name?: string }"
    assert iface.line_start == 2
    assert iface.line_end == 4


def test_interface_extends_without_properties():
    entities = _parse(["interface Admin extends User {", "}"])
    assert entities[0].signature == "interface Admin extends User"


def test_empty_interface_on_one_line():
    entities = _parse(["interface Empty {}"])
    assert entities[0].signature == "interface Empty"


def test_single_line_type_alias():
    entities = _parse(["type ID = string | number;"])
    assert len(entities) == 1
    alias = entities[0]
    assert alias.type is EntityType.STRUCT
    assert alias.name == "ID"
    assert alias.signature == "type ID = string | number"


def test_object_type_alias_is_collapsed_to_one_line():
    entities = _parse(["type Point = {", "  x: number;", "  y: number;", "};"])
    assert len(entities) == 1
    signature = entities[0].signature
    assert "\n" not in signature
    assert signature.startswith("type Point = {")
    assert "x: number;" in signature and "y: number;" in signature
    assert entities[0].line_end == 3


def test_class_with_methods():
    entities = _parse(SERVICE)
    assert len(entities) == 1
    cls = entities[0]
    assert cls.type is EntityType.CLASS
    assert cls.name == "UserService"
    assert cls.signature == "class UserService BaseService"
    assert cls.docstring == "Manages users."
    assert cls.line_start == 4
    assert cls.line_end == 14
    assert [m.name for m in cls.children] == ["findUser", "constructor"]
    assert all(m.type is EntityType.METHOD for m in cls.children)


def test_class_method_details():
    find_user, constructor = _parse(SERVICE)[0].children
    assert find_user.signature == "findUser(id: number): Promise<User>"
    assert find_user.docstring == "Finds a user."
    assert find_user.line_start == 8
    assert constructor.signature == "constructor(db: Database)"
    assert constructor.docstring == ""
    assert constructor.line_start == 12


def test_keywords_are_not_methods():
    entities = _parse(
        [
            "class Box {",
            "  open() {",
            "    if (this.locked) {",
            "      return;",
            "    }",
            "  }",
            "}",
        ]
    )
    assert entities[0].signature == "class Box"
    assert [m.name for m in entities[0].children] == ["open"]


def test_abstract_class_is_found():
    entities = _parse(["export abstract class Shape {", "}"])
    assert [(e.name, e.type) for e in entities] == [("Shape", EntityType.CLASS)]


def test_line_comments_are_skipped_when_reading_doc():
    entities = _parse(
        ["/** Adds numbers. */", "// helper", "function sum(a, b) {", "}"]
    )
    assert entities[0].docstring == "Adds numbers."


def test_non_comment_line_stops_doc():
    entities = _parse(["let x = 1;", "function run() {", "}"])
    assert entities[0].name == "run"
    assert entities[0].docstring == ""


@pytest.mark.parametrize(
    "source",
    [
        ["export function greet(name: string): string {", "}"],
        SERVICE,
        ["type ID = string | number;"],
    ],
)
def test_bytes_and_text_give_same_result(source):
    text = "\n".join(source)
    parser = TypeScriptParser()
    assert parser.parse(text.encode("utf-8")) == parser.parse(text)