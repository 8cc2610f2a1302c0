"""Tests for proto3 rendering."""

from proteus import scanner
from proteus.protobuf import (
    RPC,
    Basic,
    Enum,
    EnumValue,
    Field,
    Map,
    Message,
    Named,
    Package,
    Transformer,
    render,
)

EXPECTED_MESSAGE = """\
message Point {
  reserved 2;
  int64 x = 1;
  repeated string tags = 3;
  map<string, int64> counts = 4 [(gogoproto.nullable) = false];
  google.protobuf.Timestamp at = 5;
  Color color = 6;
}
"""


def _pkg() -> Package:
    return Package(
        name="foo",
        path="foo",
        imports=["google/protobuf/timestamp.proto"],
        messages=[
            Message(
                name="Point",
                fields=[
                    Field("x", 1, Basic("int64")),
                    Field("tags", 3, Basic("string"), repeated=True),
                    Field(
                        "counts",
                        4,
                        Map(Basic("string"), Basic("int64")),
                        options={"(gogoproto.nullable)": False},
                    ),
                    Field("at", 5, Named("google.protobuf", "Timestamp")),
                    Field("color", 6, Named("foo", "Color")),
                ],
                reserved=[2],
            ),
        ],
        enums=[Enum("Color", [EnumValue("RED", 0), EnumValue("DARK_BLUE", 1)])],
        rpcs=[
            RPC(
                name="Paint",
                method="Paint",
                input=Named("", "PaintRequest", generated=True),
                output=Named("foo", "Point"),
            )
        ],
        options={"go_package": "foo"},
    )


def describe_render():
    def renders_header(expect):
        output = render(_pkg())
        expect(output.startswith("// Code generated by proteus. DO NOT EDIT.\n")) == True
        expect('syntax = "proto3";\npackage foo;\n' in output) == True
        expect('import "google/protobuf/timestamp.proto";' in output) == True
        expect('option go_package = "foo";' in output) == True

    def separates_sections_with_blank_lines(expect):
        output = render(_pkg())
        expect(
            output.startswith(
                "// Code generated by proteus. DO NOT EDIT.\n"
                'syntax = "proto3";\n'
                "package foo;\n"
                "\n"
                'import "google/protobuf/timestamp.proto";\n'
                "\n"
                'option go_package = "foo";\n'
                "\n"
                "message Point {\n"
            )
        ) == True
        expect("}\n\nenum Color {\n" in output) == True
        expect("}\n\nservice FooService {\n" in output) == True
        expect("\n\n\n" in output) == False

    def renders_messages(expect):
        expect(EXPECTED_MESSAGE in render(_pkg())) == True

    def renders_enums(expect):
        output = render(_pkg())
        expect("enum Color {\n  RED = 0;\n  DARK_BLUE = 1;\n}\n" in output) == True

    def renders_service(expect):
        output = render(_pkg())
        expect("service FooService {\n  rpc Paint (PaintRequest) returns (Point);\n}\n" in output) == True

    def renders_rpc_options(expect, example_pkg):
        output = render(Transformer().transform(example_pkg))
        expect(
            "  rpc Sum (SumRequest) returns (SumResponse) {\n"
            '    option (google.api.http) = { get: "/sum/{arg1}/{arg2}" };\n'
            "  }\n" in output
        ) == True

    def qualifies_types_of_other_packages(expect, example_pkg):
        output = render(Transformer().transform(example_pkg))
        expect("  Category category = 8;" in output) == True
        expect(
            "  github.com.srcd.proteus.example.categories.CategoryOptions options = 9;" in output
        ) == True

    def renders_empty_messages(expect):
        source = scanner.Package(path="foo", funcs=(scanner.Func("Ping", generate=True),))
        output = render(Transformer().transform(source))
        expect("message PingRequest {\n}\n" in output) == True
        expect("rpc Ping (PingRequest) returns (PingResponse);" in output) == True
