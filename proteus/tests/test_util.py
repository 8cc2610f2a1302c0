"""Tests for naming utilities."""

from proteus.util import (
    go_package_name,
    lower_first,
    to_lower_snake_case,
    to_protobuf_pkg,
    to_upper_snake_case,
    upper_first,
)


def describe_to_lower_snake_case():
    def splits_camel_case(expect):
        expect(to_lower_snake_case("FooBar")) == "foo_bar"
        expect(to_lower_snake_case("fooBarBaz")) == "foo_bar_baz"

    def keeps_runs_of_capitals_together(expect):
        expect(to_lower_snake_case("HTTPServer")) == "httpserver"
        expect(to_lower_snake_case("ID")) == "id"

    def leaves_lower_case_alone(expect):
        expect(to_lower_snake_case("foo")) == "foo"
        expect(to_lower_snake_case("")) == ""


def describe_to_upper_snake_case():
    def upper_cases_snake_case(expect):
        expect(to_upper_snake_case("HomeGarden")) == "HOME_GARDEN"
        expect(to_upper_snake_case("Food")) == "FOOD"


def describe_to_protobuf_pkg():
    def converts_separators_to_dots(expect):
        expect(to_protobuf_pkg("github.com/src-d/proteus")) == "github.com.srcd.proteus"

    def strips_non_alphanumeric_characters(expect):
        pkg = to_protobuf_pkg("a/b-c.d")
        expect(pkg) == "a.bc.d"
        expect(all(ch.isalnum() or ch == "." for ch in pkg)) == True

    def strips_diacritics(expect):
        expect(to_protobuf_pkg("foo/cañón")) == "foo.canon"
        expect(to_protobuf_pkg("foo/café")) == "foo.cafe"

    def keeps_digits(expect):
        expect(to_protobuf_pkg("gopkg.in/yaml.v2")) == "gopkg.in.yaml.v2"


def describe_go_package_name():
    def uses_last_path_element(expect):
        expect(go_package_name("go/ast")) == "ast"
        expect(go_package_name("time")) == "time"

    def drops_version_suffix(expect):
        expect(go_package_name("gopkg.in/src-d/proteus.v1")) == "proteus"


def describe_case_helpers():
    def changes_first_letter(expect):
        expect(lower_first("FooService")) == "fooService"
        expect(upper_first("fooService")) == "FooService"
        expect(upper_first("")) == ""
