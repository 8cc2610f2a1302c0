"""Renders protobuf packages as proto3 files."""

import json
from typing import Any

from jinja2 import Environment, PackageLoader

from .types import Map, Named, Options, Package, Type

env = Environment(
    loader=PackageLoader("proteus.protobuf", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    line_comment_prefix="%%",
    line_statement_prefix="%",
)

template = env.get_template("proto3.proto.j2")


def _option_value(value: Any) -> str:
    """Format an option value as a protobuf constant."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, dict):
        inner = " ".join(f"{k}: {_option_value(v)}" for k, v in value.items())
        return f"{{ {inner} }}"
    return json.dumps(str(value))


def _type_name(t: Type, pkg: Package) -> str:
    """Get the name of a type as seen from inside ``pkg``."""
    if isinstance(t, Named):
        if not t.package or t.package == pkg.name:
            return t.name
        return f"{t.package}.{t.name}"
    if isinstance(t, Map):
        return f"map<{_type_name(t.key, pkg)}, {_type_name(t.value, pkg)}>"
    return t.name


def _field_options(options: Options) -> str:
    """Get the bracketed option list of a field or enum value."""
    if not options:
        return ""
    inner = ", ".join(f"{k} = {_option_value(v)}" for k, v in options.items())
    return f" [{inner}]"


def _reserved(positions: list[int]) -> str:
    return ", ".join(str(p) for p in positions)


def render(pkg: Package) -> str:
    """Render a protobuf package to proto3 source."""
    return template.render(
        pkg=pkg,
        imports=sorted(pkg.imports),
        type_name=lambda t: _type_name(t, pkg),
        option_value=_option_value,
        field_options=_field_options,
        reserved=_reserved,
    )
