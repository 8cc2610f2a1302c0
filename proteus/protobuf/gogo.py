"""Plugin adding the gogo/protobuf options needed to keep Go names and types."""

from .. import scanner
from ..util import go_package_name
from .plugin import Plugin
from .types import Enum, EnumValue, Field, Named, Package

GOGO_IMPORT = "github.com/gogo/protobuf/gogoproto/gogo.proto"

# Well known types gogo can generate as standard library types.
STD_TYPES = {
    "google.protobuf.Timestamp": "(gogoproto.stdtime)",
    "google.protobuf.Duration": "(gogoproto.stdduration)",
}


class GoGoPlugin(Plugin):
    def on_package(self, pkg: Package, source: scanner.Package) -> None:
        pkg.options["go_package"] = go_package_name(source.path)
        pkg.add_import(GOGO_IMPORT)

    def on_field(self, pkg: Package, field: Field, source: scanner.Field) -> None:
        field.options["(gogoproto.customname)"] = source.name
        if isinstance(field.type, Named) and str(field.type) in STD_TYPES:
            field.options[STD_TYPES[str(field.type)]] = True
            field.options["(gogoproto.nullable)"] = False

    def on_enum(self, pkg: Package, enum: Enum, source: scanner.Enum) -> None:
        enum.options["(gogoproto.goproto_enum_prefix)"] = False

    def on_enum_value(self, pkg: Package, value: EnumValue, source: str) -> None:
        value.options["(gogoproto.enumvalue_customname)"] = source
