"""Mappings between Go types and protobuf types."""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from dataclasses_json import DataClassJsonMixin

from .types import Basic, Named, Type


class MappingError(ValueError):
    """Raised when a type mapping is malformed."""


@dataclass(frozen=True)
class ProtoType(DataClassJsonMixin):
    """The protobuf type a Go type maps to.

    ``import_path`` is the proto file that has to be imported to use the type
    and ``warn``, if set, is reported every time the mapping is used.
    """

    name: str
    package: str = ""
    import_path: str = ""
    warn: str | None = None

    def type(self) -> Type:
        if self.package:
            return Named(package=self.package, name=self.name)
        return Basic(name=self.name)


class TypeMappings(Mapping[str, ProtoType]):
    """Immutable table from Go type identity to protobuf type.

    Keys are ``"int"`` for predeclared types and ``"import/path.Name"`` for
    declared ones.
    """

    def __init__(self, mappings: Mapping[str, ProtoType] | None = None):
        mappings = dict(mappings or {})
        for go_type, proto_type in mappings.items():
            _check(go_type, proto_type)
        self._mappings = MappingProxyType(mappings)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TypeMappings":
        """Build mappings from plain data, as read from a JSON config file."""
        mappings: dict[str, ProtoType] = {}
        for go_type, entry in data.items():
            if isinstance(entry, str):
                entry = {"name": entry}
            if not isinstance(entry, Mapping):
                raise MappingError(f"mapping for {go_type!r} must be an object")
            if not entry.get("name"):
                raise MappingError(f"mapping for {go_type!r} has no protobuf type name")
            mappings[go_type] = ProtoType.from_dict(dict(entry))
        return cls(mappings)

    def __getitem__(self, key: str) -> ProtoType:
        return self._mappings[key]

    def __iter__(self):
        return iter(self._mappings)

    def __len__(self) -> int:
        return len(self._mappings)

    def __repr__(self) -> str:
        return f"TypeMappings({dict(self._mappings)!r})"


def _check(go_type: str, proto_type: ProtoType) -> None:
    if not go_type:
        raise MappingError("type mapping with an empty Go type")
    if not isinstance(proto_type, ProtoType) or not proto_type.name:
        raise MappingError(f"mapping for {go_type!r} has no protobuf type name")


def _upgraded(go_type: str, proto_name: str) -> ProtoType:
    return ProtoType(name=proto_name, warn=f"type {go_type} was upgraded to {proto_name}")


DEFAULT_MAPPINGS = TypeMappings(
    {
        "bool": ProtoType(name="bool"),
        "string": ProtoType(name="string"),
        "float64": ProtoType(name="double"),
        "float32": ProtoType(name="float"),
        "int": ProtoType(name="int64"),
        "int8": _upgraded("int8", "int32"),
        "int16": _upgraded("int16", "int32"),
        "int32": ProtoType(name="int32"),
        "int64": ProtoType(name="int64"),
        "rune": ProtoType(name="int32"),
        "uint": ProtoType(name="uint64"),
        "uint8": _upgraded("uint8", "uint32"),
        "uint16": _upgraded("uint16", "uint32"),
        "uint32": ProtoType(name="uint32"),
        "uint64": ProtoType(name="uint64"),
        "uintptr": ProtoType(name="uint64"),
        "byte": _upgraded("byte", "uint32"),
        "time.Time": ProtoType(
            name="Timestamp",
            package="google.protobuf",
            import_path="google/protobuf/timestamp.proto",
        ),
        "time.Duration": ProtoType(
            name="Duration",
            package="google.protobuf",
            import_path="google/protobuf/duration.proto",
        ),
    }
)


class MappingTable:
    """Custom mappings layered over the defaults.

    Both tables are immutable; custom mappings always win.
    """

    def __init__(
        self,
        custom: TypeMappings | None = None,
        default: TypeMappings = DEFAULT_MAPPINGS,
    ):
        self.custom = custom if custom is not None else TypeMappings()
        self.default = default

    def find(self, go_type: str) -> ProtoType | None:
        proto_type = self.custom.get(go_type)
        if proto_type is None:
            proto_type = self.default.get(go_type)
        return proto_type
