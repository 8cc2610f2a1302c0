"""Protobuf schema model produced by the transformer."""

from dataclasses import dataclass, field
from typing import Any

from dataclasses_json import DataClassJsonMixin

from ..util import upper_first

Options = dict[str, Any]

GENERATED_PROTO = "generated.proto"


@dataclass
class Basic(DataClassJsonMixin):
    """A scalar protobuf type such as ``int64`` or ``bytes``."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass
class Named(DataClassJsonMixin):
    """A reference to a message or enum.

    ``generated`` marks messages synthesized to wrap the arguments or results
    of an RPC. ``path`` is the Go import path the type comes from, if known.
    """

    package: str
    name: str
    generated: bool = False
    path: str = ""

    def __str__(self) -> str:
        if self.package:
            return f"{self.package}.{self.name}"
        return self.name


@dataclass
class Map(DataClassJsonMixin):
    key: "Type"
    value: "Type"

    def __str__(self) -> str:
        return f"map<{self.key}, {self.value}>"


Type = Basic | Named | Map


def new_generated_named(package: str, name: str) -> Named:
    return Named(package=package, name=name, generated=True)


@dataclass
class Field(DataClassJsonMixin):
    name: str
    pos: int
    type: Type
    repeated: bool = False
    options: Options = field(default_factory=dict)


@dataclass
class Message(DataClassJsonMixin):
    """A protobuf message.

    ``reserved`` holds the positions of dropped fields. Positions are never
    reused, so a reserved slot stays reserved.
    """

    name: str
    fields: list[Field] = field(default_factory=list)
    reserved: list[int] = field(default_factory=list)
    options: Options = field(default_factory=dict)

    def reserve(self, pos: int) -> None:
        if pos in self.reserved:
            return
        if any(f.pos == pos for f in self.fields):
            raise ValueError(f"position {pos} of message {self.name} is already in use")
        self.reserved.append(pos)
        self.reserved.sort()


@dataclass
class EnumValue(DataClassJsonMixin):
    name: str
    value: int
    options: Options = field(default_factory=dict)


@dataclass
class Enum(DataClassJsonMixin):
    name: str
    values: list[EnumValue] = field(default_factory=list)
    options: Options = field(default_factory=dict)


@dataclass
class RPC(DataClassJsonMixin):
    """Describes one exposed function or method.

    ``recv`` is the receiver type name of a method and is empty for free
    functions. ``has_error`` is set when the last result of the call is an
    error. ``output_by_value`` is set when the call returns its declared
    output struct by value instead of as a pointer.
    """

    name: str
    method: str
    input: Named
    output: Named
    recv: str = ""
    has_error: bool = False
    output_by_value: bool = False
    options: Options = field(default_factory=dict)


@dataclass
class Package(DataClassJsonMixin):
    """A protobuf package generated from a Go package."""

    name: str
    path: str
    imports: list[str] = field(default_factory=list)
    messages: list[Message] = field(default_factory=list)
    enums: list[Enum] = field(default_factory=list)
    rpcs: list[RPC] = field(default_factory=list)
    options: Options = field(default_factory=dict)

    def add_import(self, import_path: str) -> None:
        if import_path and import_path not in self.imports:
            self.imports.append(import_path)

    def import_type(self, proto_type: Any) -> None:
        """Import the file declaring a mapped type, if it needs one."""
        self.add_import(proto_type.import_path)

    def import_from_path(self, path: str) -> None:
        """Import the generated proto file of another Go package."""
        if path and path != self.path:
            self.add_import(f"{path}/{GENERATED_PROTO}")

    def find_message(self, name: str) -> Message | None:
        for msg in self.messages:
            if msg.name == name:
                return msg
        return None

    @property
    def service_name(self) -> str:
        return upper_first(self.name.rsplit(".", 1)[-1]) + "Service"
