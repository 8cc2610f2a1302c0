"""Scanned representation of Go declarations.

These are the inputs of the protobuf transformer. They are immutable: a
scanned package is produced once and only read afterwards.
"""

from dataclasses import dataclass, field
from typing import Any

ERROR_TYPE = "error"

# Predeclared Go types. Any other unqualified identifier names a type
# declared in the package itself.
BASIC_TYPES = frozenset(
    [
        "bool",
        "string",
        "int",
        "int8",
        "int16",
        "int32",
        "int64",
        "uint",
        "uint8",
        "uint16",
        "uint32",
        "uint64",
        "uintptr",
        "byte",
        "rune",
        "float32",
        "float64",
        "complex64",
        "complex128",
        "error",
    ]
)


@dataclass(frozen=True)
class Basic:
    """A predeclared type such as ``int`` or ``string``."""

    name: str
    repeated: bool = False

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Named:
    """A declared type, qualified by the import path of its package.

    ``pointer`` is set for ``*T``; it only matters for RPC results, which are
    returned as pointers to the server.
    """

    path: str
    name: str
    repeated: bool = False
    pointer: bool = False

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}.{self.name}"
        return self.name


@dataclass(frozen=True)
class Map:
    """A ``map[Key]Value`` type."""

    key: "Type"
    value: "Type"
    repeated: bool = False

    def __str__(self) -> str:
        return f"map[{self.key}]{self.value}"


Type = Basic | Named | Map


def is_byte_slice(t: Type) -> bool:
    """Check if a type is ``[]byte``."""
    return isinstance(t, Basic) and t.repeated and t.name == "byte"


def is_error(t: Type) -> bool:
    return isinstance(t, Basic) and not t.repeated and t.name == ERROR_TYPE


@dataclass(frozen=True)
class Field:
    name: str
    type: Type


@dataclass(frozen=True)
class Struct:
    name: str
    fields: tuple[Field, ...] = ()


@dataclass(frozen=True)
class Enum:
    name: str
    values: tuple[str, ...] = ()


@dataclass(frozen=True)
class Func:
    """A function, or a method when ``recv`` names its receiver type.

    Only functions with ``generate`` set are exposed as RPCs. ``options``
    holds the arguments of the generate annotation.
    """

    name: str
    params: tuple[Type, ...] = ()
    results: tuple[Type, ...] = ()
    recv: str = ""
    generate: bool = False
    options: dict[str, Any] = field(default_factory=dict, hash=False, compare=False)


@dataclass(frozen=True)
class Package:
    path: str
    structs: tuple[Struct, ...] = ()
    enums: tuple[Enum, ...] = ()
    funcs: tuple[Func, ...] = ()

    @property
    def name(self) -> str:
        return self.path.rsplit("/", 1)[-1]
