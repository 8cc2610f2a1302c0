"""Declaration file loader using Lark.

A declaration file describes the scanned view of one Go package::

    package github.com/example/shop

    struct Product {
        Name string
        Tags []string
        Price map[string]float64
        Added time.Time
    }

    enum Category { Food Tech }

    @generate(api_path="/product", api_method="get")
    func (*Store) Product(name string) (Product, error)
"""

import os
from dataclasses import dataclass, replace
from typing import Any, TypeVar

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput
from lark.visitors import Transformer

from .types import BASIC_TYPES, Basic, Enum, Field, Func, Map, Named, Package, Struct, Type

_g_parser: Lark | None = None

GENERATE_ANNOTATION = "generate"


class ParseError(RuntimeError):
    """Raised when a declaration file cannot be loaded."""


@dataclass
class _Name:
    value: str


@dataclass
class _Receiver:
    value: str


@dataclass
class _Results:
    types: list[Type]


@dataclass
class _Annotation:
    name: str
    arguments: dict[str, str]


@dataclass
class _AnnotationArg:
    name: str
    value: str


TFilter = TypeVar("TFilter", bound=object)


def _filter(args: list[Any], class_type: type[TFilter]) -> list[TFilter]:
    return [v for v in args if isinstance(v, class_type)]


def _find_one(args: list[Any], class_type: type[object]) -> Any:
    filtered = _filter(args, class_type)
    if len(filtered) == 0:
        return None
    if len(filtered) > 1:
        raise RuntimeError(f"Found more than one {class_type}")

    if hasattr(filtered[0], "value"):
        return filtered[0].value
    return filtered[0]


def _types(args: list[Any]) -> list[Type]:
    return [v for v in args if isinstance(v, (Basic, Named, Map))]


def _set_repeated(t: Type) -> Type:
    return replace(t, repeated=True)


class TreeTransformer(Transformer):
    """Transform parse tree into scanned declarations.

    Unqualified identifiers that are not predeclared Go types are resolved
    against ``path``, the import path of the package being loaded.
    """

    def __init__(self, path: str):
        super().__init__()
        self.path = path

    def NAME(self, token: Token) -> _Name:
        return _Name(value=str(token))

    def annotation_arg(self, args: list[Any]) -> _AnnotationArg:
        name = _filter(args, _Name)[0].value
        value = next(a for a in args if isinstance(a, Token))
        return _AnnotationArg(name=name, value=str(value)[1:-1])

    def annotation(self, args: list[Any]) -> _Annotation:
        return _Annotation(
            name=_filter(args, _Name)[0].value,
            arguments={arg.name: arg.value for arg in _filter(args, _AnnotationArg)},
        )

    def enum_value(self, args: list[Any]) -> str:
        return args[0].value

    def enum(self, args: list[Any]) -> Enum:
        return Enum(
            name=_find_one(args, _Name),
            values=tuple(v for v in args if isinstance(v, str)),
        )

    def field(self, args: list[Any]) -> Field:
        return Field(name=_find_one(args, _Name), type=_types(args)[0])

    def struct(self, args: list[Any]) -> Struct:
        return Struct(name=_find_one(args, _Name), fields=tuple(_filter(args, Field)))

    def param(self, args: list[Any]) -> Type:
        return _types(args)[0]

    def receiver(self, args: list[Any]) -> _Receiver:
        # The last name is the receiver type; a leading one is the variable.
        return _Receiver(value=_filter(args, _Name)[-1].value)

    def results(self, args: list[Any]) -> _Results:
        return _Results(types=_types(args))

    def function(self, args: list[Any]) -> Func:
        annotations = _filter(args, _Annotation)
        generate = [a for a in annotations if a.name == GENERATE_ANNOTATION]
        results = _find_one(args, _Results)
        return Func(
            name=_find_one(args, _Name),
            params=tuple(_types(args)),
            results=tuple(results.types) if results else (),
            recv=_find_one(args, _Receiver) or "",
            generate=bool(generate),
            options=dict(generate[0].arguments) if generate else {},
        )

    def repeated(self, args: list[Any]) -> Type:
        return _set_repeated(args[0])

    def pointer(self, args: list[Any]) -> Type:
        t = _types(args)[0]
        if isinstance(t, Named):
            return replace(t, pointer=True)
        return t

    def map(self, args: list[Any]) -> Map:
        key, value = args
        return Map(key=key, value=value)

    def qualified(self, args: list[Any]) -> Named:
        qualifier, name = args
        if isinstance(qualifier, Token):
            path = str(qualifier)[1:-1]
        else:
            path = qualifier.value
        return Named(path=path, name=name.value)

    def ident(self, args: list[Any]) -> Type:
        name = args[0].value
        if name in BASIC_TYPES:
            return Basic(name=name)
        return Named(path=self.path, name=name)


def _package_path(tree: Tree) -> str:
    decl = next(tree.find_data("package_decl"))
    return str(decl.children[0])


def _parser() -> Lark:
    global _g_parser

    if not _g_parser:
        with open(f"{os.path.dirname(__file__)}/scanner.lark", encoding="utf-8") as f:
            grammar = f.read()
        _g_parser = Lark(grammar)

    return _g_parser


def validate(pkg: Package) -> None:
    """Validate a loaded package."""
    for s in pkg.structs:
        names = [f.name for f in s.fields]
        for name in names:
            if names.count(name) > 1:
                raise ParseError(f"field {name} declared twice in struct {s.name}")


def parse(text: str) -> Package:
    """Parse a declaration file into a scanned package."""
    try:
        tree = _parser().parse(text)
    except UnexpectedInput as e:
        line = getattr(e, "line", "?")
        raise ParseError(f"invalid declaration file at line {line}") from e

    path = _package_path(tree)
    items = TreeTransformer(path).transform(tree).children

    pkg = Package(
        path=path,
        structs=tuple(_filter(items, Struct)),
        enums=tuple(_filter(items, Enum)),
        funcs=tuple(_filter(items, Func)),
    )
    validate(pkg)
    return pkg
