"""Transformation of scanned Go packages into protobuf packages."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from .. import scanner
from ..report import Report
from ..util import to_lower_snake_case, to_protobuf_pkg, to_upper_snake_case
from .mappings import MappingTable, ProtoType, TypeMappings
from .plugin import Plugin, Plugins
from .types import (
    RPC,
    Basic,
    Enum,
    EnumValue,
    Field,
    Map,
    Message,
    Named,
    Package,
    Type,
    new_generated_named,
)

HTTP_OPTION = "(google.api.http)"
HTTP_IMPORT = "google/api/annotations.proto"


class TransformError(RuntimeError):
    """Raised when a scanned package can not be transformed at all."""


@dataclass
class _Context:
    pkg: Package
    source: scanner.Package
    report: Report
    declared: set[str] = field(default_factory=set)
    enums: set[str] = field(default_factory=set)


class Transformer:
    """Converts scanned Go packages to protobuf packages.

    Custom mappings are checked before the default mappings, so any Go type
    can be overridden. Mappings and plugins are only set up before the first
    call to :meth:`transform`; after that the transformer is read-only and
    can be shared between runs.
    """

    def __init__(
        self,
        mappings: TypeMappings | None = None,
        plugins: Iterable[Plugin] = (),
    ):
        self._mappings = MappingTable(mappings)
        self._plugins = Plugins(list(plugins))
        self._started = False

    def _check_setup(self) -> None:
        if self._started:
            raise RuntimeError("transformer can not be modified after a transformation started")

    def add_plugin(self, plugin: Plugin) -> None:
        self._check_setup()
        self._plugins.add(plugin)

    def set_mappings(self, mappings: TypeMappings | None) -> None:
        """Set the custom mappings. ``None`` is ignored."""
        if mappings is None:
            return
        self._check_setup()
        self._mappings = MappingTable(mappings)

    def transform(self, source: scanner.Package, report: Report | None = None) -> Package:
        """Convert a scanned package to a protobuf package.

        Fields with types that can not be mapped are dropped with a warning,
        reserving their position. Only duplicated declarations make the
        whole transformation fail.
        """
        self._started = True
        _check_names(source)

        ctx = _Context(
            pkg=Package(name=to_protobuf_pkg(source.path), path=source.path),
            source=source,
            report=report if report is not None else Report(),
            declared={s.name for s in source.structs} | {e.name for e in source.enums},
            enums={e.name for e in source.enums},
        )

        for s in source.structs:
            ctx.pkg.messages.append(self.transform_struct(ctx, s))

        for e in source.enums:
            ctx.pkg.enums.append(self.transform_enum(ctx, e))

        for f in source.funcs:
            if not f.generate:
                continue
            rpc = self.transform_func(ctx, f)
            if rpc is not None:
                ctx.pkg.rpcs.append(rpc)

        self._plugins.on_package(ctx.pkg, source)
        return ctx.pkg

    def transform_enum(self, ctx: _Context, e: scanner.Enum) -> Enum:
        enum = Enum(name=e.name)

        for i, v in enumerate(e.values):
            val = EnumValue(name=to_upper_snake_case(v), value=i)
            enum.values.append(val)
            self._plugins.on_enum_value(ctx.pkg, val, v)

        self._plugins.on_enum(ctx.pkg, enum, e)
        return enum

    def transform_struct(self, ctx: _Context, s: scanner.Struct) -> Message:
        msg = Message(name=s.name)

        for pos, f in enumerate(s.fields, start=1):
            field = self.transform_field(ctx, f, pos)
            if field is None:
                msg.reserve(pos)
                ctx.report.warn(
                    "field %r of struct %r has an invalid type, ignoring field but reserving its position",
                    f.name,
                    s.name,
                )
                continue

            msg.fields.append(field)
            self._plugins.on_field(ctx.pkg, field, f)

        self._plugins.on_message(ctx.pkg, msg, s)
        return msg

    def transform_field(self, ctx: _Context, f: scanner.Field, pos: int) -> Field | None:
        repeated = f.type.repeated

        # []byte is the only repeated type that maps to a non-repeated
        # protobuf type.
        if scanner.is_byte_slice(f.type):
            typ: Type | None = Basic(name="bytes")
            repeated = False
        else:
            typ = self.transform_type(ctx, f.type)
            if typ is None:
                return None

        return Field(
            name=to_lower_snake_case(f.name),
            pos=pos,
            type=typ,
            repeated=repeated,
        )

    def transform_type(self, ctx: _Context, typ: scanner.Type) -> Type | None:
        match typ:
            case scanner.Named():
                proto_type = self._find_mapping(ctx, str(typ))
                if proto_type is not None:
                    ctx.pkg.import_type(proto_type)
                    return proto_type.type()

                # Not mapped, so it must be a message generated from that package.
                ctx.pkg.import_from_path(typ.path)
                return Named(package=to_protobuf_pkg(typ.path), name=typ.name, path=typ.path)
            case scanner.Basic():
                proto_type = self._find_mapping(ctx, typ.name)
                if proto_type is not None:
                    ctx.pkg.import_type(proto_type)
                    return proto_type.type()

                ctx.report.warn("basic type %r is not defined in the mappings, ignoring", typ.name)
                return None
            case scanner.Map():
                key = self._transform_map_part(ctx, typ.key)
                value = self._transform_map_part(ctx, typ.value)
                if key is None or value is None:
                    return None
                return Map(key=key, value=value)
            case _:
                ctx.report.warn("type %r is not supported, ignoring", typ)
                return None

    def _transform_map_part(self, ctx: _Context, typ: scanner.Type) -> Type | None:
        """Resolve the key or value type of a map, which can not be repeated."""
        if scanner.is_byte_slice(typ):
            return Basic(name="bytes")
        if typ.repeated:
            ctx.report.warn("slice type []%s can not be used in a map, ignoring", typ)
            return None
        return self.transform_type(ctx, typ)

    def transform_func(self, ctx: _Context, f: scanner.Func) -> RPC | None:
        """Build the RPC exposing a function or method.

        Imports are only kept when the RPC is; a dropped RPC leaves the
        package as it was.
        """
        name = f"{f.recv}_{f.name}" if f.recv else f.name
        imports = list(ctx.pkg.imports)

        results = list(f.results)
        has_error = bool(results) and scanner.is_error(results[-1])
        if has_error:
            results.pop()

        response = self._wrap(ctx, name, "Response", "result", results)
        if response is None:
            ctx.pkg.imports[:] = imports
            ctx.report.warn("unable to create output message for %r, ignoring", name)
            return None

        request = self._wrap(ctx, name, "Request", "arg", list(f.params))
        if request is None:
            ctx.pkg.imports[:] = imports
            ctx.report.warn("unable to create input message for %r, ignoring", name)
            return None

        for _, msg in (request, response):
            if msg is not None:
                ctx.pkg.messages.append(msg)

        output, output_msg = response
        return RPC(
            name=name,
            method=f.name,
            recv=f.recv,
            has_error=has_error,
            input=request[0],
            output=output,
            output_by_value=output_msg is None and not results[0].pointer,
            options=self._rpc_options(ctx, f),
        )

    def _wrap(
        self, ctx: _Context, rpc: str, suffix: str, prefix: str, types: list[scanner.Type]
    ) -> tuple[Named, Message | None] | None:
        """Return the message type for a list of arguments or results.

        A single declared struct is used as it is; anything else is wrapped
        in a generated message with one positional field per type.
        """
        if len(types) == 1 and self._is_external(ctx, types[0]):
            typ = types[0]
            ctx.pkg.import_from_path(typ.path)
            return Named(package=to_protobuf_pkg(typ.path), name=typ.name, path=typ.path), None

        msg = Message(name=f"{rpc}{suffix}")
        if msg.name in ctx.declared or ctx.pkg.find_message(msg.name) is not None:
            raise TransformError(f"generated message {msg.name} collides with a declared type")

        for pos, typ in enumerate(types, start=1):
            field = self.transform_field(ctx, scanner.Field(name=f"{prefix}{pos}", type=typ), pos)
            if field is None:
                return None
            msg.fields.append(field)

        return new_generated_named("", msg.name), msg

    def _is_external(self, ctx: _Context, typ: scanner.Type) -> bool:
        if not isinstance(typ, scanner.Named) or typ.repeated:
            return False
        if self._mappings.find(str(typ)) is not None:
            return False
        return not (typ.path == ctx.source.path and typ.name in ctx.enums)

    def _rpc_options(self, ctx: _Context, f: scanner.Func) -> dict:
        api_path = f.options.get("api_path")
        if not api_path:
            return {}
        method = f.options.get("api_method", "get").lower()
        ctx.pkg.add_import(HTTP_IMPORT)
        return {HTTP_OPTION: {method: api_path}}

    def _find_mapping(self, ctx: _Context, go_type: str) -> ProtoType | None:
        proto_type = self._mappings.find(go_type)
        if proto_type is not None and proto_type.warn:
            ctx.report.info(proto_type.warn)
        return proto_type


def _check_names(source: scanner.Package) -> None:
    seen: set[str] = set()
    for name in [s.name for s in source.structs] + [e.name for e in source.enums]:
        if name in seen:
            raise TransformError(f"type {name} is declared more than once in {source.path}")
        seen.add(name)

    rpcs: set[str] = set()
    for f in source.funcs:
        if not f.generate:
            continue
        name = f"{f.recv}_{f.name}" if f.recv else f.name
        if name in rpcs:
            raise TransformError(f"function {name} is exposed more than once in {source.path}")
        rpcs.add(name)
