"""Generation of the Go implementation of the gRPC service server.

The generated server delegates every RPC to the function or method it was
created from, converting between the protobuf messages and the Go call
signature.
"""

from dataclasses import dataclass

from ..protobuf.types import RPC, Named, Package
from ..util import go_package_name, lower_first, upper_first
from . import printer
from .decls import Assign, Call, Decl, ExprStmt, FuncDecl, Param, Return, StructField, TypeDecl

CONTEXT_IMPORT = "golang.org/x/net/context"

RECV = "s"
REQUEST = "in"
RESULT = "result"
ERROR = "err"
AUX = "aux"


def service_impl_name(pkg: Package) -> str:
    """Name of the generated server type: ``foo`` -> ``fooServiceServer``."""
    return lower_first(pkg.service_name) + "Server"


def constructor_name(pkg: Package) -> str:
    """Name of the server constructor: ``foo`` -> ``NewFooServiceServer``."""
    return "New" + upper_first(pkg.service_name) + "Server"


def receivers(rpcs: list[RPC]) -> list[str]:
    """Distinct receiver types of the given RPCs, in order of appearance."""
    result: list[str] = []
    for rpc in rpcs:
        if rpc.recv and rpc.recv not in result:
            result.append(rpc.recv)
    return result


@dataclass
class _Context:
    impl_name: str
    proto: Package


class Generator:
    """Generates the service server declarations of a protobuf package."""

    def generate(self, pkg: Package, go_package: str | None = None) -> str:
        """Render the Go source file implementing the service of ``pkg``."""
        decls = self.generate_service(service_impl_name(pkg), pkg.rpcs, pkg)
        return printer.render_file(
            go_package or go_package_name(pkg.path),
            self.imports(pkg.rpcs, pkg),
            decls,
        )

    def generate_service(self, impl_name: str, rpcs: list[RPC], proto: Package) -> list[Decl]:
        """Build the server type, its constructor and one method per RPC."""
        ctx = _Context(impl_name=impl_name, proto=proto)
        recvs = receivers(rpcs)

        decls: list[Decl] = [
            self.decl_impl_type(impl_name, recvs),
            self.decl_constructor(impl_name, constructor_name(proto), recvs),
        ]
        for rpc in rpcs:
            decls.append(self.decl_method(ctx, rpc))
        return decls

    def imports(self, rpcs: list[RPC], proto: Package) -> list[str]:
        paths = {CONTEXT_IMPORT}
        for rpc in rpcs:
            for t in (rpc.input, rpc.output):
                if not t.generated and t.path and t.path != proto.path:
                    paths.add(t.path)
        return sorted(paths)

    def decl_impl_type(self, name: str, recvs: list[str] | None = None) -> TypeDecl:
        return TypeDecl(
            name=name,
            fields=[StructField(name=r, type=f"*{r}") for r in recvs or []],
        )

    def decl_constructor(
        self, impl_name: str, name: str, recvs: list[str] | None = None
    ) -> FuncDecl:
        doc = None
        if recvs:
            doc = (
                f"{name} returns a server without receivers. "
                f"{', '.join(recvs)} must be set before it is served."
            )
        return FuncDecl(
            name=name,
            result_type=f"*{impl_name}",
            body=[Return([f"&{impl_name}{{}}"])],
            doc=doc,
        )

    def decl_method(self, ctx: _Context, rpc: RPC) -> FuncDecl:
        """Build the server method handling one RPC."""
        output = self._type_name(ctx, rpc.output)
        body = []

        if not self._is_empty(ctx, rpc.output):
            body.append(Assign([RESULT], f"new({output})"))

        call = Call(self._call_target(rpc), self._call_args(ctx, rpc))
        lhs = self._call_results(ctx, rpc)
        if rpc.output_by_value:
            # The call returns a struct value, but the result is a pointer.
            lhs[0] = AUX
            body.append(Assign(lhs, call, define=True))
            body.append(Assign([RESULT], f"&{AUX}"))
        elif lhs:
            body.append(Assign(lhs, call))
        else:
            body.append(ExprStmt(call))
        body.append(Return())

        return FuncDecl(
            name=rpc.name,
            recv=Param(RECV, f"*{ctx.impl_name}"),
            params=[
                Param("ctx", "context.Context"),
                Param(REQUEST, f"*{self._type_name(ctx, rpc.input)}"),
            ],
            results=[Param(RESULT, f"*{output}"), Param(ERROR, "error")],
            body=body,
        )

    def _call_target(self, rpc: RPC) -> str:
        if rpc.recv:
            return f"{RECV}.{rpc.recv}.{rpc.method}"
        return rpc.method

    def _call_args(self, ctx: _Context, rpc: RPC) -> list[str]:
        if not rpc.input.generated:
            return [REQUEST]
        return [f"{REQUEST}.Arg{i}" for i in range(1, self._num_fields(ctx, rpc.input) + 1)]

    def _call_results(self, ctx: _Context, rpc: RPC) -> list[str]:
        if not rpc.output.generated:
            lhs = [RESULT]
        else:
            n = self._num_fields(ctx, rpc.output)
            lhs = [f"{RESULT}.Result{i}" for i in range(1, n + 1)]

        if rpc.has_error:
            lhs.append(ERROR)
        return lhs

    def _is_empty(self, ctx: _Context, t: Named) -> bool:
        return t.generated and self._num_fields(ctx, t) == 0

    def _num_fields(self, ctx: _Context, t: Named) -> int:
        msg = ctx.proto.find_message(t.name)
        if msg is None:
            return 0
        return len(msg.fields)

    def _type_name(self, ctx: _Context, t: Named) -> str:
        """Go name of a message type, qualified when it comes from another package."""
        if t.generated:
            return t.name
        if t.path:
            if t.path == ctx.proto.path:
                return t.name
            return f"{go_package_name(t.path)}.{t.name}"
        if t.package and t.package != ctx.proto.name:
            return f"{t.package.rsplit('.', 1)[-1]}.{t.name}"
        return t.name
