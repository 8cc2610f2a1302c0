"""Prints generated declarations as gofmt formatted Go source."""

from jinja2 import Environment, PackageLoader

from .decls import Assign, Decl, ExprStmt, FuncDecl, Param, Return, Stmt, TypeDecl

TAB = "\t"

env = Environment(
    loader=PackageLoader("proteus.rpc", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    line_comment_prefix="%%",
    line_statement_prefix="%",
)

template = env.get_template("server.go.j2")


def _params(params: list[Param]) -> str:
    return ", ".join(f"{p.name} {p.type}" for p in params)


def _doc(doc: str | None) -> list[str]:
    if not doc:
        return []
    return [f"// {line}" for line in doc.splitlines()]


def render_stmt(stmt: Stmt) -> str:
    if isinstance(stmt, Assign):
        op = ":=" if stmt.define else "="
        return f"{', '.join(stmt.lhs)} {op} {stmt.rhs}"
    if isinstance(stmt, ExprStmt):
        return str(stmt.expr)
    if isinstance(stmt, Return):
        if stmt.values:
            return f"return {', '.join(stmt.values)}"
        return "return"
    raise ValueError(f"Unknown statement: {stmt!r}")


def _render_type(decl: TypeDecl) -> str:
    lines = _doc(decl.doc)
    lines.append(f"type {decl.name} struct {{")
    # gofmt aligns the types of consecutive fields
    width = max((len(f.name) for f in decl.fields), default=0)
    for f in decl.fields:
        lines.append(f"{TAB}{f.name.ljust(width)} {f.type}")
    lines.append("}")
    return "\n".join(lines)


def _render_func(decl: FuncDecl) -> str:
    lines = _doc(decl.doc)

    header = "func "
    if decl.recv is not None:
        header += f"({decl.recv.name} {decl.recv.type}) "
    header += f"{decl.name}({_params(decl.params)})"
    if decl.results:
        header += f" ({_params(decl.results)})"
    elif decl.result_type:
        header += f" {decl.result_type}"

    lines.append(header + " {")
    for stmt in decl.body:
        lines.append(TAB + render_stmt(stmt))
    lines.append("}")
    return "\n".join(lines)


def render_decl(decl: Decl) -> str:
    """Print a single declaration, without trailing newline."""
    if isinstance(decl, TypeDecl):
        return _render_type(decl)
    if isinstance(decl, FuncDecl):
        return _render_func(decl)
    raise ValueError(f"Unknown declaration: {decl!r}")


def render_file(package: str, imports: list[str], decls: list[Decl]) -> str:
    """Print a complete Go source file."""
    return template.render(
        package=package,
        imports=imports,
        decls=decls,
        render_decl=render_decl,
        TAB=TAB,
    )
