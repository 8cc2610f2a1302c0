"""Syntax nodes for the generated Go declarations."""

from dataclasses import dataclass, field


@dataclass
class Call:
    func: str
    args: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        return f"{self.func}({', '.join(self.args)})"


Expr = str | Call


@dataclass
class Assign:
    """``lhs[0], lhs[1] = rhs``, or ``:=`` when ``define`` is set."""

    lhs: list[str]
    rhs: Expr
    define: bool = False


@dataclass
class ExprStmt:
    expr: Expr


@dataclass
class Return:
    values: list[str] = field(default_factory=list)


Stmt = Assign | ExprStmt | Return


@dataclass
class Param:
    name: str
    type: str


@dataclass
class StructField:
    name: str
    type: str


@dataclass
class TypeDecl:
    """A struct type declaration."""

    name: str
    fields: list[StructField] = field(default_factory=list)
    doc: str | None = None


@dataclass
class FuncDecl:
    """A function declaration, or a method one when ``recv`` is set.

    Named ``results`` make the function return them with a bare ``return``.
    """

    name: str
    params: list[Param] = field(default_factory=list)
    results: list[Param] = field(default_factory=list)
    result_type: str | None = None
    body: list[Stmt] = field(default_factory=list)
    recv: Param | None = None
    doc: str | None = None


Decl = TypeDecl | FuncDecl
