"""Identifier transforms shared by the schema and code generators."""

import unicodedata


def to_lower_snake_case(s: str) -> str:
    """Convert a Go identifier to lower_snake_case.

    An underscore is inserted before an upper case letter only when the
    previous letter was not upper case, so runs of capitals stay together:
    ``"FooBar"`` -> ``"foo_bar"``, ``"HTTPServer"`` -> ``"httpserver"``.
    """
    out: list[str] = []
    last_was_upper = False
    for i, ch in enumerate(s):
        if ch.isupper() and i != 0 and not last_was_upper:
            out.append("_")
        last_was_upper = ch.isupper()
        out.append(ch.lower())
    return "".join(out)


def to_upper_snake_case(s: str) -> str:
    """Convert a Go identifier to UPPER_SNAKE_CASE."""
    return to_lower_snake_case(s).upper()


def _strip_marks(s: str) -> str:
    decomposed = unicodedata.normalize("NFD", s)
    stripped = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
    return unicodedata.normalize("NFC", stripped)


def to_protobuf_pkg(path: str) -> str:
    """Derive a protobuf package name from a Go import path.

    Path separators and dots become dots, every other character that is not
    a letter or a digit is dropped and diacritics are removed.
    """
    chars: list[str] = []
    for ch in path:
        if ch in "/.":
            chars.append(".")
        elif ch.isalpha() or ch.isnumeric():
            chars.append(ch)
    return _strip_marks("".join(chars))


def go_package_name(path: str) -> str:
    """Guess the Go package name of an import path.

    The last path element is used without its version suffix, so both
    ``"go/ast"`` and ``"gopkg.in/yaml.v2"`` give the name the code uses.
    """
    return path.rstrip("/").rsplit("/", 1)[-1].split(".", 1)[0].replace("-", "_")


def lower_first(s: str) -> str:
    return s[:1].lower() + s[1:]


def upper_first(s: str) -> str:
    return s[:1].upper() + s[1:]
