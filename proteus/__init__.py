"""Proteus - Protobuf schema and gRPC server generator for Go declarations."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("proteus")
except PackageNotFoundError:
    __version__ = "(local)"
