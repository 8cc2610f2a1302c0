"""Plugins invoked while transforming a scanned package.

Every callback runs AFTER the entity it receives is complete: fields before
their message, values before their enum and everything before the package.
Plugins may modify the entity, e.g. add options, but must not remove it or
reorder its children.
"""

from .. import scanner
from .types import Enum, EnumValue, Field, Message, Package


class Plugin:
    """Base class for transformer plugins. All callbacks do nothing."""

    def on_package(self, pkg: Package, source: scanner.Package) -> None:
        """Called once, after all messages and enums are added to the package."""

    def on_message(self, pkg: Package, msg: Message, source: scanner.Struct) -> None:
        """Called after all the fields of a message are processed."""

    def on_field(self, pkg: Package, field: Field, source: scanner.Field) -> None:
        """Called after a field is added to its message."""

    def on_enum(self, pkg: Package, enum: Enum, source: scanner.Enum) -> None:
        """Called after all the values of an enum are processed."""

    def on_enum_value(self, pkg: Package, value: EnumValue, source: str) -> None:
        """Called after an enum value is processed with the original Go name."""


class Plugins(Plugin):
    """Ordered collection of plugins, itself a plugin.

    Each callback invokes the same callback of every plugin in registration
    order.
    """

    def __init__(self, plugins: list[Plugin] | None = None):
        self._plugins: list[Plugin] = list(plugins or [])

    def add(self, plugin: Plugin) -> None:
        self._plugins.append(plugin)

    def __len__(self) -> int:
        return len(self._plugins)

    def __iter__(self):
        return iter(self._plugins)

    def on_package(self, pkg: Package, source: scanner.Package) -> None:
        for p in self._plugins:
            p.on_package(pkg, source)

    def on_message(self, pkg: Package, msg: Message, source: scanner.Struct) -> None:
        for p in self._plugins:
            p.on_message(pkg, msg, source)

    def on_field(self, pkg: Package, field: Field, source: scanner.Field) -> None:
        for p in self._plugins:
            p.on_field(pkg, field, source)

    def on_enum(self, pkg: Package, enum: Enum, source: scanner.Enum) -> None:
        for p in self._plugins:
            p.on_enum(pkg, enum, source)

    def on_enum_value(self, pkg: Package, value: EnumValue, source: str) -> None:
        for p in self._plugins:
            p.on_enum_value(pkg, value, source)
