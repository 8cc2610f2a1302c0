"""Diagnostics collected while generating a package."""

import logging
from dataclasses import dataclass, field
from enum import StrEnum, auto

logger = logging.getLogger("proteus")


class Level(StrEnum):
    """Severity of a diagnostic."""

    INFO = auto()
    WARN = auto()


@dataclass(frozen=True)
class Diagnostic:
    level: Level
    message: str


@dataclass
class Report:
    """Sink for the leveled messages of a single generation run.

    Every message is kept in order and mirrored to the ``proteus`` logger.
    A report belongs to one run; concurrent runs must each use their own.
    """

    diagnostics: list[Diagnostic] = field(default_factory=list)

    def info(self, msg: str, *args: object) -> None:
        self._add(Level.INFO, msg % args if args else msg)

    def warn(self, msg: str, *args: object) -> None:
        self._add(Level.WARN, msg % args if args else msg)

    def _add(self, level: Level, message: str) -> None:
        self.diagnostics.append(Diagnostic(level, message))
        if level == Level.WARN:
            logger.warning(message)
        else:
            logger.info(message)

    @property
    def warnings(self) -> list[str]:
        return [d.message for d in self.diagnostics if d.level == Level.WARN]

    @property
    def infos(self) -> list[str]:
        return [d.message for d in self.diagnostics if d.level == Level.INFO]
