"""Scanned Go declarations and their loader."""

from .parser import ParseError as ParseError
from .parser import parse as parse
from .types import *
