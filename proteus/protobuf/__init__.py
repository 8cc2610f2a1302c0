"""Protobuf schema model and the transformer producing it."""

from .gogo import GoGoPlugin as GoGoPlugin
from .mappings import DEFAULT_MAPPINGS as DEFAULT_MAPPINGS
from .mappings import MappingError as MappingError
from .mappings import MappingTable as MappingTable
from .mappings import ProtoType as ProtoType
from .mappings import TypeMappings as TypeMappings
from .plugin import Plugin as Plugin
from .plugin import Plugins as Plugins
from .render import render as render
from .transform import TransformError as TransformError
from .transform import Transformer as Transformer
from .types import *
