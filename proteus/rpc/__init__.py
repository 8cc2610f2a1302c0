"""gRPC server implementation generator."""

from .decls import *
from .generator import Generator as Generator
from .generator import constructor_name as constructor_name
from .generator import service_impl_name as service_impl_name
from .printer import render_decl as render_decl
from .printer import render_file as render_file
