"""
schemadoc - JSON Schema documentation for service specifications

Turns a description of RPC-style services (their methods, parameters and the
structs and enums those reference) into one JSON Schema document per method,
with every named type emitted once into a shared ``definitions`` table.

Main Components:
    - schemadoc.spec: specification model, resolvers, builders and loaders
    - schemadoc.json_schema: the JSON Schema generator
    - schemadoc.cli: the ``schemadoc`` command-line interface
"""

from .json_schema import generate, generate_definitions, generate_for_method
from .spec import (
    ServiceSpecification,
    build_specification,
    load_specification,
    load_specification_file,
    service_from_class,
)

__version__ = "1.0.0"

__all__ = [
    "ServiceSpecification",
    "build_specification",
    "generate",
    "generate_definitions",
    "generate_for_method",
    "load_specification",
    "load_specification_file",
    "service_from_class",
]
