"""JSON Schema generation for service specifications.

Every method of every service gets its own schema document.  Structs and
enums are never inlined: they are emitted once into a shared ``definitions``
table and referenced with ``$ref``, which keeps self-referential and
mutually recursive types finite.

Public API
----------
- :func:`generate` - one schema document per method.
- :func:`generate_definitions` - the shared definitions table.
- :func:`generate_for_method` - a single method document.
- :func:`generate_for_field` - a single field fragment.
- :func:`schema_type` - JSON Schema primitive for a type signature.

See https://json-schema.org/ for the target format.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Optional

from .spec.models import (
    BODY_LOCATIONS,
    EnumInfo,
    FieldInfo,
    MethodInfo,
    ServiceSpecification,
    StructInfo,
)
from .spec.type_signature import TypeSignature, TypeSignatureType

logger = logging.getLogger(__name__)

__all__ = [
    "DEFINITIONS_REF_PREFIX",
    "generate",
    "generate_definitions",
    "generate_for_field",
    "generate_for_method",
    "schema_type",
]

DEFINITIONS_REF_PREFIX = "#/definitions/"

JsonObject = dict[str, Any]

# ---------------------------------------------------------------------------
# Type mapping
# ---------------------------------------------------------------------------

_BOOLEAN_NAMES = frozenset({"boolean", "bool"})
_NUMBER_NAMES = frozenset({"short", "number", "float", "double"})
_INTEGER_NAMES = frozenset({
    "i", "i8", "i16", "i32", "i64",
    "integer", "int",
    "l32", "l64", "long", "long32", "long64",
    "int32", "int64", "uint32", "uint64", "sint32", "sint64",
    "fixed32", "fixed64", "sfixed32", "sfixed64",
})
_STRING_NAMES = frozenset({"binary", "byte", "bytes", "string"})
_ARRAY_NAMES = frozenset({"repeated", "list", "array", "set"})


def schema_type(signature: TypeSignature) -> str:
    """Return the JSON Schema ``type`` for *signature*.

    Unknown names map to ``"object"`` so custom types degrade gracefully.
    """
    name = signature.name.lower()
    kind = signature.type

    if kind is TypeSignatureType.ENUM:
        return "string"
    if kind is TypeSignatureType.ITERABLE:
        return "array" if name in _ARRAY_NAMES else "object"
    if kind is TypeSignatureType.MAP:
        return "object"
    if kind is TypeSignatureType.BASE:
        if name in _BOOLEAN_NAMES:
            return "boolean"
        if name in _NUMBER_NAMES:
            return "number"
        if name in _INTEGER_NAMES:
            return "integer"
        if name in _STRING_NAMES:
            return "string"
    return "object"


def _ref(name: str) -> JsonObject:
    return {"$ref": DEFINITIONS_REF_PREFIX + name}


# ---------------------------------------------------------------------------
# Field fragments
# ---------------------------------------------------------------------------


def generate_for_field(field: FieldInfo) -> JsonObject:
    """Render one field's type as a schema fragment or a ``$ref``."""
    node: JsonObject = {}
    if field.description:
        node["description"] = field.description

    signature = field.type_signature
    kind = signature.type

    if kind in (TypeSignatureType.STRUCT, TypeSignatureType.ENUM):
        node["$ref"] = DEFINITIONS_REF_PREFIX + signature.name
    elif kind is TypeSignatureType.ITERABLE:
        node["type"] = "array"
        node["items"] = generate_for_field(FieldInfo.of("items", signature.element_type))
    elif kind is TypeSignatureType.MAP:
        node["type"] = "object"
        node["additionalProperties"] = generate_for_field(
            FieldInfo.of("additionalProperties", signature.value_type)
        )
    else:
        node["type"] = schema_type(signature)
    return node


def _properties(fields: Any) -> tuple[JsonObject, list[str]]:
    properties: JsonObject = {}
    required: list[str] = []
    for field in fields:
        properties[field.name] = generate_for_field(field)
        if field.is_required:
            required.append(field.name)
    return properties, required


# ---------------------------------------------------------------------------
# Definitions
# ---------------------------------------------------------------------------


def _struct_definition(struct: StructInfo) -> JsonObject:
    node: JsonObject = {"type": "object", "title": struct.name}
    if struct.description:
        node["description"] = struct.description

    if struct.one_of:
        node["oneOf"] = [_ref(subtype.name) for subtype in struct.one_of]
        if struct.discriminator is not None:
            node["discriminator"] = {"propertyName": struct.discriminator.property_name}
        return node

    properties, required = _properties(struct.fields)
    if properties:
        node["properties"] = properties
    if required:
        node["required"] = required
    return node


def _enum_definition(enum: EnumInfo) -> JsonObject:
    node: JsonObject = {"type": "string", "title": enum.name}
    if enum.description:
        node["description"] = enum.description
    node["enum"] = [value.name for value in enum.values]
    return node


def generate_definitions(specification: ServiceSpecification) -> JsonObject:
    """Build the name-keyed definitions table for every struct and enum.

    A single flat pass over ``structs`` then ``enums``; field graphs are
    never walked, nested structs and enums become ``$ref`` pointers.
    """
    if specification is None:
        raise ValueError("specification must not be None")

    definitions: JsonObject = {}
    for struct in specification.structs:
        definitions[struct.name] = _struct_definition(struct)
    for enum in specification.enums:
        definitions[enum.name] = _enum_definition(enum)
    return definitions


# ---------------------------------------------------------------------------
# Methods
# ---------------------------------------------------------------------------


def generate_for_method(method: MethodInfo, definitions: JsonObject) -> JsonObject:
    """Build the schema document of one method.

    Only BODY and UNSPECIFIED parameters contribute to ``properties``;
    query, header and path parameters belong to the transport binding.
    The definitions table is deep-copied into the document.
    """
    root: JsonObject = {
        "$id": method.id,
        "title": method.name,
        "description": method.description,
        "type": "object",
    }

    body_params = [p for p in method.parameters if p.location in BODY_LOCATIONS]
    properties, required = _properties(body_params)
    root["properties"] = properties
    if required:
        root["required"] = required
    root["definitions"] = copy.deepcopy(definitions)
    return root


def generate(
    specification: Optional[ServiceSpecification],
    *,
    strict: bool = False,
) -> list[JsonObject]:
    """Generate one JSON Schema document per method.

    Documents are ordered service-then-method as declared.  With
    ``strict=True`` dangling ``$ref`` targets and duplicate definition
    names raise :class:`~schemadoc.spec.validation.UnresolvedReferenceError`
    before anything is emitted.
    """
    if specification is None:
        raise ValueError("specification must not be None")

    if strict:
        from .spec.validation import validate_references

        validate_references(specification)

    definitions = generate_definitions(specification)
    schemas = [
        generate_for_method(method, definitions)
        for method in specification.iter_methods()
    ]
    logger.debug(
        "Generated %d method schema(s) with %d definition(s)",
        len(schemas), len(definitions),
    )
    return schemas
