"""Service specification model, resolvers and loaders."""

from .annotations import (
    Body,
    Header,
    Param,
    Path,
    Query,
    description,
    json_subtypes,
    json_type_info,
    route,
)
from .builder import build_specification, service_from_class
from .loader import SpecificationLoadError, load_specification, load_specification_file
from .models import (
    DiscriminatorInfo,
    EndpointInfo,
    EnumInfo,
    EnumValueInfo,
    FieldInfo,
    FieldLocation,
    FieldRequirement,
    MethodInfo,
    ServiceInfo,
    ServiceSpecification,
    StructInfo,
)
from .resolvers import (
    DescriptiveTypeInfoResolver,
    PolymorphismTypeInfoResolver,
    ResolverChain,
    StructuralTypeInfoResolver,
    default_resolver_chain,
)
from .type_signature import TypeSignature, TypeSignatureType
from .type_util import to_type_signature
from .validation import UnresolvedReferenceError, find_unresolved_references, validate_references

__all__ = [
    "Body",
    "DescriptiveTypeInfoResolver",
    "DiscriminatorInfo",
    "EndpointInfo",
    "EnumInfo",
    "EnumValueInfo",
    "FieldInfo",
    "FieldLocation",
    "FieldRequirement",
    "Header",
    "MethodInfo",
    "Param",
    "Path",
    "PolymorphismTypeInfoResolver",
    "Query",
    "ResolverChain",
    "ServiceInfo",
    "ServiceSpecification",
    "SpecificationLoadError",
    "StructInfo",
    "StructuralTypeInfoResolver",
    "TypeSignature",
    "TypeSignatureType",
    "UnresolvedReferenceError",
    "build_specification",
    "default_resolver_chain",
    "description",
    "find_unresolved_references",
    "json_subtypes",
    "json_type_info",
    "load_specification",
    "load_specification_file",
    "route",
    "service_from_class",
    "to_type_signature",
    "validate_references",
]
