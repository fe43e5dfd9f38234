"""Build a :class:`ServiceSpecification` from annotated Python classes.

A *service class* is any class whose public methods carry type hints::

    class AnimalService:
        @route("POST", "/animals")
        def add(self, animal: Animal, dry_run: Annotated[bool, Query()] = False) -> None:
            \"\"\"Register an animal.\"\"\"

:func:`service_from_class` turns it into a :class:`ServiceInfo`;
:func:`build_specification` then walks every reachable struct/enum type and
resolves it through a :class:`ResolverChain`.
"""

from __future__ import annotations

import inspect
import logging
import typing
from collections import deque
from typing import Any, Iterable, Optional

from .annotations import Param, get_description, get_route
from .models import (
    EndpointInfo,
    EnumInfo,
    FieldInfo,
    FieldLocation,
    FieldRequirement,
    MethodInfo,
    ServiceInfo,
    ServiceSpecification,
    StructInfo,
)
from .resolvers import DescriptiveTypeInfoResolver, default_resolver_chain
from .type_signature import TypeSignature, TypeSignatureType
from .type_util import is_optional, strip_annotated, to_type_signature

logger = logging.getLogger(__name__)

__all__ = ["build_specification", "service_from_class"]


def _param_marker(hint: Any) -> Param:
    if typing.get_origin(hint) is typing.Annotated:
        for meta in typing.get_args(hint)[1:]:
            if isinstance(meta, Param):
                return meta
            if isinstance(meta, FieldLocation):
                return Param(meta)
    return Param()


def _function_hints(fn: Any) -> dict[str, Any]:
    try:
        return typing.get_type_hints(fn, include_extras=True)
    except (NameError, TypeError) as exc:
        logger.warning("Could not evaluate annotations of %s: %s", fn.__qualname__, exc)
        return dict(getattr(fn, "__annotations__", {}))


def _method_from_function(service_name: str, fn: Any) -> MethodInfo:
    hints = _function_hints(fn)
    parameters: list[FieldInfo] = []

    for pname, param in inspect.signature(fn).parameters.items():
        if pname in ("self", "cls"):
            continue
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        hint = hints.get(pname, Any)
        marker = _param_marker(hint)
        required = param.default is inspect.Parameter.empty and not is_optional(
            strip_annotated(hint)
        )
        parameters.append(
            FieldInfo.of(
                pname,
                to_type_signature(hint),
                FieldRequirement.REQUIRED if required else FieldRequirement.OPTIONAL,
                marker.location,
                marker.description,
            )
        )

    route = get_route(fn)
    http_method = route.method if route else "POST"
    path = (route.path if route and route.path else None) or f"/{service_name}/{fn.__name__}"

    return MethodInfo(
        service_name=service_name,
        name=fn.__name__,
        return_type=to_type_signature(hints.get("return", type(None))),
        parameters=tuple(parameters),
        endpoints=(EndpointInfo(path_mapping=path),),
        http_method=http_method,
        description=get_description(fn),
    )


def service_from_class(cls: type, name: Optional[str] = None) -> ServiceInfo:
    """Describe every public method of *cls* as a :class:`MethodInfo`.

    Methods are listed in definition order, inherited ones included.
    """
    if not isinstance(cls, type):
        raise TypeError(f"service_from_class() expects a class, got {cls!r}")

    service_name = name or cls.__name__
    methods: list[MethodInfo] = []
    seen: set[str] = set()
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        for attr, value in vars(klass).items():
            if attr.startswith("_") or not inspect.isfunction(value):
                continue
            if attr in seen:
                # Overridden in a subclass: keep the first position, latest body.
                idx = next(i for i, m in enumerate(methods) if m.name == attr)
                methods[idx] = _method_from_function(service_name, getattr(cls, attr))
                continue
            seen.add(attr)
            methods.append(_method_from_function(service_name, getattr(cls, attr)))

    logger.debug("Service %s: %d method(s)", service_name, len(methods))
    return ServiceInfo(service_name, tuple(methods), get_description(cls))


# ---------------------------------------------------------------------------
# Specification assembly
# ---------------------------------------------------------------------------


def _nested_signatures(signature: TypeSignature) -> Iterable[TypeSignature]:
    yield signature
    for param in signature.type_parameters:
        yield from _nested_signatures(param)


def _struct_signatures(info: StructInfo) -> Iterable[TypeSignature]:
    for f in info.fields:
        yield f.type_signature
    yield from info.one_of


def build_specification(
    services: Iterable[ServiceInfo],
    resolver: Optional[DescriptiveTypeInfoResolver] = None,
    exception_types: Iterable[type] = (),
) -> ServiceSpecification:
    """Collect every struct and enum reachable from *services*.

    Each named signature that carries a descriptor is resolved exactly once,
    in breadth-first discovery order.  Descriptors the resolver declines are
    left as dangling references.
    """
    services = tuple(services)
    chain = resolver or default_resolver_chain()

    structs: dict[str, StructInfo] = {}
    enums: dict[str, EnumInfo] = {}
    visited: set[str] = set()
    queue: deque[TypeSignature] = deque()

    def enqueue(signature: TypeSignature) -> None:
        for sig in _nested_signatures(signature):
            if sig.is_named and sig.name not in visited:
                visited.add(sig.name)
                queue.append(sig)

    for service in services:
        for method in service.methods:
            for param in method.parameters:
                enqueue(param.type_signature)
            enqueue(method.return_type)

    exceptions: list[StructInfo] = []
    for exc_type in exception_types:
        info = chain.try_resolve(exc_type)
        if isinstance(info, StructInfo):
            exceptions.append(info)
            for sig in _struct_signatures(info):
                enqueue(sig)

    while queue:
        sig = queue.popleft()
        if sig.descriptor is None:
            logger.warning("No descriptor for %s %r; leaving it unresolved", sig.type.value, sig.name)
            continue
        info = chain.try_resolve(sig.descriptor)
        if info is None:
            logger.warning("Resolver chain declined %r", sig.descriptor)
            continue
        if isinstance(info, EnumInfo):
            enums.setdefault(info.name, info)
            continue
        if sig.type is TypeSignatureType.ENUM:
            logger.warning("%r resolved to a struct but is referenced as an enum", sig.name)
        structs.setdefault(info.name, info)
        for nested in _struct_signatures(info):
            enqueue(nested)

    logger.info(
        "Built specification: %d service(s), %d struct(s), %d enum(s)",
        len(services), len(structs), len(enums),
    )
    return ServiceSpecification(
        services=services,
        enums=tuple(enums.values()),
        structs=tuple(structs.values()),
        exceptions=tuple(exceptions),
    )
