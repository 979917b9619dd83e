"""
Resolution of option values that may name another registered service.

Some options accept either the data itself or the name of a service that
provides it. The value is classified once into an explicit variant and
then resolved through the service lookup:

    Absent()          -> None, the caller applies its own default
    Inline(data)      -> data, unchanged, without touching the lookup
    Reference(name)   -> lookup.get(name)

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Union

from logforge.exceptions import ServiceNotCreatedError, ServiceNotFoundError

if TYPE_CHECKING:
    from logforge.builder import ServiceLookup


@dataclass(frozen=True)
class Absent:
    """No value was configured."""


@dataclass(frozen=True)
class Inline:
    """The value carries the data itself."""

    data: Any


@dataclass(frozen=True)
class Reference:
    """The value names a service registered in the lookup."""

    name: str


ServiceValue = Union[Absent, Inline, Reference]


def _is_empty(value: Any) -> bool:
    if value is None or value is False or value == "0":
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    if isinstance(value, (str, bytes, Mapping, Sequence, set, frozenset)):
        return len(value) == 0
    return False


def _is_mapping_like(value: Any) -> bool:
    if isinstance(value, (str, bytes, bytearray)):
        return False
    return isinstance(value, (Mapping, Sequence)) or hasattr(value, "__getitem__")


def classify(value: Any, field: str = "value") -> ServiceValue:
    """
    Classify a configured value.

    Args:
        value: The raw option value
        field: Option name, used in the error message

    Returns:
        Absent, Inline or Reference

    Raises:
        ServiceNotFoundError: If the value is neither empty, mapping-like
            nor a string
    """
    if _is_empty(value):
        return Absent()
    if _is_mapping_like(value):
        return Inline(value)
    if isinstance(value, str):
        return Reference(value)
    raise ServiceNotFoundError(
        message=f"No {field} service found",
        details={"field": field, "value_type": type(value).__name__},
    )


def resolve_service(
    lookup: "ServiceLookup",
    value: Any,
    field: str,
    label: Optional[str] = None,
) -> Any:
    """
    Resolve a value that is either inline data or a service reference.

    Args:
        lookup: Service lookup to resolve references against
        value: The raw option value
        field: Option name used in "No <field> service found"
        label: Name used in "Could not load <label>" (default: field)

    Returns:
        None for empty values, the value itself for inline data, or the
        service registered under the referenced name

    Raises:
        ServiceNotFoundError: If the reference is not known to the lookup,
            or the value has an unsupported type
        ServiceNotCreatedError: If the lookup knows the name but retrieving
            the service fails; the failure is chained as the cause

    Example:
        >>> resolve_service(container, {"REQUEST_URI": "/"}, "serverData")
        {'REQUEST_URI': '/'}
        >>> resolve_service(container, "request.environ", "serverData")
        <the registered mapping>
    """
    resolved = classify(value, field)

    if isinstance(resolved, Absent):
        return None

    if isinstance(resolved, Inline):
        return resolved.data

    if not lookup.has(resolved.name):
        raise ServiceNotFoundError(
            message=f"No {field} service found",
            details={"field": field, "service": resolved.name},
        )

    try:
        return lookup.get(resolved.name)
    except Exception as exc:
        raise ServiceNotCreatedError(
            message=f"Could not load {label or field}",
            details={"field": field, "service": resolved.name},
            original_exception=exc,
        ) from exc
