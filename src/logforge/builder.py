"""
Builder contract shared by every logforge builder.

A builder turns an options mapping into a ready-to-use product:

    validate options -> assemble product -> return it

Concrete builders declare a typed options model (a pydantic model whose
aliases are the recognised configuration keys), the keys that must be
present, and an ``assemble`` method. Everything else lives here.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar, Generic, Optional, Protocol, Tuple, Type, TypeVar, runtime_checkable

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from logforge.exceptions import ConfigurationError
from logforge.logging_service import LoggingService
from logforge.utils import get_logger

logger = get_logger(__name__)


@runtime_checkable
class ServiceLookup(Protocol):
    """The part of a service container that builders rely on."""

    def has(self, name: str) -> bool: ...

    def get(self, name: str) -> Any: ...


class BuilderOptions(BaseModel):
    """
    Base class for typed builder options.

    Field names are snake_case; the accepted configuration keys are their
    camelCase aliases (``max_normalize_depth`` is read from
    ``maxNormalizeDepth``). Unknown keys are ignored because option bags
    routinely carry keys meant for other consumers (``formatter``,
    ``processors``, ``enabled``...).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
        arbitrary_types_allowed=True,
    )


ProductT = TypeVar("ProductT")
OptionsT = TypeVar("OptionsT", bound=BuilderOptions)


def require_mapping(options: Any, message: str = "Options must be a mapping") -> Mapping:
    """
    Ensure ``options`` is a mapping.

    Raises:
        ConfigurationError: CFG_002 if it is not
    """
    if not isinstance(options, Mapping):
        raise ConfigurationError(
            message=message,
            error_code="CFG_002",
            details={"options_type": type(options).__name__},
        )
    return options


def require_key(options: Mapping, key: str, message: Optional[str] = None) -> Any:
    """
    Ensure ``key`` is present in ``options`` and return its value.

    Raises:
        ConfigurationError: CFG_001 with ``message`` (default "No <key> provided")
    """
    if key not in options:
        raise ConfigurationError(
            message=message or f"No {key} provided",
            error_code="CFG_001",
            details={"key": key},
        )
    return options[key]


class Builder(ABC, Generic[ProductT, OptionsT]):
    """
    Base class for all builders.

    Call signature: ``builder(lookup, requested_name, options=None)``.
    ``requested_name`` is accepted for interface uniformity with service
    containers and is only used for logging.

    Class Attributes:
        options_model: Typed options structure for this builder
        requires_options: Fail with "Options must be a mapping" when the
            options value is not a mapping (including None)
        required_keys: ``(key, message)`` pairs checked before validation

    Example:
        >>> builder = UidProcessorBuilder()
        >>> processor = builder(container, "uid", {"length": 12})
    """

    options_model: ClassVar[Type[BuilderOptions]] = BuilderOptions
    requires_options: ClassVar[bool] = False
    required_keys: ClassVar[Tuple[Tuple[str, str], ...]] = ()

    def __call__(
        self,
        lookup: ServiceLookup,
        requested_name: str = "",
        options: Optional[Mapping[str, Any]] = None,
    ) -> ProductT:
        validated = self.validate(options)
        product = self.assemble(lookup, validated)

        logger.debug(
            "product_built",
            builder=type(self).__name__,
            requested_name=requested_name,
            product_type=type(product).__name__,
            options=LoggingService.sanitize_metadata(dict(options))
            if isinstance(options, Mapping)
            else None,
        )
        return product

    def validate(self, options: Any) -> OptionsT:
        """
        Shape-check ``options`` and convert them to the typed options model.

        Raises:
            ConfigurationError: If the options are not a mapping where one is
                required, a required key is missing, or a value is rejected
        """
        if self.requires_options:
            options = require_mapping(options)
        elif not isinstance(options, Mapping):
            if options is not None:
                logger.warning(
                    "options_ignored",
                    builder=type(self).__name__,
                    options_type=type(options).__name__,
                )
            options = {}

        for key, message in self.required_keys:
            require_key(options, key, message)

        try:
            return self.options_model.model_validate(dict(options))  # type: ignore[return-value]
        except ValidationError as exc:
            error = exc.errors()[0]
            key = self._alias_for(error.get("loc", ()))
            raise ConfigurationError(
                message=f"Invalid value for {key}: {error.get('msg')}",
                error_code="CFG_003",
                details={"key": key, "errors": exc.errors(include_url=False)},
                original_exception=exc,
            ) from exc

    @abstractmethod
    def assemble(self, lookup: ServiceLookup, options: OptionsT) -> ProductT:
        """Instantiate and configure the product from validated options."""

    def _alias_for(self, loc: Tuple[Any, ...]) -> str:
        if not loc:
            return "options"
        head = str(loc[0])
        field = self.options_model.model_fields.get(head)
        if field is not None and field.alias:
            head = field.alias
        return ".".join([head, *(str(part) for part in loc[1:])])
