"""
BuilderRegistry - maps type names to the builders of one product family.

A registry is created once per family (formatters, processors, activation
strategies, handlers, clients) and stored in the service container under
one of the names below. Every ``get`` builds a new product.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from logforge.builder import Builder, ServiceLookup
from logforge.exceptions import ServiceNotFoundError

# Container service names of the family registries
FORMATTER_REGISTRY = "logforge.registry.formatters"
PROCESSOR_REGISTRY = "logforge.registry.processors"
ACTIVATION_STRATEGY_REGISTRY = "logforge.registry.activation_strategies"
HANDLER_REGISTRY = "logforge.registry.handlers"
CLIENT_REGISTRY = "logforge.registry.clients"


class BuilderRegistry:
    """
    Registry of builders for one product family.

    Attributes:
        family: Human readable family name ("formatter", "processor"...)
        lookup: Service lookup passed to every builder

    Example:
        >>> registry = BuilderRegistry("processor", {"uid": UidProcessorBuilder()})
        >>> processor = registry.get("uid", {"length": 12})
    """

    def __init__(
        self,
        family: str,
        builders: Mapping[str, Builder],
        aliases: Optional[Mapping[str, str]] = None,
        lookup: Optional[ServiceLookup] = None,
    ) -> None:
        self.family = family
        self._builders: Dict[str, Builder] = dict(builders)
        self._aliases: Dict[str, str] = dict(aliases or {})
        self.lookup = lookup

        for alias, target in self._aliases.items():
            if target not in self._builders:
                raise ValueError(f"Alias {alias!r} points to unknown {family} builder {target!r}")

    def has(self, name: str) -> bool:
        return self._canonical(name) in self._builders

    def get(self, name: str, options: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Build a product of type ``name``.

        Args:
            name: Canonical type name or alias
            options: Builder options

        Returns:
            A new product instance

        Raises:
            ServiceNotFoundError: If no builder is registered for ``name``
        """
        canonical = self._canonical(name)
        builder = self._builders.get(canonical)
        if builder is None:
            raise ServiceNotFoundError(
                message=f"No {self.family} builder registered for {name}",
                details={"family": self.family, "name": name},
            )
        return builder(self.lookup, canonical, options)

    def names(self) -> List[str]:
        return sorted(self._builders)

    def _canonical(self, name: str) -> str:
        if not isinstance(name, str):
            return ""
        return self._aliases.get(name, name)
