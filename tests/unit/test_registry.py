"""
Unit tests for BuilderRegistry.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from unittest.mock import MagicMock

import pytest

from logforge.exceptions import ServiceNotFoundError
from logforge.processors import UidProcessor, UidProcessorBuilder
from logforge.registry import BuilderRegistry


class TestBuilderRegistry:
    def setup_method(self):
        self.lookup = MagicMock()
        self.registry = BuilderRegistry(
            "processor",
            {"uid": UidProcessorBuilder()},
            aliases={"UidProcessor": "uid"},
            lookup=self.lookup,
        )

    def test_get_builds_product(self):
        processor = self.registry.get("uid", {"length": 12})

        assert isinstance(processor, UidProcessor)
        assert processor.length == 12

    def test_get_by_alias(self):
        assert isinstance(self.registry.get("UidProcessor"), UidProcessor)

    def test_get_returns_new_product(self):
        assert self.registry.get("uid") is not self.registry.get("uid")

    def test_has(self):
        assert self.registry.has("uid")
        assert self.registry.has("UidProcessor")
        assert not self.registry.has("git")
        assert not self.registry.has(None)

    def test_unknown_name(self):
        with pytest.raises(ServiceNotFoundError) as exc_info:
            self.registry.get("git")

        assert exc_info.value.message == "No processor builder registered for git"
        assert exc_info.value.error_code == "SVC_001"
        assert exc_info.value.details == {"family": "processor", "name": "git"}

    def test_builder_receives_lookup_and_canonical_name(self):
        builder = MagicMock(return_value="product")
        registry = BuilderRegistry("formatter", {"json": builder}, {"Json": "json"}, self.lookup)

        assert registry.get("Json", {"appendNewline": False}) == "product"
        builder.assert_called_once_with(self.lookup, "json", {"appendNewline": False})

    def test_names_sorted(self):
        registry = BuilderRegistry("formatter", {"line": MagicMock(), "json": MagicMock()})

        assert registry.names() == ["json", "line"]

    def test_alias_to_unknown_builder(self):
        with pytest.raises(ValueError, match="points to unknown processor builder"):
            BuilderRegistry("processor", {}, aliases={"Uid": "uid"})
