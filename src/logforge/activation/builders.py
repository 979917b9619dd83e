"""
Builders for the activation strategy family.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from collections.abc import Mapping
from typing import Any, Dict, Union

from pydantic import field_validator

from logforge.activation.strategies import (
    ChannelLevelActivationStrategy,
    ErrorLevelActivationStrategy,
)
from logforge.builder import Builder, BuilderOptions, ServiceLookup
from logforge.defaults import DEFAULT_LEVEL


class ErrorLevelActivationStrategyOptions(BuilderOptions):
    action_level: Union[int, str] = DEFAULT_LEVEL


class ChannelLevelActivationStrategyOptions(BuilderOptions):
    default_action_level: Union[int, str] = DEFAULT_LEVEL
    channel_to_action_level: Dict[str, Union[int, str]] = {}

    @field_validator("channel_to_action_level", mode="before")
    @classmethod
    def ignore_non_mapping(cls, v: Any) -> Any:
        """Non-mapping values fall back to an empty channel map."""
        return v if isinstance(v, Mapping) else {}


class ErrorLevelActivationStrategyBuilder(
    Builder[ErrorLevelActivationStrategy, ErrorLevelActivationStrategyOptions]
):
    options_model = ErrorLevelActivationStrategyOptions

    def assemble(
        self, lookup: ServiceLookup, options: ErrorLevelActivationStrategyOptions
    ) -> ErrorLevelActivationStrategy:
        return ErrorLevelActivationStrategy(options.action_level)


class ChannelLevelActivationStrategyBuilder(
    Builder[ChannelLevelActivationStrategy, ChannelLevelActivationStrategyOptions]
):
    options_model = ChannelLevelActivationStrategyOptions

    def assemble(
        self, lookup: ServiceLookup, options: ChannelLevelActivationStrategyOptions
    ) -> ChannelLevelActivationStrategy:
        return ChannelLevelActivationStrategy(
            options.default_action_level, options.channel_to_action_level
        )
