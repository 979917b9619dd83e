"""
Activation strategies for FingersCrossedHandler and their builders.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from logforge.activation.builders import (
    ChannelLevelActivationStrategyBuilder,
    ErrorLevelActivationStrategyBuilder,
)
from logforge.activation.strategies import (
    ActivationStrategy,
    ChannelLevelActivationStrategy,
    ErrorLevelActivationStrategy,
)

__all__ = [
    "ActivationStrategy",
    "ChannelLevelActivationStrategy",
    "ChannelLevelActivationStrategyBuilder",
    "ErrorLevelActivationStrategy",
    "ErrorLevelActivationStrategyBuilder",
]
