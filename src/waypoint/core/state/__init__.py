"""Transition loading for state machine consumers."""
from .entities import (
    DEFAULT_PATTERN_PREFIXES,
    NOT_REGEX_PREFIX,
    REGEX_PREFIX,
    State,
    Transition,
    TransitionKey,
    transition_key,
)
from .loader import ArrayLoader, Loader, StateMachineConsumer, load, order_transitions
from .partition import partition
from .registry import TransitionRegistry
from .yaml_loader import YamlLoader

__all__ = [
    # Entities
    "State",
    "Transition",
    "transition_key",
    "TransitionKey",
    "REGEX_PREFIX",
    "NOT_REGEX_PREFIX",
    "DEFAULT_PATTERN_PREFIXES",
    # Registry
    "TransitionRegistry",
    # Loading
    "partition",
    "order_transitions",
    "load",
    "Loader",
    "StateMachineConsumer",
    "ArrayLoader",
    "YamlLoader",
]
