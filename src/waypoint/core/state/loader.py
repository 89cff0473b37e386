"""Load transitions into a state machine consumer.

Transitions are offered to the consumer in two groups: first every
transition whose states are all literal names, then every transition with a
pattern state on either end. Consumers resolve patterns against the concrete
states they already know about, so registering the literal transitions first
gives them the full set of concrete states before any pattern is resolved.

Other loaders (YAML documents, databases, ...) should build Transition
objects and delegate to :class:`ArrayLoader` rather than reimplementing the
ordering.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Protocol, runtime_checkable

from .entities import Transition
from .partition import partition
from .registry import TransitionRegistry

logger = logging.getLogger(__name__)


@runtime_checkable
class StateMachineConsumer(Protocol):
    """Protocol for state machine engines that accept transitions."""

    def add_transition(self, transition: Transition) -> int:
        """Register a transition and return how many concrete transitions were added.

        Pattern transitions may expand into several concrete ones. Raise to
        reject a transition.
        """
        ...


class Loader(Protocol):
    """Protocol for objects that can configure a state machine consumer."""

    def load(self, consumer: StateMachineConsumer) -> int:
        ...


def order_transitions(transitions: Iterable[Transition]) -> List[Transition]:
    """Return literal transitions followed by pattern-based ones, each in original order."""
    patterned, exact = partition(transitions, lambda t: t.is_pattern_based)
    logger.debug("Ordered %d exact and %d pattern transitions", len(exact), len(patterned))
    return exact + patterned


def load(registry: TransitionRegistry, consumer: StateMachineConsumer) -> int:
    """Offer every transition in ``registry`` to ``consumer``.

    Errors raised by the consumer propagate unchanged and stop loading;
    transitions registered before the failure are not rolled back.

    Returns:
        Sum of the counts returned by ``consumer.add_transition``.
    """
    count = 0
    for transition in order_transitions(registry.all()):
        count += consumer.add_transition(transition)
    logger.debug("Loaded %d transitions from %d definitions", count, registry.size())
    return count


class ArrayLoader:
    """Loader backed by an in-memory sequence of Transition instances."""

    def __init__(self, transitions: Iterable[Transition] = ()) -> None:
        self._registry = TransitionRegistry(transitions)

    @property
    def registry(self) -> TransitionRegistry:
        return self._registry

    def add(self, transition: Transition) -> None:
        """Add or overwrite a transition."""
        self._registry.add(transition)

    def transitions(self) -> List[Transition]:
        return self._registry.all()

    def count(self) -> int:
        """Number of contained transitions (before any pattern expansion)."""
        return self._registry.size()

    def __len__(self) -> int:
        return self.count()

    def load(self, consumer: StateMachineConsumer) -> int:
        return load(self._registry, consumer)

    def __str__(self) -> str:
        return self.__class__.__name__


__all__ = [
    "StateMachineConsumer",
    "Loader",
    "ArrayLoader",
    "order_transitions",
    "load",
]
