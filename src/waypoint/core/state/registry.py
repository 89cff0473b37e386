"""Insertion-ordered, key-deduplicated store of transitions.

A transition is unique per registry and is identified by the pair of its
origin and destination state names. Adding a second transition under an
existing key replaces the first one in place (last write wins); the replaced
transition is dropped without error. Guard/action data and state identity do
not take part in the key, so make sure your configuration data is consistent.

Note that the consumer side applies the opposite rule to states: the first
state instance registered under a name wins and later equal-named instances
are ignored. Transitions sharing a state name should ideally share the same
State instance.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Union

from ..exceptions import InvalidInputKind
from .entities import Transition, TransitionKey

logger = logging.getLogger(__name__)


class TransitionRegistry:
    """Ordered mapping of transition key to transition."""

    def __init__(self, transitions: Iterable[Transition] = ()) -> None:
        items = list(transitions)
        for index, transition in enumerate(items):
            if not isinstance(transition, Transition):
                kind = type(transition).__name__
                raise InvalidInputKind(
                    f"Expected Transition (or a subclass), found something else: {kind}",
                    context={"type": kind, "index": index},
                )
        self._transitions: Dict[TransitionKey, Transition] = {}
        for transition in items:
            self.add(transition)

    def add(self, transition: Transition) -> None:
        """Add or overwrite a transition.

        An overwritten key keeps its original position in iteration order.
        """
        key = transition.key
        if key in self._transitions:
            logger.debug("Overwriting transition %s", transition.name)
        self._transitions[key] = transition

    def all(self) -> List[Transition]:
        """Return stored transitions in insertion order."""
        return list(self._transitions.values())

    def get(self, key: Union[TransitionKey, str]) -> Optional[Transition]:
        """Look up a transition by its (origin, destination) key or its display name."""
        if isinstance(key, tuple):
            return self._transitions.get(key)
        for transition in self._transitions.values():
            if transition.name == key:
                return transition
        return None

    def size(self) -> int:
        """Number of distinct transition keys.

        This is not the number of transitions a consumer may end up
        registering, since pattern transitions can expand.
        """
        return len(self._transitions)

    def __len__(self) -> int:
        return self.size()

    def __iter__(self) -> Iterator[Transition]:
        return iter(self.all())

    def __contains__(self, item: Union[TransitionKey, str, Transition]) -> bool:
        if isinstance(item, Transition):
            return item.key in self._transitions
        return self.get(item) is not None

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(size={self.size()})"

    __repr__ = __str__


__all__ = ["TransitionRegistry"]
