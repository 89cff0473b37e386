"""State and transition value objects.

A transition is identified by the names of its two states only. Guard,
action and payload data travel with the transition untouched; nothing in
this package interprets them.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Tuple

REGEX_PREFIX = "regex:"
NOT_REGEX_PREFIX = "not-regex:"
DEFAULT_PATTERN_PREFIXES = (REGEX_PREFIX, NOT_REGEX_PREFIX)


TransitionKey = Tuple[str, str]


def transition_key(origin_name: str, destination_name: str) -> TransitionKey:
    """Return the identity key for a transition between two state names.

    The key is the name pair itself, so names containing "_to_" cannot make
    two different pairs collide.
    """
    return (str(origin_name), str(destination_name))


@dataclass(frozen=True)
class State:
    """A named state, either a literal name or a pattern over state names.

    Attributes:
        name: State name. For pattern states this includes the prefix,
            e.g. ``regex:^pending_``.
        pattern: True when ``name`` is matched against concrete state names
            by the consumer instead of being used literally.
    """

    name: str
    pattern: bool = False

    @classmethod
    def from_name(
        cls,
        name: str,
        prefixes: Iterable[str] = DEFAULT_PATTERN_PREFIXES,
    ) -> "State":
        """Build a state, flagging it as a pattern when ``name`` has a pattern prefix."""
        name = str(name)
        return cls(name, pattern=any(name.startswith(p) for p in prefixes))

    @property
    def is_pattern(self) -> bool:
        return self.pattern

    def _expression(self) -> str:
        for prefix in (NOT_REGEX_PREFIX, REGEX_PREFIX):
            if self.name.startswith(prefix):
                return self.name[len(prefix):]
        # Custom prefixes: everything after the first colon
        _, sep, rest = self.name.partition(":")
        return rest if sep else self.name

    def matches(self, concrete_name: str) -> bool:
        """Return True if this state applies to ``concrete_name``.

        Literal states match only their own name. ``not-regex:`` states match
        names the expression is NOT found in; other pattern states match names
        the expression is found in.
        """
        if not self.pattern:
            return self.name == concrete_name
        found = re.search(self._expression(), concrete_name) is not None
        if self.name.startswith(NOT_REGEX_PREFIX):
            return not found
        return found

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, eq=False)
class Transition:
    """A directed edge between two states.

    Two transitions with the same origin and destination names share a key
    (see :func:`transition_key`), whatever their payload.
    """

    origin: State
    destination: State
    guard: Optional[str] = None
    action: Optional[str] = None
    description: Optional[str] = None
    payload: Mapping[str, Any] = field(default_factory=dict)

    @property
    def key(self) -> TransitionKey:
        return transition_key(self.origin.name, self.destination.name)

    @property
    def name(self) -> str:
        """Display name, e.g. ``new_to_active``. Not guaranteed unique; use :attr:`key`."""
        return f"{self.origin.name}_to_{self.destination.name}"

    @property
    def is_pattern_based(self) -> bool:
        """True if either end of the transition is a pattern state."""
        return self.origin.is_pattern or self.destination.is_pattern

    def __str__(self) -> str:
        return self.name


__all__ = [
    "State",
    "Transition",
    "transition_key",
    "TransitionKey",
    "REGEX_PREFIX",
    "NOT_REGEX_PREFIX",
    "DEFAULT_PATTERN_PREFIXES",
]
