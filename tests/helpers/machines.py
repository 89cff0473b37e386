"""State machine consumers used by the loader tests."""
from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional

from waypoint.core.exceptions import ConsumerRejection
from waypoint.core.state import State, Transition


class CountingConsumer:
    """Records every offered transition and returns a fixed count per transition name."""

    def __init__(self, counts: Optional[Mapping[str, int]] = None, *, default: int = 1) -> None:
        self.counts = dict(counts or {})
        self.default = default
        self.calls: List[Transition] = []

    def add_transition(self, transition: Transition) -> int:
        self.calls.append(transition)
        return self.counts.get(transition.name, self.default)

    @property
    def names(self) -> List[str]:
        return [t.name for t in self.calls]


class FailingConsumer(CountingConsumer):
    """Rejects the transitions named in ``fail_on``."""

    def __init__(self, fail_on: Iterable[str], **kwargs) -> None:
        super().__init__(**kwargs)
        self.fail_on = set(fail_on)
        self.registered: List[str] = []

    def add_transition(self, transition: Transition) -> int:
        self.calls.append(transition)
        if transition.name in self.fail_on:
            raise ConsumerRejection(
                f"Transition {transition.name} rejected",
                context={"transition": transition.name},
            )
        self.registered.append(transition.name)
        return self.counts.get(transition.name, self.default)


class PatternMachine:
    """Minimal machine that expands pattern transitions over known concrete states.

    States are registered on a first-wins basis: a later State instance with an
    already known name is ignored.
    """

    def __init__(self) -> None:
        self.states: Dict[str, State] = {}
        self.transitions: Dict[str, Transition] = {}
        self.calls: List[Transition] = []

    def _add_state(self, state: State) -> State:
        return self.states.setdefault(state.name, state)

    def _concrete(self, state: State) -> List[State]:
        if not state.is_pattern:
            return [self._add_state(state)]
        return [s for s in self.states.values() if not s.is_pattern and state.matches(s.name)]

    def add_transition(self, transition: Transition) -> int:
        self.calls.append(transition)
        count = 0
        for origin in self._concrete(transition.origin):
            for destination in self._concrete(transition.destination):
                if origin.name == destination.name and transition.is_pattern_based:
                    continue
                concrete = Transition(
                    origin,
                    destination,
                    guard=transition.guard,
                    action=transition.action,
                    payload=transition.payload,
                )
                if concrete.name in self.transitions:
                    continue
                self.transitions[concrete.name] = concrete
                count += 1
        return count
