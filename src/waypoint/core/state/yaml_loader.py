"""Load transitions from YAML documents.

Document shape::

    transitions:
      - from: new
        to: active
        guard: can_activate
        action: notify
      - from: "regex:.*"
        to: cancelled

The document is validated against the bundled ``transitions`` schema, turned
into Transition objects and handed to an :class:`ArrayLoader`, which does the
ordering and drives the consumer.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from waypoint.core.config import LoaderConfig
from waypoint.core.exceptions import LoaderDataError
from waypoint.core.schemas import validate_payload

from .entities import State, Transition
from .loader import ArrayLoader, StateMachineConsumer

logger = logging.getLogger(__name__)

SCHEMA_NAME = "transitions.schema.yaml"


class YamlLoader:
    """Loader for transition definitions stored as YAML."""

    def __init__(self, document: Any, *, config: Optional[LoaderConfig] = None) -> None:
        validate_payload(document, SCHEMA_NAME)
        self._document: Mapping[str, Any] = document
        self._config = config or LoaderConfig()

    @classmethod
    def from_string(cls, text: str, *, config: Optional[LoaderConfig] = None) -> "YamlLoader":
        try:
            document = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise LoaderDataError(f"Invalid YAML: {exc}", context={"error": str(exc)}) from exc
        return cls(document, config=config)

    @classmethod
    def from_path(cls, path: Union[str, Path], *, config: Optional[LoaderConfig] = None) -> "YamlLoader":
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise LoaderDataError(f"File not found: {path}", context={"path": str(path)}) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise LoaderDataError(
                f"Cannot read {path}: {exc}",
                context={"path": str(path), "error": str(exc)},
            ) from exc
        logger.debug("Reading transitions from %s", path)
        return cls.from_string(text, config=config)

    def transitions(self) -> List[Transition]:
        """Build Transition objects from the document.

        States with equal names share a single State instance.
        """
        prefixes = self._config.pattern_prefixes
        states: Dict[str, State] = {}

        def state(name: str) -> State:
            if name not in states:
                states[name] = State.from_name(name, prefixes)
            return states[name]

        result: List[Transition] = []
        for entry in self._document.get("transitions") or []:
            result.append(
                Transition(
                    state(entry["from"]),
                    state(entry["to"]),
                    guard=entry.get("guard"),
                    action=entry.get("action"),
                    description=entry.get("description"),
                    payload=dict(entry.get("payload") or {}),
                )
            )
        return result

    def load(self, consumer: StateMachineConsumer) -> int:
        return ArrayLoader(self.transitions()).load(consumer)

    def __str__(self) -> str:
        return self.__class__.__name__


__all__ = ["YamlLoader", "SCHEMA_NAME"]
