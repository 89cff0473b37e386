from __future__ import annotations

from typing import Any, Dict, Mapping


class WaypointError(Exception):
    """Base exception for Waypoint.

    ``context`` holds machine-readable details about the failure, such as the
    offending type name, the file path or the schema location.
    """

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        # Copied so later changes to the caller's mapping do not leak in.
        self.context = dict(context or {})

    @property
    def message(self) -> str:
        return str(self)

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": self.message,
            "code": self.__class__.__name__,
            "context": self.context,
        }


class InvalidInputKind(WaypointError, TypeError):
    """Raised when a transition registry is given something that is not a Transition."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        WaypointError.__init__(self, message, context=context)
        TypeError.__init__(self, message)


class ConsumerRejection(WaypointError, ValueError):
    """Raised by a state machine consumer that refuses a transition.

    Loaders never raise, wrap or catch this error; it reaches the caller
    exactly as the consumer raised it.
    """

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        WaypointError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class LoaderDataError(WaypointError, ValueError):
    """Raised when transition definitions cannot be parsed or fail schema validation."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        WaypointError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ConfigError(WaypointError, ValueError):
    """Raised for malformed configuration or environment overrides."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        WaypointError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "WaypointError",
    "InvalidInputKind",
    "ConsumerRejection",
    "LoaderDataError",
    "ConfigError",
]
