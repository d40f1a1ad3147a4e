"""
Validation states and the triggers that produce them.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum

Predicate = Callable[[str], bool]


class ValidationState(Enum):
    """Tri-state classification of the current input."""

    NEUTRAL = "neutral"
    VALID = "valid"
    ERROR = "error"


@dataclass(frozen=True)
class Trigger:
    """A predicate that, when true, causes ``state`` with an optional ``message``."""

    state: ValidationState
    predicate: Predicate | None = None
    message: str | None = None


# Result used when no neutral or error trigger matches
VALID_TRIGGER = Trigger(ValidationState.VALID)


class TriggerList:
    """Ordered triggers; earlier entries take precedence."""

    def __init__(self, state: ValidationState) -> None:
        self.state = state
        self._triggers: list[Trigger] = []

    def add(self, predicate: Predicate, message: str | None = None) -> Trigger:
        trigger = Trigger(self.state, predicate, message)
        self._triggers.append(trigger)
        return trigger

    def snapshot(self) -> tuple[Trigger, ...]:
        return tuple(self._triggers)

    def __iter__(self) -> Iterator[Trigger]:
        return iter(self._triggers)

    def __len__(self) -> int:
        return len(self._triggers)
