from __future__ import annotations

from collections.abc import Iterable

from .models import DiagnosticEvent, Severity


class DiagnosticSink:
    """Ordered collector for diagnostics emitted while a lint run progresses.

    Components that would otherwise print take a sink instead, so callers
    decide where the lines go and tests can inspect them directly.
    """

    __slots__ = ("_events",)

    def __init__(self) -> None:
        self._events: list[DiagnosticEvent] = []

    def emit(self, event: DiagnosticEvent) -> None:
        self._events.append(event)

    def extend(self, events: Iterable[DiagnosticEvent]) -> None:
        for event in events:
            self.emit(event)

    @property
    def events(self) -> tuple[DiagnosticEvent, ...]:
        return tuple(self._events)

    def has_errors(self) -> bool:
        return any(event.severity is Severity.ERROR for event in self._events)

    def __len__(self) -> int:
        return len(self._events)
