"""Session signals and the in-process bus that carries them.

Signals are queued on ``publish`` and delivered on ``flush``, once per
tick, so handlers always observe the state at the end of the tick.
"""
from __future__ import annotations

from typing import Any, Callable

WAVE_STARTED = "wave_started"
WAVE_COLLAPSED = "wave_collapsed"
WAVE_SKIPPED = "wave_skipped"
TREASURE_SPAWNED = "treasure_spawned"
GAME_OVER = "game_over"
STARTUP_FAILED = "startup_failed"

_Handler = Callable[[str, dict[str, Any]], None]


class SignalBus:

    def __init__(self) -> None:
        self._subscribers: dict[str, list[_Handler]] = {}
        self._queue: list[tuple[str, dict[str, Any]]] = []

    def subscribe(self, signal_name: str, handler: _Handler) -> None:
        self._subscribers.setdefault(signal_name, []).append(handler)

    def unsubscribe(self, signal_name: str, handler: _Handler) -> None:
        handlers = self._subscribers.get(signal_name)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def publish(self, signal_name: str, **data: Any) -> None:
        self._queue.append((signal_name, data))

    @property
    def pending(self) -> int:
        return len(self._queue)

    def flush(self) -> int:
        """Deliver queued signals. Signals published by handlers wait for the next flush."""
        batch, self._queue = self._queue, []
        for signal_name, data in batch:
            for handler in list(self._subscribers.get(signal_name, ())):
                handler(signal_name, data)
        return len(batch)
