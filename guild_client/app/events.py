"""
Minimal event emitter for client dispatches.
"""

import asyncio
import functools
import inspect
from typing import Any, Callable, Dict, List, Set

from shared.logging import get_logger


Listener = Callable[..., Any]


class EventEmitter:
    """Registers listeners per event name and dispatches to them."""

    def __init__(self, max_listeners: int = 10):
        self.logger = get_logger("guilds.events")
        self._listeners: Dict[str, List[Listener]] = {}
        self._max_listeners = max_listeners
        self._warned: Set[str] = set()
        self._tasks: Set[asyncio.Task] = set()

    @property
    def max_listeners(self) -> int:
        return self._max_listeners

    def set_max_listeners(self, value: int):
        self._max_listeners = max(0, value)

    def increment_max_listeners(self):
        if self._max_listeners != 0:
            self._max_listeners += 1

    def decrement_max_listeners(self):
        if self._max_listeners != 0:
            self._max_listeners = max(1, self._max_listeners - 1)

    def on(self, event: str, listener: Listener) -> Listener:
        """Register a listener."""
        listeners = self._listeners.setdefault(event, [])
        listeners.append(listener)

        if self._max_listeners and len(listeners) > self._max_listeners and event not in self._warned:
            self._warned.add(event)
            self.logger.warning(
                "Possible listener leak detected",
                event_name=event,
                listener_count=len(listeners),
                max_listeners=self._max_listeners
            )
        return listener

    def once(self, event: str, listener: Listener) -> Listener:
        """Register a listener that is removed after its first call."""
        def wrapper(*args, **kwargs):
            self.remove_listener(event, wrapper)
            return listener(*args, **kwargs)

        wrapper.listener = listener
        return self.on(event, wrapper)

    def remove_listener(self, event: str, listener: Listener):
        listeners = self._listeners.get(event, [])
        for registered in listeners:
            if registered is listener or getattr(registered, "listener", None) is listener:
                listeners.remove(registered)
                break
        if not listeners:
            self._listeners.pop(event, None)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, []))

    def emit(self, event: str, *args, **kwargs) -> bool:
        """Call every listener for ``event``; returns whether any were registered."""
        listeners = list(self._listeners.get(event, []))
        for listener in listeners:
            try:
                result = listener(*args, **kwargs)
            except Exception as e:
                self.logger.error("Event listener failed", event_name=event, error=str(e))
                continue
            if inspect.isawaitable(result):
                task = asyncio.ensure_future(result)
                self._tasks.add(task)
                task.add_done_callback(functools.partial(self._task_done, event))
        return bool(listeners)

    def _task_done(self, event: str, task: asyncio.Task):
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self.logger.error("Event listener failed", event_name=event, error=str(error))
