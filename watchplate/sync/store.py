# -*- coding: utf-8 -*-
"""
State container for the synced nutrition record.

One store owns one NutritionState. It is created explicitly and handed to
whatever needs it (HTTP routes, the realtime manager, the assistant).
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, Mapping, Union

from .models import NutritionPatch, NutritionState

logger = logging.getLogger(__name__)

StateListener = Callable[[NutritionState], None]


class NutritionStore:
    """Holds the current state, applies patches and notifies listeners."""

    def __init__(self, initial: NutritionState | None = None) -> None:
        self._state = initial.model_copy() if initial is not None else NutritionState()
        self._lock = threading.Lock()
        self._listeners: List[StateListener] = []
        self.merge_count = 0

    def snapshot(self) -> NutritionState:
        with self._lock:
            return self._state.model_copy()

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener; the returned callable removes it again."""
        with self._lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def merge(self, update: Union[NutritionPatch, Mapping[str, Any]]) -> NutritionState:
        """Apply a sparse update and notify listeners once.

        Fields the update does not carry keep their current value. Listeners are
        notified even when the update carried nothing recognizable.
        """
        patch = update if isinstance(update, NutritionPatch) else NutritionPatch.from_message(update)
        with self._lock:
            changes: Dict[str, float] = patch.changes()
            if changes:
                self._state = self._state.model_copy(update=changes)
            self.merge_count += 1
            state = self._state.model_copy()
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(state.model_copy())
            except Exception:
                logger.exception("State listener failed: %r", listener)
        return state
