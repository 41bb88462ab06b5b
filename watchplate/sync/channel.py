# -*- coding: utf-8 -*-
"""
Sync channel

Bounded queue between the paired-device transport and the store. A single
consumer task applies patches in the order they were submitted.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from .models import NutritionPatch, NutritionState
from .store import NutritionStore

logger = logging.getLogger(__name__)


@dataclass
class _Delivery:
    patch: NutritionPatch
    done: asyncio.Future


class SyncChannel:
    """Single-writer delivery of patches into a NutritionStore."""

    def __init__(self, store: NutritionStore, maxsize: int = 64) -> None:
        self.store = store
        self.maxsize = maxsize
        self._queue: Optional[asyncio.Queue] = None
        self._consumer: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._consumer is not None and not self._consumer.done()

    def start(self) -> None:
        if self.running:
            return
        self._queue = asyncio.Queue(maxsize=self.maxsize)
        self._consumer = asyncio.create_task(self._consume(self._queue))
        logger.info("Sync channel started (maxsize=%s)", self.maxsize)

    async def stop(self) -> None:
        task = self._consumer
        self._consumer = None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        queue = self._queue
        self._queue = None
        if queue is not None:
            while not queue.empty():
                delivery = queue.get_nowait()
                if not delivery.done.done():
                    delivery.done.cancel()
        logger.info("Sync channel stopped")

    async def submit(self, update: Union[NutritionPatch, Mapping[str, Any]]) -> NutritionState:
        """Queue an update and wait until it has been merged.

        Blocks while the queue is full.
        """
        if not self.running or self._queue is None:
            raise RuntimeError("Sync channel is not running")
        patch = update if isinstance(update, NutritionPatch) else NutritionPatch.from_message(update)
        done = asyncio.get_running_loop().create_future()
        await self._queue.put(_Delivery(patch=patch, done=done))
        return await done

    async def _consume(self, queue: asyncio.Queue) -> None:
        while True:
            delivery = await queue.get()
            try:
                state = self.store.merge(delivery.patch)
            except Exception as exc:
                logger.exception("Failed to merge sync patch")
                if not delivery.done.done():
                    delivery.done.set_exception(exc)
            else:
                if not delivery.done.done():
                    delivery.done.set_result(state)
            finally:
                queue.task_done()
