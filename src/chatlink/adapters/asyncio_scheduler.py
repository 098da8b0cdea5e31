"""asyncio adapter for the core Scheduler port."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

LOGGER = logging.getLogger(__name__)


class AsyncioScheduler:
    """Schedule deferred callbacks on an event loop with ``call_later``.

    The returned ``asyncio.TimerHandle`` already has an idempotent ``cancel``,
    so it is handed back as the cancellation handle unchanged.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def schedule(self, delay: float, action: Callable[[], None]) -> asyncio.TimerHandle:
        def _run() -> None:
            try:
                action()
            except Exception:
                LOGGER.exception("Deferred callback failed")

        return self._get_loop().call_later(max(delay, 0.0), _run)
