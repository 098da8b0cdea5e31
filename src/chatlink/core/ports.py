"""Ports (interfaces) used by the core.

Ports define the minimal contracts for the channel directory and the deferred
callback scheduler so the core can be reused with different backends.
"""

from __future__ import annotations

from typing import Callable, Protocol


class ChannelDirectory(Protocol):
    """Read-only channel registry consulted while resolving channel mentions."""

    def exists(self, name: str) -> bool:
        ...


class CancellationHandle(Protocol):
    """Handle returned by a scheduler. ``cancel`` must be safe to call twice."""

    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    """Deferred-callback primitive driven by a single dispatcher."""

    def schedule(self, delay: float, action: Callable[[], None]) -> CancellationHandle:
        ...
