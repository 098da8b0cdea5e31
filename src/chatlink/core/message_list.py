"""Sorted message list with in-place local echo replacement (core domain)."""

from __future__ import annotations

import bisect
import logging
from typing import Iterator, List, Optional

from chatlink.core.models import Message

LOGGER = logging.getLogger(__name__)


class MessageList:
    """Single-writer container that keeps messages in order-key order.

    Every mutation goes through this class so the sortedness invariant holds
    after any sequence of appends, replacements, and removals.
    """

    def __init__(self) -> None:
        self._messages: List[Message] = []

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(list(self._messages))

    def __getitem__(self, index: int) -> Message:
        return self._messages[index]

    def add(self, message: Message) -> int:
        """Insert a message at its sorted position and return that position."""

        index = bisect.bisect_right(self._messages, message.order_key(), key=Message.order_key)
        self._messages.insert(index, message)
        return index

    def find(self, local_id: str) -> Optional[int]:
        """Return the position of the local echo with ``local_id``, if present."""

        for index, message in enumerate(self._messages):
            if message.local_id == local_id:
                return index
        return None

    def replace(self, local_id: str, confirmed: Message) -> bool:
        """Swap a local echo for its confirmed message.

        The slot is reused when the new order key still fits between its
        neighbours; otherwise only that entry is moved. An id that is no
        longer in the list is a no-op.
        """

        index = self.find(local_id)
        if index is None:
            LOGGER.debug("Replace skipped, local echo %s is gone", local_id)
            return False

        self._messages[index] = confirmed
        key = confirmed.order_key()
        before_ok = index == 0 or self._messages[index - 1].order_key() <= key
        after_ok = index == len(self._messages) - 1 or key <= self._messages[index + 1].order_key()
        if not (before_ok and after_ok):
            del self._messages[index]
            self.add(confirmed)
        return True

    def remove(self, local_id: str) -> bool:
        """Remove a local echo. Missing ids are a no-op."""

        index = self.find(local_id)
        if index is None:
            return False
        del self._messages[index]
        return True

    def clear(self) -> None:
        self._messages.clear()

    def pending_echoes(self) -> List[Message]:
        return [message for message in self._messages if message.is_local_echo]
