"""Local echo coordination (core domain).

A posted message is shown right away as a local echo, then replaced in place
once the confirmation arrives. The confirmation is a deferred callback on the
scheduler port, never a blocking wait, so tearing the list down first only
has to cancel the pending handles.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, Optional

from chatlink.core.config import EchoConfig, LinkerConfig
from chatlink.core.message_list import MessageList
from chatlink.core.models import Message, Sender, create_local_echo, create_message
from chatlink.core.ports import CancellationHandle, ChannelDirectory, Scheduler

LOGGER = logging.getLogger(__name__)


class EchoCoordinator:
    """Owns the message list and serializes every mutation to it."""

    def __init__(
        self,
        messages: MessageList,
        directory: ChannelDirectory,
        scheduler: Scheduler,
        echo_config: EchoConfig,
        linker_config: Optional[LinkerConfig] = None,
    ) -> None:
        self._messages = messages
        self._directory = directory
        self._scheduler = scheduler
        self._echo = echo_config
        self._linker = linker_config
        self._pending: Dict[str, CancellationHandle] = {}
        self._closed = False

    @property
    def messages(self) -> MessageList:
        return self._messages

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def receive(self, message: Message) -> int:
        """Add a confirmed message that did not originate from a local echo."""

        return self._messages.add(message)

    def post(
        self,
        content: str,
        sender: Sender,
        *,
        confirmed_content: Optional[str] = None,
        delay: Optional[float] = None,
        is_action: bool = False,
    ) -> Message:
        """Show ``content`` as a local echo and schedule its confirmation.

        ``confirmed_content`` models a server that rewrites the text; links
        are parsed again from whatever the confirmed text turns out to be.
        """

        if self._closed:
            raise RuntimeError("EchoCoordinator is closed")

        echo = create_local_echo(
            content,
            sender,
            self._directory,
            is_action=is_action,
            config=self._linker,
        )
        self._messages.add(echo)

        final_content = confirmed_content if confirmed_content is not None else content
        local_id = echo.local_id

        def _confirm() -> None:
            self._pending.pop(local_id, None)
            self.confirm(local_id, final_content, sender, is_action=is_action)

        wait = self._echo.confirm_delay if delay is None else delay
        self._pending[local_id] = self._scheduler.schedule(wait, _confirm)
        LOGGER.debug("Posted local echo %s (confirm in %.3fs)", local_id, wait)
        return echo

    def confirm(
        self,
        local_id: str,
        content: str,
        sender: Sender,
        *,
        message_id: Optional[int] = None,
        timestamp: Optional[datetime] = None,
        is_action: bool = False,
    ) -> Optional[Message]:
        """Replace the local echo ``local_id`` with its confirmed message.

        Returns None without touching the list when the echo is gone or the
        coordinator has been closed.
        """

        if self._closed:
            return None

        handle = self._pending.pop(local_id, None)
        if handle is not None:
            handle.cancel()

        if self._messages.find(local_id) is None:
            LOGGER.debug("Confirmation for %s ignored, echo no longer listed", local_id)
            return None

        confirmed = create_message(
            content,
            sender,
            self._directory,
            message_id=message_id,
            timestamp=timestamp,
            is_action=is_action,
            config=self._linker,
        )
        self._messages.replace(local_id, confirmed)
        LOGGER.info("Confirmed local echo %s as message %s", local_id, confirmed.id)
        return confirmed

    def cancel(self, local_id: str) -> bool:
        """Cancel a pending confirmation. Safe to call more than once."""

        handle = self._pending.pop(local_id, None)
        if handle is None:
            return False
        handle.cancel()
        LOGGER.debug("Cancelled confirmation for %s", local_id)
        return True

    def close(self) -> None:
        """Cancel every pending confirmation and stop accepting new posts."""

        if self._closed:
            return
        self._closed = True
        pending = list(self._pending.items())
        self._pending.clear()
        for _, handle in pending:
            handle.cancel()
        if pending:
            LOGGER.info("Cancelled %s pending confirmations on close", len(pending))
