"""Core domain models for chat messages.

Messages are immutable once built. A local echo is replaced by its confirmed
counterpart as a whole value, never patched field by field.
"""

from __future__ import annotations

import itertools
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Tuple

from chatlink.core.config import LinkerConfig
from chatlink.core.links import FinalLink
from chatlink.core.ports import ChannelDirectory
from chatlink.core.resolver import parse_links

_MESSAGE_IDS = itertools.count(1)

OrderKey = Tuple[datetime, int]


class Ordering(Enum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


@dataclass(frozen=True)
class Sender:
    """Opaque sender metadata, passed through to display consumers."""

    id: int
    username: str
    colour: Optional[str] = None


@dataclass(frozen=True)
class Message:
    """A chat message with its links computed from ``content``."""

    id: int
    timestamp: datetime
    sender: Sender
    content: str
    is_action: bool = False
    is_important: bool = False
    links: Tuple[FinalLink, ...] = ()
    # Set only on local echoes; this is how the confirmed message finds its slot.
    local_id: Optional[str] = None

    @property
    def is_local_echo(self) -> bool:
        return self.local_id is not None

    def order_key(self) -> OrderKey:
        return self.timestamp, self.id

    def __lt__(self, other: "Message") -> bool:
        if not isinstance(other, Message):
            return NotImplemented
        return self.order_key() < other.order_key()


def compare_messages(a: Message, b: Message) -> Ordering:
    """Total order over messages: timestamp, then id."""

    key_a, key_b = a.order_key(), b.order_key()
    if key_a < key_b:
        return Ordering.LESS
    if key_a > key_b:
        return Ordering.GREATER
    return Ordering.EQUAL


def next_message_id() -> int:
    """Issue the next process-wide message id."""

    return next(_MESSAGE_IDS)


def _resolve_timestamp(timestamp: Optional[datetime]) -> datetime:
    if timestamp is None:
        return datetime.now(timezone.utc)
    if timestamp.tzinfo is None:
        # Mixing naive and aware datetimes would make the order key incomparable.
        raise ValueError("Message timestamps must be timezone-aware")
    return timestamp


def create_message(
    content: str,
    sender: Sender,
    directory: ChannelDirectory,
    *,
    message_id: Optional[int] = None,
    timestamp: Optional[datetime] = None,
    is_action: bool = False,
    is_important: Optional[bool] = None,
    config: Optional[LinkerConfig] = None,
) -> Message:
    """Build a confirmed message and parse its links once.

    ``message_id`` is the server-assigned id when there is one; otherwise the
    next local id is issued. ``is_important`` defaults to whether the sender
    carries a highlight colour.
    """

    if is_important is None:
        is_important = bool(sender.colour)

    return Message(
        id=message_id if message_id is not None else next_message_id(),
        timestamp=_resolve_timestamp(timestamp),
        sender=sender,
        content=content,
        is_action=is_action,
        is_important=is_important,
        links=parse_links(content, directory, config),
    )


def create_local_echo(
    content: str,
    sender: Sender,
    directory: ChannelDirectory,
    *,
    timestamp: Optional[datetime] = None,
    is_action: bool = False,
    local_id: Optional[str] = None,
    config: Optional[LinkerConfig] = None,
) -> Message:
    """Build an optimistic placeholder shown until the server confirms it.

    Links are computed provisionally from the placeholder text; the confirmed
    message carries its own links parsed from the final content.
    """

    return Message(
        id=next_message_id(),
        timestamp=_resolve_timestamp(timestamp),
        sender=sender,
        content=content,
        is_action=is_action,
        is_important=bool(sender.colour),
        links=parse_links(content, directory, config),
        local_id=local_id or uuid.uuid4().hex,
    )
