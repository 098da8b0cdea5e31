"""Link value types shared by the matchers, resolver, and message models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SyntaxKind(str, Enum):
    """Which matcher produced a candidate."""

    OLD_STYLE = "old_style"
    NEW_STYLE = "new_style"
    MARKDOWN = "markdown"
    WIKI = "wiki"
    BARE_URL = "bare_url"
    CHANNEL_MENTION = "channel_mention"
    INTERNAL_PROTOCOL = "internal_protocol"
    EDITOR_TIMESTAMP = "editor_timestamp"


class LinkAction(str, Enum):
    """Closed set of things a link can do when activated."""

    EXTERNAL = "external"
    OPEN_WIKI = "open_wiki"
    OPEN_CHANNEL = "open_channel"
    OPEN_BEATMAP = "open_beatmap"
    OPEN_BEATMAP_SET = "open_beatmap_set"
    OPEN_EDITOR_TIMESTAMP = "open_editor_timestamp"
    JOIN_MULTIPLAYER_MATCH = "join_multiplayer_match"


@dataclass(frozen=True)
class CandidateLink:
    """Unresolved match from a single matcher. May overlap other candidates."""

    start: int
    end: int
    kind: SyntaxKind
    target: str
    display_text: str


@dataclass(frozen=True)
class FinalLink:
    """Resolved link span over the raw message text.

    ``start``/``end`` are character offsets into the raw content (``end`` is
    exclusive). ``url`` keeps the target exactly as written so display
    consumers can show or open it without re-deriving it from ``argument``.
    """

    start: int
    end: int
    action: LinkAction
    argument: str
    display_text: str
    url: str
