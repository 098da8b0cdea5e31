"""Link target classification (core domain).

A target is whatever a link points at: a web URL, an application protocol
link, or an editor timestamp. Classification decides the LinkAction and the
argument handed to whoever activates the link.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple
from urllib.parse import urlsplit

from chatlink.core.config import LinkerConfig
from chatlink.core.links import LinkAction

# mm:ss:fff with an optional combo list, e.g. "00:12:345 (1,2)".
TIMESTAMP_PATTERN = r"\d{2,}:[0-5]\d[:.]\d{3}(?: \((?:\d+[,|])*\d+\))?"
TIMESTAMP_RE = re.compile(TIMESTAMP_PATTERN)

SCHEME_URL_RE = re.compile(r"^([a-z][a-z0-9+.\-]*)://(\S+)$")

Resolution = Tuple[LinkAction, str]


def is_scheme_url(target: str) -> bool:
    """Return True for ``scheme://rest`` targets without whitespace."""

    return SCHEME_URL_RE.match(target) is not None


def _split_scheme(target: str) -> Tuple[Optional[str], str]:
    match = SCHEME_URL_RE.match(target)
    if match is None:
        return None, target
    return match.group(1), match.group(2)


def _resolve_internal_path(path: str) -> Optional[Resolution]:
    head, _, tail = path.partition("/")
    tail = tail.rstrip("/")
    if not tail:
        return None
    if head == "chan":
        return LinkAction.OPEN_CHANNEL, tail
    if head == "edit":
        return LinkAction.OPEN_EDITOR_TIMESTAMP, tail
    if head == "b" and tail.isdigit():
        return LinkAction.OPEN_BEATMAP, tail
    if head == "s" and tail.isdigit():
        return LinkAction.OPEN_BEATMAP_SET, tail
    if head == "wiki":
        return LinkAction.OPEN_WIKI, tail
    return None


def _resolve_web_path(target: str, config: LinkerConfig) -> Optional[Resolution]:
    try:
        parts = urlsplit(target)
    except ValueError:
        # Malformed netloc such as an unclosed IPv6 bracket.
        return None
    host = (parts.hostname or "").lower()
    if host not in config.trusted_hosts:
        return None

    segments: List[str] = [segment for segment in parts.path.split("/") if segment]
    if len(segments) < 2:
        return None
    head, ident = segments[0], segments[1]

    if head in ("b", "beatmaps") and ident.isdigit():
        return LinkAction.OPEN_BEATMAP, ident
    if head in ("s", "beatmapsets") and ident.isdigit():
        # /beatmapsets/<set>#<mode>/<beatmap> points at a single difficulty.
        mode, _, beatmap_id = parts.fragment.partition("/")
        if head == "beatmapsets" and mode and beatmap_id.isdigit():
            return LinkAction.OPEN_BEATMAP, beatmap_id
        return LinkAction.OPEN_BEATMAP_SET, ident
    if head == "wiki":
        return LinkAction.OPEN_WIKI, "/".join(segments[1:])
    return None


def resolve_application_target(target: str, config: LinkerConfig) -> Optional[Resolution]:
    """Classify an application protocol target, or None if the path is unknown."""

    scheme, rest = _split_scheme(target)
    if scheme == config.multiplayer_scheme:
        room_id = rest.rstrip("/")
        if room_id.isdigit():
            return LinkAction.JOIN_MULTIPLAYER_MATCH, room_id
        return None
    if scheme == config.internal_scheme:
        return _resolve_internal_path(rest)
    return None


def resolve_target(target: str, config: LinkerConfig) -> Resolution:
    """Return the (action, argument) pair for a link target.

    Anything that does not map onto an application action falls back to an
    external link with the raw target as its argument.
    """

    if TIMESTAMP_RE.match(target):
        return LinkAction.OPEN_EDITOR_TIMESTAMP, target

    resolved = resolve_application_target(target, config)
    if resolved is not None:
        return resolved

    scheme, _ = _split_scheme(target)
    if scheme in config.external_schemes:
        resolved = _resolve_web_path(target, config)
        if resolved is not None:
            return resolved

    return LinkAction.EXTERNAL, target
