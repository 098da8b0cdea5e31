"""Candidate resolution and the link parsing entry point (core domain)."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from chatlink.core.config import LinkerConfig
from chatlink.core.links import CandidateLink, FinalLink, LinkAction, SyntaxKind
from chatlink.core.matchers import MATCHERS
from chatlink.core.ports import ChannelDirectory
from chatlink.core.targets import resolve_target

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG = LinkerConfig()

# Lower wins when two candidates start at the same index. Bracketed forms
# beat the bare forms they may contain. Wiki comes first so "[[Topic]](url)"
# stays a wiki link; markdown beats new style because "[https://a b](https://c)"
# is both and the markdown span is the longer one.
SYNTAX_PRIORITY = {
    SyntaxKind.WIKI: 0,
    SyntaxKind.MARKDOWN: 1,
    SyntaxKind.NEW_STYLE: 2,
    SyntaxKind.OLD_STYLE: 3,
    SyntaxKind.INTERNAL_PROTOCOL: 4,
    SyntaxKind.BARE_URL: 5,
    SyntaxKind.EDITOR_TIMESTAMP: 6,
    SyntaxKind.CHANNEL_MENTION: 7,
}


def collect_candidates(text: str, config: LinkerConfig = DEFAULT_CONFIG) -> List[CandidateLink]:
    """Run every matcher over the text and return the union of their candidates."""

    candidates: List[CandidateLink] = []
    for matcher in MATCHERS:
        candidates.extend(matcher(text, config))
    return candidates


def _sort_key(candidate: CandidateLink) -> Tuple[int, int, int]:
    return candidate.start, SYNTAX_PRIORITY[candidate.kind], -candidate.end


def _to_final(candidate: CandidateLink, config: LinkerConfig) -> FinalLink:
    if candidate.kind == SyntaxKind.WIKI:
        action, argument = LinkAction.OPEN_WIKI, candidate.target
    elif candidate.kind == SyntaxKind.CHANNEL_MENTION:
        action, argument = LinkAction.OPEN_CHANNEL, candidate.target
    elif candidate.kind == SyntaxKind.EDITOR_TIMESTAMP:
        action, argument = LinkAction.OPEN_EDITOR_TIMESTAMP, candidate.target
    else:
        action, argument = resolve_target(candidate.target, config)

    return FinalLink(
        start=candidate.start,
        end=candidate.end,
        action=action,
        argument=argument,
        display_text=candidate.display_text,
        url=candidate.target,
    )


def resolve(
    candidates: Iterable[CandidateLink],
    directory: ChannelDirectory,
    config: LinkerConfig = DEFAULT_CONFIG,
) -> Tuple[FinalLink, ...]:
    """Reduce overlapping candidates to sorted, non-overlapping final links.

    Sweep rules:
    - Candidates are visited by start, then syntax priority, then longest span.
    - A candidate is accepted only if it starts at or after the end of the
      last accepted link. Rejected candidates are dropped, never shifted.
    - Channel mentions are accepted only when the directory knows the
      channel; a dropped mention leaves its text unlinked.
    """

    accepted: List[FinalLink] = []
    last_end = 0
    for candidate in sorted(candidates, key=_sort_key):
        if candidate.start < last_end:
            continue
        if candidate.kind == SyntaxKind.CHANNEL_MENTION and not directory.exists(candidate.target):
            LOGGER.debug("Dropping mention of unknown channel %s", candidate.target)
            continue
        accepted.append(_to_final(candidate, config))
        last_end = candidate.end
    return tuple(accepted)


def parse_links(
    text: str,
    directory: ChannelDirectory,
    config: Optional[LinkerConfig] = None,
) -> Tuple[FinalLink, ...]:
    """Return the final links for ``text``.

    Parsing is best effort: malformed syntax, unknown schemes, and missing
    channels all degrade to plain text instead of raising.
    """

    config = config or DEFAULT_CONFIG
    if not text:
        return ()
    return resolve(collect_candidates(text, config), directory, config)
