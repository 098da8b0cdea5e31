"""Link syntax matchers (core domain).

Each matcher scans the raw text for one syntax and returns every candidate it
finds. Matchers know nothing about each other; overlapping candidates are
expected and settled by the resolver.

Recognized forms:
- old style:  (display text)[https://target] or (display text)[00:12:345]
- new style:  [https://target display text]
- markdown:   [display text](https://target "optional title")
- wiki:       [[Topic]]
- bare URLs, bare application protocol links, bare channel mentions, and
  bare editor timestamps such as 00:12:345 (1,2)
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Callable, Dict, List, Optional, Pattern, Tuple

from chatlink.core.config import LinkerConfig
from chatlink.core.links import CandidateLink, SyntaxKind
from chatlink.core.scanner import match_pairs, unescape
from chatlink.core.targets import TIMESTAMP_PATTERN, TIMESTAMP_RE, is_scheme_url, resolve_application_target

Matcher = Callable[[str, LinkerConfig], List[CandidateLink]]

WIKI_DISPLAY_PREFIX = "Wiki: "

_TRAILING_PUNCTUATION = ".,!?;:'\""
_CLOSER_TO_OPENER = {")": "(", "]": "[", ">": "<"}

_FIRST_TOKEN_RE = re.compile(r"(\S+)\s+(.*)", re.DOTALL)
_MARKDOWN_TARGET_RE = re.compile(r'(\S+)(?:\s+"(?:[^"\\]|\\.)*")?')
_CHANNEL_RE = re.compile(r"(?<![\w/#])#[^\s,]+")
_TIMESTAMP_RE = re.compile(rf"(?<![\w:]){TIMESTAMP_PATTERN}(?!\d)")


def trim_trailing_punctuation(token: str) -> str:
    """Strip sentence punctuation and unbalanced closers from the end of a token."""

    while token:
        last = token[-1]
        if last in _TRAILING_PUNCTUATION:
            token = token[:-1]
            continue
        opener = _CLOSER_TO_OPENER.get(last)
        if opener is not None and token.count(last) > token.count(opener):
            token = token[:-1]
            continue
        break
    return token


@lru_cache(maxsize=None)
def _scheme_run_pattern(schemes: Tuple[str, ...]) -> Pattern[str]:
    # Longest first so "https" is tried before "http".
    alternatives = "|".join(re.escape(scheme) for scheme in sorted(schemes, key=len, reverse=True))
    return re.compile(rf"(?<![\w/])(?:{alternatives})://\S+")


def _is_link_target(target: str) -> bool:
    """Targets are scheme URLs or editor timestamps such as 00:12:345."""

    return is_scheme_url(target) or TIMESTAMP_RE.match(target) is not None


def _brackets(text: str) -> Dict[int, int]:
    return match_pairs(text, "[", "]")


def _parens(text: str) -> Dict[int, int]:
    return match_pairs(text, "(", ")")


def match_old_style(text: str, config: LinkerConfig) -> List[CandidateLink]:
    """Find ``(display)[target]`` links."""

    if "(" not in text or "[" not in text:
        return []

    brackets = _brackets(text)
    candidates: List[CandidateLink] = []
    for open_index, close_index in sorted(_parens(text).items()):
        target_close = brackets.get(close_index + 1)
        if target_close is None:
            continue
        target = text[close_index + 2 : target_close]
        if not _is_link_target(target):
            continue
        display = unescape(text[open_index + 1 : close_index]).strip()
        candidates.append(
            CandidateLink(
                start=open_index,
                end=target_close + 1,
                kind=SyntaxKind.OLD_STYLE,
                target=target,
                display_text=display or target,
            )
        )
    return candidates


def match_new_style(text: str, config: LinkerConfig) -> List[CandidateLink]:
    """Find ``[target display]`` links."""

    if "[" not in text:
        return []

    candidates: List[CandidateLink] = []
    for open_index, close_index in sorted(_brackets(text).items()):
        match = _FIRST_TOKEN_RE.fullmatch(text, open_index + 1, close_index)
        if match is None:
            continue
        target = match.group(1)
        if not is_scheme_url(target):
            continue
        display = unescape(match.group(2)).strip()
        candidates.append(
            CandidateLink(
                start=open_index,
                end=close_index + 1,
                kind=SyntaxKind.NEW_STYLE,
                target=target,
                display_text=display or target,
            )
        )
    return candidates


def _markdown_target(inner: str) -> Optional[str]:
    match = _MARKDOWN_TARGET_RE.fullmatch(inner.strip())
    if match is None:
        return None
    target = match.group(1)
    return target if _is_link_target(target) else None


def match_markdown(text: str, config: LinkerConfig) -> List[CandidateLink]:
    """Find ``[display](target)`` links; a quoted title after the target is ignored."""

    if "[" not in text or "(" not in text:
        return []

    parens = _parens(text)
    candidates: List[CandidateLink] = []
    for open_index, close_index in sorted(_brackets(text).items()):
        target_close = parens.get(close_index + 1)
        if target_close is None:
            continue
        target = _markdown_target(text[close_index + 2 : target_close])
        if target is None:
            continue
        display = unescape(text[open_index + 1 : close_index]).strip()
        candidates.append(
            CandidateLink(
                start=open_index,
                end=target_close + 1,
                kind=SyntaxKind.MARKDOWN,
                target=target,
                display_text=display or target,
            )
        )
    return candidates


def match_wiki(text: str, config: LinkerConfig) -> List[CandidateLink]:
    """Find ``[[Topic]]`` links."""

    if "[[" not in text:
        return []

    brackets = _brackets(text)
    candidates: List[CandidateLink] = []
    for open_index, close_index in sorted(brackets.items()):
        inner_close = brackets.get(open_index + 1)
        if inner_close is None or inner_close + 1 != close_index:
            continue
        topic = text[open_index + 2 : inner_close].strip()
        if not topic or "[" in topic or "]" in topic:
            continue
        candidates.append(
            CandidateLink(
                start=open_index,
                end=close_index + 1,
                kind=SyntaxKind.WIKI,
                target=topic,
                display_text=f"{WIKI_DISPLAY_PREFIX}{topic}",
            )
        )
    return candidates


def match_bare_urls(text: str, config: LinkerConfig) -> List[CandidateLink]:
    """Find unbracketed web URLs, excluding trailing punctuation."""

    candidates: List[CandidateLink] = []
    for match in _scheme_run_pattern(config.external_schemes).finditer(text):
        url = trim_trailing_punctuation(match.group(0))
        _, _, rest = url.partition("://")
        if not rest:
            continue
        candidates.append(
            CandidateLink(
                start=match.start(),
                end=match.start() + len(url),
                kind=SyntaxKind.BARE_URL,
                target=url,
                display_text=url,
            )
        )
    return candidates


def match_internal_protocol(text: str, config: LinkerConfig) -> List[CandidateLink]:
    """Find unbracketed application protocol links with a recognized path."""

    candidates: List[CandidateLink] = []
    for match in _scheme_run_pattern(config.application_schemes).finditer(text):
        url = trim_trailing_punctuation(match.group(0))
        if resolve_application_target(url, config) is None:
            continue
        candidates.append(
            CandidateLink(
                start=match.start(),
                end=match.start() + len(url),
                kind=SyntaxKind.INTERNAL_PROTOCOL,
                target=url,
                display_text=url,
            )
        )
    return candidates


def match_channel_mentions(text: str, config: LinkerConfig) -> List[CandidateLink]:
    """Find every ``#name`` token. Whether the channel exists is checked later."""

    if "#" not in text:
        return []

    candidates: List[CandidateLink] = []
    for match in _CHANNEL_RE.finditer(text):
        name = trim_trailing_punctuation(match.group(0))
        if len(name) < 2:
            continue
        candidates.append(
            CandidateLink(
                start=match.start(),
                end=match.start() + len(name),
                kind=SyntaxKind.CHANNEL_MENTION,
                target=name,
                display_text=name,
            )
        )
    return candidates


def match_editor_timestamps(text: str, config: LinkerConfig) -> List[CandidateLink]:
    """Find bare editor timestamps such as ``00:12:345`` or ``01:02:003 (1,2)``."""

    return [
        CandidateLink(
            start=match.start(),
            end=match.end(),
            kind=SyntaxKind.EDITOR_TIMESTAMP,
            target=match.group(0),
            display_text=match.group(0),
        )
        for match in _TIMESTAMP_RE.finditer(text)
    ]


MATCHERS: List[Matcher] = [
    match_old_style,
    match_new_style,
    match_markdown,
    match_wiki,
    match_bare_urls,
    match_internal_protocol,
    match_channel_mentions,
    match_editor_timestamps,
]
