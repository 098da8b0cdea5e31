"""Split message content into plain and link runs for display consumers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional

from chatlink.core.links import FinalLink


@dataclass(frozen=True)
class TextRun:
    text: str
    link: Optional[FinalLink] = None

    @property
    def is_link(self) -> bool:
        return self.link is not None


def project_runs(content: str, links: Iterable[FinalLink]) -> List[TextRun]:
    """Return runs covering ``content`` in order, links showing their display text."""

    runs: List[TextRun] = []
    cursor = 0
    for link in links:
        if link.start > cursor:
            runs.append(TextRun(content[cursor : link.start]))
        runs.append(TextRun(link.display_text, link))
        cursor = link.end
    if cursor < len(content):
        runs.append(TextRun(content[cursor:]))
    return runs
