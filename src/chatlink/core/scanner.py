"""Escape-aware delimiter scanning (core domain).

Every bracketed link syntax needs the same two things: find the delimiter
that balances an opener, and strip escape backslashes from the text between
them. Both are plain cursor loops so the cost stays linear in the text length.
"""

from __future__ import annotations

from typing import Dict, List, Optional

ESCAPE_CHAR = "\\"
DELIMITERS = "()[]"


def is_escaped(text: str, index: int) -> bool:
    """Return True when the character at ``index`` is preceded by a backslash."""

    return index > 0 and text[index - 1] == ESCAPE_CHAR


def find_closing(text: str, open_index: int, opening: str, closing: str) -> Optional[int]:
    """Return the index of the delimiter that balances ``text[open_index]``.

    Unescaped openers of the same kind nest, so in ``[a [b] c]`` the first
    ``]`` only closes the inner pair. Returns None when the text ends before
    the depth gets back to zero.
    """

    depth = 0
    for index in range(open_index, len(text)):
        char = text[index]
        if char != opening and char != closing:
            continue
        if is_escaped(text, index):
            continue
        if char == opening:
            depth += 1
        else:
            depth -= 1
            if depth == 0:
                return index
    return None


def match_pairs(text: str, opening: str, closing: str) -> Dict[int, int]:
    """Map every balanced unescaped opener to its closing index in one pass.

    Unbalanced openers are absent from the result. For any opener present,
    the value equals what ``find_closing`` returns for it.
    """

    pairs: Dict[int, int] = {}
    stack: List[int] = []
    for index, char in enumerate(text):
        if char != opening and char != closing:
            continue
        if is_escaped(text, index):
            continue
        if char == opening:
            stack.append(index)
        elif stack:
            pairs[stack.pop()] = index
    return pairs


def unescape(text: str) -> str:
    """Drop backslashes that escape a bracket or parenthesis."""

    if ESCAPE_CHAR not in text:
        return text

    out: List[str] = []
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char == ESCAPE_CHAR and index + 1 < length and text[index + 1] in DELIMITERS:
            out.append(text[index + 1])
            index += 2
            continue
        out.append(char)
        index += 1
    return "".join(out)
