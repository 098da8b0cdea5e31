from __future__ import annotations

from chatlink.core.scanner import find_closing, is_escaped, match_pairs, unescape


def test_find_closing_balances_nested_brackets() -> None:
    assert find_closing("[a [b] c]", 0, "[", "]") == 8
    assert find_closing("[a [b] c]", 3, "[", "]") == 5


def test_find_closing_returns_none_when_unterminated() -> None:
    assert find_closing("[a [b c", 0, "[", "]") is None
    assert find_closing("(never closed", 0, "(", ")") is None


def test_escaped_delimiters_do_not_change_depth() -> None:
    text = r"[a \] b]"
    assert is_escaped(text, 4)
    assert find_closing(text, 0, "[", "]") == 7

    text = r"[a \[ b]"
    assert find_closing(text, 0, "[", "]") == 7


def test_match_pairs_for_double_brackets() -> None:
    assert match_pairs("[[Topic]]", "[", "]") == {0: 8, 1: 7}


def test_match_pairs_skips_unbalanced_openers() -> None:
    pairs = match_pairs("(a (b) c", "(", ")")
    assert pairs == {3: 5}


def test_match_pairs_agrees_with_find_closing() -> None:
    text = r"(x (y \) z) [w] (v)) ((u) (t"
    pairs = match_pairs(text, "(", ")")
    for index, char in enumerate(text):
        if char != "(" or is_escaped(text, index):
            continue
        assert pairs.get(index) == find_closing(text, index, "(", ")")


def test_unescape_removes_only_delimiter_escapes() -> None:
    assert unescape(r"a \[ b \) c") == "a [ b ) c"
    assert unescape(r"C:\path\to") == r"C:\path\to"
    assert unescape("no escapes") == "no escapes"
