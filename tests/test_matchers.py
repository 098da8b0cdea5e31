from __future__ import annotations

from chatlink.core.config import LinkerConfig
from chatlink.core.links import SyntaxKind
from chatlink.core.matchers import (
    match_bare_urls,
    match_channel_mentions,
    match_editor_timestamps,
    match_internal_protocol,
    match_markdown,
    match_new_style,
    match_old_style,
    match_wiki,
    trim_trailing_punctuation,
)

CONFIG = LinkerConfig()


def test_trim_trailing_punctuation() -> None:
    assert trim_trailing_punctuation("https://dev.ppy.sh!") == "https://dev.ppy.sh"
    assert trim_trailing_punctuation("https://example.com/path).") == "https://example.com/path"
    assert trim_trailing_punctuation("https://en.wikipedia.org/wiki/Foo_(bar)") == (
        "https://en.wikipedia.org/wiki/Foo_(bar)"
    )
    assert trim_trailing_punctuation("#english,") == "#english"
    assert trim_trailing_punctuation("...") == ""


def test_old_style_resumes_after_unterminated_paren() -> None:
    text = "(a (b)[https://x.y]"
    candidates = match_old_style(text, CONFIG)
    assert len(candidates) == 1
    candidate = candidates[0]
    assert (candidate.start, candidate.end) == (3, len(text))
    assert candidate.display_text == "b"
    assert candidate.target == "https://x.y"
    assert candidate.kind == SyntaxKind.OLD_STYLE


def test_old_style_requires_scheme_target() -> None:
    assert match_old_style("(not a link)[just words]", CONFIG) == []
    assert match_old_style("(1,2) - Test?", CONFIG) == []


def test_bracketed_forms_accept_timestamp_targets() -> None:
    assert [c.target for c in match_old_style("(see here)[00:12:345]", CONFIG)] == ["00:12:345"]
    assert [c.target for c in match_markdown("[see here](00:12:345)", CONFIG)] == ["00:12:345"]
    assert match_new_style("[00:12:345 see here]", CONFIG) == []


def test_new_style_needs_display_text() -> None:
    assert match_new_style("[https://x.y]", CONFIG) == []
    candidates = match_new_style("[https://x.y some words]", CONFIG)
    assert [c.display_text for c in candidates] == ["some words"]


def test_new_style_ignores_plain_brackets() -> None:
    assert match_new_style("[and this] is [not a link]", CONFIG) == []


def test_markdown_accepts_quoted_title() -> None:
    candidates = match_markdown('[docs](https://example.com/docs "The docs")', CONFIG)
    assert len(candidates) == 1
    assert candidates[0].target == "https://example.com/docs"
    assert candidates[0].display_text == "docs"


def test_markdown_rejects_target_with_trailing_garbage() -> None:
    assert match_markdown("[docs](https://example.com/docs and more)", CONFIG) == []


def test_wiki_requires_bracket_free_topic() -> None:
    assert match_wiki("[[]]", CONFIG) == []
    assert match_wiki("[[a [b] c]]", CONFIG) == []
    candidates = match_wiki("see [[Performance Points]]", CONFIG)
    assert len(candidates) == 1
    assert candidates[0].target == "Performance Points"
    assert candidates[0].display_text == "Wiki: Performance Points"
    assert candidates[0].start == 4


def test_bare_urls_require_scheme_and_word_boundary() -> None:
    assert match_bare_urls("dev.ppy.sh!", CONFIG) == []
    assert match_bare_urls("xhttps://dev.ppy.sh", CONFIG) == []
    assert match_bare_urls("https:// nothing", CONFIG) == []
    candidates = match_bare_urls("go to https://dev.ppy.sh/home, now", CONFIG)
    assert [c.target for c in candidates] == ["https://dev.ppy.sh/home"]
    assert candidates[0].start == 6


def test_internal_protocol_needs_known_path() -> None:
    assert match_internal_protocol("osu://nowhere/1", CONFIG) == []
    candidates = match_internal_protocol("Join my osump://12346.", CONFIG)
    assert [c.target for c in candidates] == ["osump://12346"]


def test_channel_mentions_are_emitted_regardless_of_existence() -> None:
    candidates = match_channel_mentions("Join #english, (#osu) and #", CONFIG)
    assert [c.target for c in candidates] == ["#english", "#osu"]


def test_channel_mentions_end_at_comma() -> None:
    candidates = match_channel_mentions("#english,#japanese", CONFIG)
    assert [c.target for c in candidates] == ["#english", "#japanese"]


def test_channel_mention_inside_protocol_path_is_not_a_mention() -> None:
    assert match_channel_mentions("osu://chan/#english", CONFIG) == []


def test_editor_timestamps() -> None:
    candidates = match_editor_timestamps("at 01:02:003 (1|2|3) and 1:02:003", CONFIG)
    assert [c.target for c in candidates] == ["01:02:003 (1|2|3)"]
    assert match_editor_timestamps("00:61:000", CONFIG) == []
