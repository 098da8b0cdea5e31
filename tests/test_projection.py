from __future__ import annotations

from chatlink.adapters.channel_directory import InMemoryChannelDirectory
from chatlink.core.projection import project_runs
from chatlink.core.resolver import parse_links

DIRECTORY = InMemoryChannelDirectory(["#english"])


def test_runs_cover_text_and_use_display_text() -> None:
    text = "likes to post this [https://dev.ppy.sh/home link]."
    runs = project_runs(text, parse_links(text, DIRECTORY))

    assert [run.text for run in runs] == ["likes to post this ", "link", "."]
    assert [run.is_link for run in runs] == [False, True, False]


def test_runs_without_links() -> None:
    runs = project_runs("just text", ())
    assert len(runs) == 1
    assert runs[0].text == "just text"
    assert runs[0].link is None


def test_links_separated_by_space() -> None:
    text = "#english [[Topic]]"
    runs = project_runs(text, parse_links(text, DIRECTORY))
    assert [run.text for run in runs] == ["#english", " ", "Wiki: Topic"]
    assert [run.is_link for run in runs] == [True, False, True]
