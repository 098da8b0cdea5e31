from __future__ import annotations

import pytest

from chatlink.core.config import LinkerConfig
from chatlink.core.links import LinkAction
from chatlink.core.targets import is_scheme_url, resolve_application_target, resolve_target

CONFIG = LinkerConfig()


@pytest.mark.parametrize(
    ("target", "action", "argument"),
    [
        ("https://dev.ppy.sh/b/252238", LinkAction.OPEN_BEATMAP, "252238"),
        ("https://osu.ppy.sh/beatmaps/75", LinkAction.OPEN_BEATMAP, "75"),
        ("https://dev.ppy.sh/s/93523", LinkAction.OPEN_BEATMAP_SET, "93523"),
        ("https://osu.ppy.sh/beatmapsets/93523", LinkAction.OPEN_BEATMAP_SET, "93523"),
        ("https://osu.ppy.sh/beatmapsets/93523#osu/252238", LinkAction.OPEN_BEATMAP, "252238"),
        ("https://osu.ppy.sh/wiki/Performance_Points", LinkAction.OPEN_WIKI, "Performance_Points"),
        ("https://dev.ppy.sh/home", LinkAction.EXTERNAL, "https://dev.ppy.sh/home"),
        ("https://example.com/b/1", LinkAction.EXTERNAL, "https://example.com/b/1"),
        ("osump://12346", LinkAction.JOIN_MULTIPLAYER_MATCH, "12346"),
        ("osu://chan/#english", LinkAction.OPEN_CHANNEL, "#english"),
        ("osu://edit/00:12:345", LinkAction.OPEN_EDITOR_TIMESTAMP, "00:12:345"),
        ("osu://b/12", LinkAction.OPEN_BEATMAP, "12"),
        ("osu://s/34", LinkAction.OPEN_BEATMAP_SET, "34"),
        ("00:01:234 (1,2)", LinkAction.OPEN_EDITOR_TIMESTAMP, "00:01:234 (1,2)"),
        ("ftp://files.example.com/a", LinkAction.EXTERNAL, "ftp://files.example.com/a"),
    ],
)
def test_resolve_target(target: str, action: LinkAction, argument: str) -> None:
    assert resolve_target(target, CONFIG) == (action, argument)


def test_unknown_application_paths_fall_back_to_external() -> None:
    assert resolve_application_target("osu://unknown/1", CONFIG) is None
    assert resolve_application_target("osump://abc", CONFIG) is None
    assert resolve_target("osump://abc", CONFIG) == (LinkAction.EXTERNAL, "osump://abc")


def test_malformed_url_does_not_raise() -> None:
    assert resolve_target("https://[::1", CONFIG) == (LinkAction.EXTERNAL, "https://[::1")


def test_trusted_hosts_are_configurable() -> None:
    config = LinkerConfig(trusted_hosts=("maps.example.org",))
    assert resolve_target("https://maps.example.org/b/9", config) == (LinkAction.OPEN_BEATMAP, "9")
    assert resolve_target("https://osu.ppy.sh/b/9", config)[0] == LinkAction.EXTERNAL


def test_is_scheme_url() -> None:
    assert is_scheme_url("https://dev.ppy.sh")
    assert not is_scheme_url("dev.ppy.sh")
    assert not is_scheme_url("https://dev.ppy.sh has spaces")
    assert not is_scheme_url("https://")


def test_invalid_scheme_config_is_rejected() -> None:
    with pytest.raises(ValueError):
        LinkerConfig(internal_scheme="OSU")
    with pytest.raises(ValueError):
        LinkerConfig(external_schemes=("http", ""))
