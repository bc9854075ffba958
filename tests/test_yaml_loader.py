import random
import textwrap

import pytest

from wayfarer.backend.config import ENV_SCRIPT_DIR
from wayfarer.backend.errors import ScriptFormatError
from wayfarer.backend.loaders import get_settings_path, load_all_settings, load_script, load_script_source
from wayfarer.backend.models import StatusKey
from wayfarer.backend.runtime import create_game
from wayfarer.backend.systems import BufferedSink


def write(path, content):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content), encoding="utf-8")


def test_bundled_script_loads():
    script = load_script()
    assert script.entry.site == "village"
    assert {site.id for site in script.sites} == {"village", "forest", "river", "town"}
    forest = script.find_site("forest")
    # string entries in a site's events reference top-level events
    assert forest.events[0] is script.find_event("wolves")
    assert script.find_site("village").port_to("river").distance == 2


def test_bundled_config_loads():
    source, config = load_all_settings()
    assert config.travel.policy == "distance"
    assert config.initial_status[StatusKey.MONEY] == 60
    assert "rest" in source.registry


def simulate_random_playthrough(game, *, seed, max_steps=300):
    rng = random.Random(seed)
    site_ids = {site.id for site in game.source.data.sites}
    game.start()
    last_days = game.state.days
    for _ in range(max_steps):
        assert game.state.site in site_ids
        assert game.state.days >= last_days
        last_days = game.state.days
        if not game.options:
            return "ended"
        game.choose(rng.randrange(len(game.options)))
    return "wandering"


@pytest.mark.parametrize("seed", range(8))
def test_bundled_script_plays_without_errors(seed):
    source, config = load_all_settings()
    game = create_game(source, config=config, sink=BufferedSink(), rng=random.Random(seed))
    assert simulate_random_playthrough(game, seed=seed) in {"ended", "wandering"}


def test_single_file_script(tmp_path):
    write(tmp_path / "script.yaml", """
        entry: {site: a, story: Hello}
        sites:
          - id: a
            name: Alpha
            ports: [{target: b}]
            events: [greet]
          - {id: b, name: Beta}
        events:
          - {id: greet, text: "Hi from $site"}
    """)
    script = load_script(tmp_path / "script.yaml")
    assert script.find_site("a").events[0].text == "Hi from $site"
    assert script.find_site("b").ports == ()


def test_quoted_weight_is_read_as_a_number(tmp_path):
    write(tmp_path / "script.yaml", """
        entry: {site: a}
        sites:
          - id: a
            name: Alpha
            events:
              - {id: quiet, text: "Nothing happens"}
              - {id: bell, weight: "2", text: "A bell rings in $site"}
    """)
    source = load_script_source(tmp_path / "script.yaml")
    assert source.get_site("a").events[1].weight == 2.0

    game = create_game(source, sink=BufferedSink(), rng=random.Random(3))
    game.start()
    assert [entry.text for entry in game.sink.log if "event" in entry.types] == ["A bell rings in Alpha"]


def test_directory_script_with_env_override(tmp_path, monkeypatch):
    write(tmp_path / "entry.yaml", "site: home\n")
    write(tmp_path / "sites" / "home.yml", """
        id: home
        name: Home
        events:
          - text: untitled event
    """)
    write(tmp_path / "config.yaml", "player: {status: {hp: 5}}\n")
    monkeypatch.setenv(ENV_SCRIPT_DIR, str(tmp_path))
    assert get_settings_path() == tmp_path

    source, config = load_all_settings()
    home = source.get_site("home")
    assert home.events[0].id == "home_event_0"
    assert config.initial_status[StatusKey.HP] == 5
    assert config.initial_status[StatusKey.MONEY] == 100


@pytest.mark.parametrize("content", [
    "entry: {site: a}\nsites: [{id: a, name: A}, {id: a, name: B}]\n",
    "entry: {site: a}\nsites: [{id: a, name: A, ports: [{name: nowhere}]}]\n",
    "entry: {site: a}\nsites: [{id: a, name: A, events: [ghost]}]\n",
    "entry: {site: a}\nsites: [{name: A}]\n",
    "entry: {site: a}\nsites: [{id: a, name: A, events: [{id: e, weight: heavy}]}]\n",
    "entry: {site: a}\nsites: [{id: a, name: A, events: [{id: e, weight: true}]}]\n",
    "sites: [{id: a, name: A}]\n",
    "- just\n- a list\n",
    "entry: {site: a\n",
])
def test_malformed_scripts(tmp_path, content):
    (tmp_path / "bad.yaml").write_text(content, encoding="utf-8")
    with pytest.raises(ScriptFormatError):
        load_script(tmp_path / "bad.yaml")


def test_missing_script_path(tmp_path):
    with pytest.raises(ScriptFormatError):
        load_script(tmp_path / "missing")
