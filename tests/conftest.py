import random

import pytest

from wayfarer.backend.config import GameConfig
from wayfarer.backend.models import StatusKey
from wayfarer.backend.runtime import create_game
from wayfarer.backend.script_source import ScriptSource
from wayfarer.backend.systems import ActionRegistry, BufferedSink


@pytest.fixture
def world_data():
    return {
        "entry": {"site": "camp", "story": "You wake up in $site."},
        "sites": [
            {
                "id": "camp",
                "name": "camp",
                "ports": [{"target": "village"}, {"target": "forest", "name": "Into the woods"}],
                "events": [],
            },
            {
                "id": "village",
                "name": "village",
                "ports": [{"target": "forest"}],
                "events": [{"id": "e1", "weight": 1, "text": "$site awaits"}],
            },
            {
                "id": "forest",
                "name": "Dark Forest",
                "ports": [{"target": "camp", "distance": 3}],
                "events": [],
            },
        ],
        "events": [
            {"id": "storm", "text": "A storm rolls in over $site.", "options": [
                {"text": "Shelter ($hp hp)", "action": "shelter"},
            ]},
            {"id": "ambush", "action": {"effects": [{"mutate": {"key": "hp", "delta": -5, "reason": "ambush"}}]}},
        ],
    }


@pytest.fixture
def registry():
    reg = ActionRegistry()

    @reg.action("shelter")
    def shelter(game):
        game.mutate("hp", 1, "shelter")

    return reg


@pytest.fixture
def config():
    return GameConfig(
        initial_status={StatusKey.HP: 20, StatusKey.MONEY: 50, StatusKey.HONOR: 0},
    )


@pytest.fixture
def make_game(registry, config, world_data):
    def _make(data=None, **kwargs):
        source = ScriptSource.from_dict(data or world_data, registry=registry)
        kwargs.setdefault("config", config)
        kwargs.setdefault("sink", BufferedSink())
        kwargs.setdefault("rng", random.Random(7))
        return create_game(source, **kwargs)
    return _make


@pytest.fixture
def game(make_game):
    return make_game()
