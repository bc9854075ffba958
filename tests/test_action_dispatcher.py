import pytest

from wayfarer.backend.errors import ScriptFormatError, UnknownActionError
from wayfarer.backend.models import DirectAction, NamedAction, Option, ScriptedAction, parse_action
from wayfarer.backend.systems import ActionDispatcher, ActionRegistry


def test_parse_action_variants():
    func = lambda game: None  # noqa: E731
    assert parse_action("rest") == NamedAction("rest")
    assert parse_action(func) == DirectAction(func)
    scripted = parse_action({"effects": [{"trigger": "storm"}]})
    assert isinstance(scripted, ScriptedAction)
    assert scripted.effects[0].kind == "trigger"
    assert isinstance(parse_action([{"text": "hi"}]), ScriptedAction)
    with pytest.raises(ScriptFormatError):
        parse_action(42)


@pytest.mark.parametrize("effect", [
    {"explode": True},
    {"text": "a", "mutate": {}},
    {"mutate": {"key": "hp"}},
    {"trigger": ["a", "b"]},
    {"text": {"text": "hi", "types": 3}},
    {"text": ["hi"]},
])
def test_malformed_effects_are_rejected(effect):
    with pytest.raises(ScriptFormatError):
        parse_action([effect])


def test_named_action_resolves_through_registry():
    calls = []
    registry = ActionRegistry({"wave": lambda game: calls.append(game)})
    dispatcher = ActionDispatcher(registry)
    dispatcher.dispatch("wave", "the game")
    assert calls == ["the game"]


def test_unknown_named_action():
    dispatcher = ActionDispatcher(ActionRegistry())
    with pytest.raises(UnknownActionError):
        dispatcher.resolve(NamedAction("missing"))


def test_registry_decorator_and_merge():
    base = ActionRegistry()

    @base.action()
    def rest(game):
        pass

    override = ActionRegistry({"rest": lambda game: None, "extra": lambda game: None})
    merged = base.merge(override)
    assert "rest" in base and "extra" not in base
    assert set(merged) == {"rest", "extra"}
    assert merged.get("rest") is override.get("rest")
    assert len(base.merge(None)) == 1


def test_direct_action_receives_the_game(game):
    seen = []
    game.dispatch(lambda g: seen.append(g.state.site))
    assert seen == ["camp"]


def test_scripted_effects_run_in_order(game):
    game.dispatch([
        {"text": {"text": "You find $money coins", "types": ["good"]}},
        {"mutate": {"key": "money", "delta": 5, "reason": "luck"}},
        {"call": "shelter"},
        {"go_to": {"site": "forest", "instantly": True}},
        {"options": [{"text": "Rest in $site", "action": "shelter"}]},
    ])
    assert [entry.text for entry in game.sink.log] == [
        "You find 50 coins",
        "luck: Money +5",
        "shelter: HP +1",
    ]
    assert game.sink.log[0].types == ("good",)
    assert game.state.site == "forest"
    assert [option.text for option in game.options] == ["Rest in Dark Forest"]


def test_scripted_trigger_and_show_state(game):
    game.dispatch([{"trigger": "storm"}, {"show_state": {"state": True, "options": False}}])
    assert game.sink.state["site"] == "camp"
    assert [option.text for option in game.options] == ["Shelter (20 hp)"]


def test_unknown_action_from_option(game):
    game.set_options([Option.of("Pray", "pray")])
    with pytest.raises(UnknownActionError):
        game.choose(0)


def test_text_types_accept_a_single_name():
    action = parse_action([{"text": {"text": "hi", "types": "good"}}])
    assert action.effects[0].args["types"] == ["good"]
