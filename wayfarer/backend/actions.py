"""Built-in named actions available to every script."""

from __future__ import annotations

from .contract import Game
from .models import StatusKey, TextType
from .systems.action_dispatcher import ActionRegistry

builtin_actions = ActionRegistry()

INN_PRICE = 5
INN_HEAL = 10


@builtin_actions.action("rest")
def rest(game: Game) -> None:
    """Pay for a bed and recover some HP, if the purse allows it."""
    if game.state.money < INN_PRICE:
        game.add_text("You cannot afford a bed tonight.", TextType.BAD.value)
        return
    game.mutate(StatusKey.MONEY, -INN_PRICE, "inn")
    game.mutate(StatusKey.HP, INN_HEAL, "rest")
    game.show_state(options=False)


@builtin_actions.action("check_fate")
def check_fate(game: Game) -> None:
    """End the journey when HP or money has run out; otherwise refresh."""
    state = game.state
    if state.hp <= 0:
        game.add_text(game.fill_text("You collapse on the road after $days days."), TextType.BAD.value)
        end_journey(game)
    elif state.money < 0:
        game.add_text(game.fill_text("Debts catch up with you in $site."), TextType.BAD.value)
        end_journey(game)
    else:
        game.show_state()


@builtin_actions.action("end_journey")
def end_journey(game: Game) -> None:
    game.add_text(game.fill_text("Your journey ends. Honor: $honor."), TextType.NORMAL.value)
    game.set_options([])


@builtin_actions.action("stay")
def stay(game: Game) -> None:
    """Dismiss an event menu and show the current site's ports again."""
    game.show_state(state=False)
