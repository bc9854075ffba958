"""Action registry and dispatcher."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterator, Mapping, Optional

from ..errors import UnknownActionError
from ..models.action import (
    ActionFunc,
    DirectAction,
    Effect,
    NamedAction,
    ScriptedAction,
    parse_action,
)

if TYPE_CHECKING:
    from ..contract import Game

logger = logging.getLogger(__name__)


class ActionRegistry:
    """名称 -> 行动 的注册表"""

    def __init__(self, actions: Optional[Mapping[str, ActionFunc]] = None):
        self._actions: Dict[str, ActionFunc] = dict(actions or {})

    def register(self, name: str, func: ActionFunc) -> None:
        self._actions[name] = func

    def action(self, name: Optional[str] = None) -> Callable[[ActionFunc], ActionFunc]:
        """Decorator registering a function under ``name`` (default: its own name)."""
        def decorator(func: ActionFunc) -> ActionFunc:
            self.register(name or func.__name__, func)
            return func
        return decorator

    def get(self, name: str) -> Optional[ActionFunc]:
        return self._actions.get(name)

    def merge(self, other: Optional[ActionRegistry]) -> ActionRegistry:
        """Return a new registry; entries of ``other`` win."""
        merged = ActionRegistry(self._actions)
        if other is not None:
            merged._actions.update(other._actions)
        return merged

    def __contains__(self, name: object) -> bool:
        return name in self._actions

    def __iter__(self) -> Iterator[str]:
        return iter(self._actions)

    def __len__(self) -> int:
        return len(self._actions)


class ActionDispatcher:
    """行动分发 - 解析并同步执行行动"""

    def __init__(self, registry: ActionRegistry):
        self.registry = registry

    def resolve(self, action: Any) -> ActionFunc:
        """Turn any Action variant into a callable taking the game."""
        action = parse_action(action)
        if isinstance(action, NamedAction):
            func = self.registry.get(action.name)
            if func is None:
                raise UnknownActionError(action.name)
            return func
        if isinstance(action, DirectAction):
            return action.func
        if isinstance(action, ScriptedAction):
            return lambda game: self._run_effects(action, game)
        raise TypeError(f"not an action: {action!r}")

    def dispatch(self, action: Any, game: Game) -> None:
        func = self.resolve(action)
        logger.debug("dispatch %r", action)
        func(game)

    # ------------------------------------------------------------ scripted
    def _run_effects(self, action: ScriptedAction, game: Game) -> None:
        for effect in action.effects:
            self._apply_effect(effect, game)

    def _apply_effect(self, effect: Effect, game: Game) -> None:
        """应用单个效果"""
        args = effect.args
        if effect.kind == "text":
            game.add_text(game.fill_text(args["text"]), *args["types"])
        elif effect.kind == "mutate":
            game.mutate(args["key"], args["delta"], args["reason"])
        elif effect.kind == "go_to":
            game.go_to_site(args["site"], instantly=args["instantly"])
        elif effect.kind == "trigger":
            game.trigger_event(args["id"])
        elif effect.kind == "call":
            self.dispatch(NamedAction(args["id"]), game)
        elif effect.kind == "options":
            game.set_options(args["options"])
        elif effect.kind == "show_state":
            game.show_state(state=args["state"], options=args["options"])
