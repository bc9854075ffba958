"""Game runtime that composes all game systems behind the `Game` contract."""

from __future__ import annotations

import logging
import random
from typing import Any, Iterable, List, Optional, Tuple, Union

from .config import GameConfig
from .models import DirectAction, Event, Option, StateView, StatusKey, TextType
from .models.script import Port
from .script_source import ScriptSource
from .systems import (
    ActionDispatcher,
    BufferedSink,
    CostPolicy,
    EventSelector,
    Mutation,
    Navigator,
    PresentationAdapter,
    PresentationSink,
    StateStore,
    TextTemplater,
    build_cost_policy,
)

logger = logging.getLogger(__name__)


class GameRuntime:
    """游戏主控制器 - 整合所有子系统"""

    def __init__(
        self,
        source: ScriptSource,
        config: Optional[GameConfig] = None,
        sink: Optional[PresentationSink] = None,
        rng: Optional[random.Random] = None,
        cost_policy: Optional[CostPolicy] = None,
    ):
        self.source = source
        self.config = config or GameConfig()
        self.sink = sink if sink is not None else BufferedSink()
        entry_site = source.check_entry()

        # 初始化子系统
        self.store = StateStore(
            site=entry_site.id,
            status=self.config.initial_status,
            days=self.config.starting_day,
        )
        self.templater = TextTemplater(source.data, self.store.read, self.config.text)
        self.presentation = PresentationAdapter(self.sink, self.templater.fill_text)
        self.dispatcher = ActionDispatcher(source.registry)
        self.events = EventSelector(
            source,
            self.presentation,
            self.templater.fill_text,
            self.dispatch,
            rng or random.Random(self.config.seed),
        )
        self.navigator = Navigator(
            source,
            self.store,
            self.events,
            self.presentation,
            self.show_state,
            cost_policy or build_cost_policy(self.config.travel),
            travel_reason=self.config.text.travel_reason,
            suppress_self_arrival=self.config.travel.suppress_self_arrival,
        )
        self.store.subscribe(self._report_mutation)

    # ============================================================
    # Game contract
    # ============================================================

    @property
    def state(self) -> StateView:
        return self.store.read()

    def fill_text(self, raw: str) -> str:
        return self.templater.fill_text(raw)

    def add_text(self, text: str, *types: str) -> None:
        self.presentation.add_text(text, *types)

    def set_options(self, options: Iterable[Option]) -> None:
        self.presentation.set_options(options)

    def mutate(self, key: Union[str, StatusKey], delta: int, reason: Optional[str] = None) -> None:
        self.store.mutate(key, delta, reason)

    def go_to_site(self, site_id: str, instantly: bool = False) -> None:
        self.navigator.go_to_site(site_id, instantly)

    def trigger_event(self, event: Union[str, Event]) -> None:
        self.events.trigger_event(event)

    def show_state(self, state: bool = True, options: bool = True) -> None:
        """
        显示人物信息与通路选项列表

        Args:
            state: 是否显示当前状态、位置等信息
            options: 是否用当前地点的通路更新选项
        """
        if state:
            self.presentation.show_state(self.state)
        if options:
            site = self.source.get_site(self.state.site)
            self.presentation.set_options([self._port_option(port) for port in site.ports])

    def dispatch(self, action: Any) -> None:
        self.dispatcher.dispatch(action, self)

    # ============================================================
    # Session
    # ============================================================

    @property
    def options(self) -> Tuple[Option, ...]:
        return self.presentation.options

    def start(self) -> None:
        """Show the entry story and arrive at the entry site."""
        entry = self.source.data.entry
        logger.info("session start at %s", entry.site)
        if entry.story:
            self.add_text(self.fill_text(entry.story), TextType.NORMAL.value)
        self.go_to_site(entry.site, instantly=True)

    def choose(self, index: int) -> None:
        """Run the action of the option at ``index`` on the current panel."""
        options = self.presentation.options
        if not 0 <= index < len(options):
            raise IndexError(f"option {index} out of range (0..{len(options) - 1})")
        logger.debug("choose %d: %s", index, options[index].text)
        self.dispatch(options[index].action)

    # ============================================================
    # 辅助方法
    # ============================================================

    def _port_option(self, port: Port) -> Option:
        if port.action is not None:
            action = port.action
        else:
            target = port.target
            action = DirectAction(lambda game: game.go_to_site(target))
        return Option(text=self.templater.port_label(port), action=action)

    def _report_mutation(self, mutation: Mutation) -> None:
        label = self.config.text.status_labels.get(mutation.key, mutation.key.value)
        text = f"{label} {mutation.delta:+d}"
        if mutation.reason:
            text = f"{mutation.reason}: {text}"

        types: List[str] = [TextType.VALUE_MUTATION.value]
        if mutation.delta > 0:
            types.append(TextType.GOOD.value)
        elif mutation.delta < 0:
            types.append(TextType.BAD.value)
        self.add_text(text, *types)


def create_game(
    source: ScriptSource,
    config: Optional[GameConfig] = None,
    sink: Optional[PresentationSink] = None,
    rng: Optional[random.Random] = None,
    cost_policy: Optional[CostPolicy] = None,
) -> GameRuntime:
    """Build a fresh session over shared script data (does not start it)."""
    return GameRuntime(source, config=config, sink=sink, rng=rng, cost_policy=cost_policy)
