"""Navigation between sites and travel cost policies."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict

from ..config import TravelConfig
from ..models.script import Site
from ..models.state import StatusKey
from .event_selector import EventSelector
from .presentation import PresentationAdapter
from .state_store import StateStore

if TYPE_CHECKING:
    from ..script_source import ScriptSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TravelCost:
    """一段路程的消耗"""
    days: int = 0
    money: int = 0


CostPolicy = Callable[[Site, Site], TravelCost]


def flat_cost_policy(days: int = 1, money: int = 10) -> CostPolicy:
    """Every leg costs the same, wherever it goes."""
    def policy(departure: Site, arrival: Site) -> TravelCost:
        return TravelCost(days=days, money=money)
    return policy


def distance_cost_policy(days: int = 1, money_per_day: int = 10) -> CostPolicy:
    """Cost scales with the distance of the port taken (1 when no port leads there)."""
    def policy(departure: Site, arrival: Site) -> TravelCost:
        port = departure.port_to(arrival.id)
        leg_days = (port.distance if port else 1) * days
        return TravelCost(days=leg_days, money=leg_days * money_per_day)
    return policy


def build_cost_policy(config: TravelConfig) -> CostPolicy:
    builders: Dict[str, Callable[[], CostPolicy]] = {
        "flat": lambda: flat_cost_policy(config.days, config.money),
        "distance": lambda: distance_cost_policy(config.days, config.money_per_day),
    }
    if config.policy not in builders:
        raise ValueError(f"unknown travel policy {config.policy!r}, expected one of {sorted(builders)}")
    return builders[config.policy]()


class Navigator:
    """导航 - 计算旅行消耗并在地点之间移动"""

    def __init__(
        self,
        source: ScriptSource,
        store: StateStore,
        events: EventSelector,
        presentation: PresentationAdapter,
        show_state: Callable[[bool, bool], None],
        cost_policy: CostPolicy,
        travel_reason: str = "travel",
        suppress_self_arrival: bool = False,
    ):
        self._source = source
        self._store = store
        self._events = events
        self._presentation = presentation
        self._show_state = show_state
        self.cost_policy = cost_policy
        self.travel_reason = travel_reason
        self.suppress_self_arrival = suppress_self_arrival

    def go_to_site(self, site_id: str, instantly: bool = False) -> None:
        """
        走向一个指定的地点

        Args:
            site_id: 目的地的ID
            instantly: 是否立刻到达；关闭时计算路上消耗的天数与金钱
        """
        arrival = self._source.get_site(site_id)
        departure_id = self._store.read().site

        if not instantly:
            departure = self._source.get_site(departure_id)
            cost = self.cost_policy(departure, arrival)
            if cost.days:
                self._store.advance_days(cost.days)
            if cost.money:
                self._store.mutate(StatusKey.MONEY, -cost.money, self.travel_reason)

        self._store.set_site(arrival.id)
        logger.debug("arrived at %s (from %s, instantly=%s)", arrival.id, departure_id, instantly)

        revision = self._presentation.options_revision
        if not (self.suppress_self_arrival and departure_id == arrival.id):
            self._events.arrive(arrival)

        # 到达事件已经设置了选项时只刷新状态
        self._show_state(True, self._presentation.options_revision == revision)
