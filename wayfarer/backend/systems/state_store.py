"""State store owning the protagonist's mutable status."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union

from ..models.state import State, StateView, StatusKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Mutation:
    """A status change, reported to listeners after it is applied."""
    key: StatusKey
    delta: int
    value: int
    reason: Optional[str] = None


MutationListener = Callable[[Mutation], None]


class StateStore:
    """状态存储 - 所有状态修改都经过这里"""

    def __init__(self, site: str, status: Dict[StatusKey, int], days: int = 0):
        initial = {key: int(status.get(key, 0)) for key in StatusKey.order()}
        self._state = State(site=site, days=days, status=initial)
        self._view = StateView(self._state)
        self._listeners: List[MutationListener] = []

    def subscribe(self, listener: MutationListener) -> None:
        self._listeners.append(listener)

    def read(self) -> StateView:
        """获取当前状态（只读）"""
        return self._view

    def mutate(self, key: Union[str, StatusKey], delta: int, reason: Optional[str] = None) -> None:
        """
        修改主角的数值

        Args:
            key: 状态键，必须是 hp / money / honor 之一
            delta: 变化量（而不是最终量）
            reason: 原因，用于生成数值变化文本
        """
        status_key = StatusKey.parse(key)
        if isinstance(delta, float) and delta.is_integer():
            delta = int(delta)
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise TypeError(f"status deltas must be integers, got {delta!r}")
        self._state.status[status_key] += delta
        value = self._state.status[status_key]
        logger.debug("mutate %s %+d -> %d (%s)", status_key.value, delta, value, reason)

        mutation = Mutation(key=status_key, delta=delta, value=value, reason=reason)
        for listener in self._listeners:
            listener(mutation)

    def set_site(self, site_id: str) -> None:
        """设置当前地点（仅供导航使用）"""
        logger.debug("site %s -> %s", self._state.site, site_id)
        self._state.site = site_id

    def advance_days(self, days: int) -> None:
        """推进天数（仅供导航使用）"""
        if days < 0:
            raise ValueError(f"days only move forward, got {days}")
        self._state.days += days
        logger.debug("days +%d -> %d", days, self._state.days)
