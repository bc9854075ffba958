"""Protagonist state data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Union

from ..errors import InvalidKeyError


class StatusKey(str, Enum):
    """主角的状态键"""
    HP = "hp"          # 血量
    MONEY = "money"    # 金钱
    HONOR = "honor"    # 荣誉

    @classmethod
    def order(cls) -> List[StatusKey]:
        """Display order of the status keys."""
        return [cls.HP, cls.MONEY, cls.HONOR]

    @classmethod
    def parse(cls, key: Union[str, StatusKey]) -> StatusKey:
        """Coerce ``key`` into a status key, raising InvalidKeyError."""
        if isinstance(key, cls):
            return key
        try:
            return cls(key)
        except ValueError:
            raise InvalidKeyError(key) from None


def default_status() -> Dict[StatusKey, int]:
    return {key: 0 for key in StatusKey.order()}


@dataclass
class State:
    """Mutable protagonist state. Only the StateStore writes to it."""
    site: str
    days: int = 0
    status: Dict[StatusKey, int] = field(default_factory=default_status)


class StateView:
    """Live read-only view over a State."""

    __slots__ = ("_state",)

    def __init__(self, state: State):
        self._state = state

    @property
    def site(self) -> str:
        return self._state.site

    @property
    def days(self) -> int:
        return self._state.days

    @property
    def hp(self) -> int:
        return self._state.status[StatusKey.HP]

    @property
    def money(self) -> int:
        return self._state.status[StatusKey.MONEY]

    @property
    def honor(self) -> int:
        return self._state.status[StatusKey.HONOR]

    @property
    def status(self) -> Mapping[StatusKey, int]:
        return MappingProxyType(self._state.status)

    def __getitem__(self, key: Union[str, StatusKey]) -> int:
        return self._state.status[StatusKey.parse(key)]

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"site": self.site, "days": self.days}
        for key in StatusKey.order():
            data[key.value] = self._state.status[key]
        return data

    def __repr__(self) -> str:
        return f"StateView({self.to_dict()!r})"
