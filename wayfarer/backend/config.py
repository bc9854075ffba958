"""Runtime configuration (config.yaml + environment overrides)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .models import StatusKey

ENV_SCRIPT_DIR = "WAYFARER_SCRIPT_DIR"
ENV_SEED = "WAYFARER_SEED"
ENV_LOG_LEVEL = "WAYFARER_LOG_LEVEL"
ENV_HOST = "WAYFARER_HOST"
ENV_PORT = "WAYFARER_PORT"


def _default_labels() -> Dict[StatusKey, str]:
    return {StatusKey.HP: "HP", StatusKey.MONEY: "Money", StatusKey.HONOR: "Honor"}


def _default_initial_status() -> Dict[StatusKey, int]:
    return {StatusKey.HP: 100, StatusKey.MONEY: 100, StatusKey.HONOR: 0}


@dataclass
class TravelConfig:
    """旅行消耗配置"""
    policy: str = "flat"            # flat | distance
    days: int = 1                   # 每段路程消耗的天数
    money: int = 10                 # flat 策略下每段路程的花费
    money_per_day: int = 10         # distance 策略下每天的花费
    suppress_self_arrival: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TravelConfig:
        return cls(
            policy=str(data.get("policy", "flat")),
            days=int(data.get("days", 1)),
            money=int(data.get("money", 10)),
            money_per_day=int(data.get("money_per_day", 10)),
            suppress_self_arrival=bool(data.get("suppress_self_arrival", False)),
        )


@dataclass
class TextConfig:
    """文本生成配置"""
    ports_delimiter: str = ", "
    go_to_prefix: str = "go to "
    travel_reason: str = "travel"
    status_labels: Dict[StatusKey, str] = field(default_factory=_default_labels)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TextConfig:
        labels = _default_labels()
        for key, label in (data.get("status_labels") or {}).items():
            labels[StatusKey.parse(key)] = str(label)
        return cls(
            ports_delimiter=str(data.get("ports_delimiter", ", ")),
            go_to_prefix=str(data.get("go_to_prefix", "go to ")),
            travel_reason=str(data.get("travel_reason", "travel")),
            status_labels=labels,
        )


@dataclass
class GameConfig:
    """游戏总配置"""
    initial_status: Dict[StatusKey, int] = field(default_factory=_default_initial_status)
    starting_day: int = 0
    travel: TravelConfig = field(default_factory=TravelConfig)
    text: TextConfig = field(default_factory=TextConfig)
    seed: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> GameConfig:
        """从字典创建 GameConfig"""
        data = data or {}
        player = data.get("player") or {}

        status = _default_initial_status()
        for key, value in (player.get("status") or {}).items():
            status[StatusKey.parse(key)] = int(value)

        starting_day = int(player.get("starting_day", 0))
        if starting_day < 0:
            raise ValueError(f"starting_day must be non-negative, got {starting_day}")

        seed = (data.get("random") or {}).get("seed")
        return cls(
            initial_status=status,
            starting_day=starting_day,
            travel=TravelConfig.from_dict(data.get("travel") or {}),
            text=TextConfig.from_dict(data.get("text") or {}),
            seed=int(seed) if seed is not None else None,
        )

    def with_env(self, environ: Optional[Mapping[str, str]] = None) -> GameConfig:
        """Apply environment overrides (WAYFARER_SEED)."""
        environ = os.environ if environ is None else environ
        seed = environ.get(ENV_SEED)
        if seed:
            self.seed = int(seed)
        return self
