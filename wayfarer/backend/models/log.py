"""Dialogue log data models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple


class TextType(str, Enum):
    """对话框文本类型（未知类型原样透传）"""
    NORMAL = "normal"
    EVENT = "event"
    GOOD = "good"
    BAD = "bad"
    VALUE_MUTATION = "value-mutation"


@dataclass(frozen=True)
class LogEntry:
    """对话框中的一行文本"""
    text: str
    types: Tuple[str, ...] = (TextType.NORMAL.value,)

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "types": list(self.types)}
