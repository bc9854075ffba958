"""Presentation adapter and sinks."""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol, Tuple

from ..models.action import Option, options_to_list
from ..models.log import LogEntry, TextType
from ..models.state import StateView

logger = logging.getLogger(__name__)


class PresentationSink(Protocol):
    """External consumer of log text, option panels and state re-renders."""

    def add_text(self, entry: LogEntry) -> None: ...

    def set_options(self, options: Tuple[Option, ...]) -> None: ...

    def show_state(self, state: StateView) -> None: ...


class BufferedSink:
    """Keeps everything in memory so a client can poll it."""

    def __init__(self) -> None:
        self.log: List[LogEntry] = []
        self.options: Tuple[Option, ...] = ()
        self.state: Optional[Dict[str, Any]] = None

    def add_text(self, entry: LogEntry) -> None:
        self.log.append(entry)

    def set_options(self, options: Tuple[Option, ...]) -> None:
        self.options = options

    def show_state(self, state: StateView) -> None:
        self.state = state.to_dict()

    def snapshot(self, since: int = 0) -> Dict[str, Any]:
        since = max(0, since)
        return {
            "state": self.state,
            "options": options_to_list(self.options),
            "log": [entry.to_dict() for entry in self.log[since:]],
            "cursor": len(self.log),
        }


class PresentationAdapter:
    """Forwards runtime output to the sink and remembers the option panel."""

    def __init__(self, sink: PresentationSink, fill_text: Callable[[str], str]):
        self._sink = sink
        self._fill_text = fill_text
        self.options: Tuple[Option, ...] = ()
        self.options_revision = 0

    def add_text(self, text: str, *types: str) -> None:
        """向对话框添加文本，未指定类型时为 normal"""
        names = tuple(t.value if isinstance(t, TextType) else str(t) for t in types)
        self._sink.add_text(LogEntry(text=text, types=names or (TextType.NORMAL.value,)))

    def set_options(self, options: Iterable[Option]) -> None:
        """清空选项栏并设置新的选项（文本中的占位符会被替换）"""
        filled = tuple(dataclasses.replace(option, text=self._fill_text(option.text)) for option in options)
        self.options = filled
        self.options_revision += 1
        logger.debug("options set (%d)", len(filled))
        self._sink.set_options(filled)

    def show_state(self, state: StateView) -> None:
        self._sink.show_state(state)
