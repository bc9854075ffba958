"""The `Game` contract that scripted actions are written against."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Protocol, Union

if TYPE_CHECKING:
    from .models import Event, Option, StateView, StatusKey


class Game(Protocol):
    """游戏的操控

    Actions receive an object satisfying this protocol. State is read through
    ``state`` and changed only through the methods below.
    """

    @property
    def state(self) -> StateView: ...

    def fill_text(self, raw: str) -> str: ...

    def add_text(self, text: str, *types: str) -> None: ...

    def set_options(self, options: Iterable[Option]) -> None: ...

    def mutate(self, key: Union[str, StatusKey], delta: int, reason: str | None = None) -> None: ...

    def go_to_site(self, site_id: str, instantly: bool = False) -> None: ...

    def trigger_event(self, event: Union[str, Event]) -> None: ...

    def show_state(self, state: bool = True, options: bool = True) -> None: ...

    def dispatch(self, action: Any) -> None: ...
