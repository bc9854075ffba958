"""Event system: weighted arrival selection and trigger by id."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, Union

from ..models.action import Action
from ..models.log import TextType
from ..models.script import Event, Site
from .presentation import PresentationAdapter

if TYPE_CHECKING:
    from ..script_source import ScriptSource

logger = logging.getLogger(__name__)


def select_weighted(events: Sequence[Event], rng: random.Random) -> Optional[Event]:
    """
    按权重选取一个事件

    Events with a positive weight compete in a single draw with probability
    ``weight / total``. When no weight is positive, the event fires only if it
    is the sole candidate; several zero-weight candidates fire nothing.
    """
    if not events:
        return None

    weighted: List[Event] = [event for event in events if event.weight > 0]
    if not weighted:
        return events[0] if len(events) == 1 else None
    if len(weighted) == 1:
        return weighted[0]
    return rng.choices(weighted, weights=[event.weight for event in weighted], k=1)[0]


class EventSelector:
    """事件系统 - 管理事件的选取与触发"""

    def __init__(
        self,
        source: ScriptSource,
        presentation: PresentationAdapter,
        fill_text: Callable[[str], str],
        dispatch: Callable[[Action], None],
        rng: Optional[random.Random] = None,
    ):
        self._source = source
        self._presentation = presentation
        self._fill_text = fill_text
        self._dispatch = dispatch
        self.rng = rng or random.Random()

    def resolve(self, event: Union[str, Event]) -> Event:
        if isinstance(event, Event):
            return event
        return self._source.get_event(event)

    def trigger_event(self, event: Union[str, Event]) -> None:
        """
        触发一个事件

        Args:
            event: 事件的ID（在顶层事件中查找）或者事件本身
        """
        resolved = self.resolve(event)
        logger.debug("trigger event %s", resolved.id)

        if resolved.is_narrative:
            if resolved.text is not None:
                self._presentation.add_text(self._fill_text(resolved.text), TextType.EVENT.value)
            if resolved.options is not None:
                self._presentation.set_options(resolved.options)
        elif resolved.action is not None:
            self._dispatch(resolved.action)
        else:
            logger.warning("event %s has neither text/options nor action", resolved.id)

    def arrive(self, site: Site) -> Optional[Event]:
        """进入地点后根据权重选取一个事件并触发"""
        event = select_weighted(site.events, self.rng)
        if event is None:
            logger.debug("no arrival event at %s", site.id)
            return None
        self.trigger_event(event)
        return event
