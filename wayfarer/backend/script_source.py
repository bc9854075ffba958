"""Script source: immutable script data plus its action registry."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .errors import MissingEntrySiteError, UnknownEventError, UnknownSiteError
from .models.script import Event, ScriptData, Site
from .systems.action_dispatcher import ActionRegistry


@dataclass(frozen=True)
class ScriptSource:
    """Read-only after load; safe to share between sessions."""
    data: ScriptData
    registry: ActionRegistry = field(default_factory=ActionRegistry)

    def get_site(self, site_id: str) -> Site:
        site = self.data.find_site(site_id)
        if site is None:
            raise UnknownSiteError(site_id)
        return site

    def get_event(self, event_id: str) -> Event:
        event = self.data.find_event(event_id)
        if event is None:
            raise UnknownEventError(event_id)
        return event

    def check_entry(self) -> Site:
        """Return the entry site, raising MissingEntrySiteError if it is absent."""
        site = self.data.find_site(self.data.entry.site)
        if site is None:
            raise MissingEntrySiteError(self.data.entry.site)
        return site

    @classmethod
    def from_dict(cls, data: Dict[str, Any], registry: Optional[ActionRegistry] = None) -> ScriptSource:
        return cls(data=ScriptData.from_dict(data), registry=registry or ActionRegistry())
