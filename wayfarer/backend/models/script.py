"""Script data models (loaded from YAML, immutable afterwards)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from ..errors import ScriptFormatError
from .action import Action, Option, parse_action


@dataclass(frozen=True)
class Port:
    """单个通路，通向其它地点"""
    target: Optional[str] = None
    name: Optional[str] = None
    action: Optional[Action] = None
    distance: int = 1    # 仅用于按距离计费的旅行策略

    def __post_init__(self) -> None:
        if self.target is None and self.action is None:
            raise ScriptFormatError("port needs a target or an action")
        if self.distance < 1:
            raise ScriptFormatError(f"port distance must be positive, got {self.distance}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Port:
        """从字典创建 Port"""
        action = data.get("action")
        return cls(
            target=data.get("target"),
            name=data.get("name"),
            action=parse_action(action) if action is not None else None,
            distance=int(data.get("distance", 1)),
        )


@dataclass(frozen=True)
class Event:
    """单个事件

    Either ``text``/``options`` (narrative) or ``action`` (imperative) is used.
    """
    id: str
    weight: float = 0
    text: Optional[str] = None
    options: Optional[Tuple[Option, ...]] = None
    action: Optional[Action] = None

    @property
    def is_narrative(self) -> bool:
        return self.text is not None or self.options is not None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Event:
        """从字典创建 Event"""
        if not isinstance(data, dict) or not data.get("id"):
            raise ScriptFormatError(f"event needs an id: {data!r}")

        options = data.get("options")
        action = data.get("action")
        return cls(
            id=str(data["id"]),
            weight=_parse_weight(data),
            text=data.get("text"),
            options=tuple(Option.from_dict(item) for item in options) if options is not None else None,
            action=parse_action(action) if action is not None else None,
        )


@dataclass(frozen=True)
class Site:
    """单个地点"""
    id: str
    name: str
    ports: Tuple[Port, ...] = ()
    events: Tuple[Event, ...] = ()

    def port_to(self, site_id: str) -> Optional[Port]:
        """First port whose target is ``site_id``."""
        for port in self.ports:
            if port.target == site_id:
                return port
        return None

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        shared_events: Optional[Mapping[str, Event]] = None,
    ) -> Site:
        """从字典创建 Site

        Args:
            data: 地点的原始数据
            shared_events: 顶层事件，地点的事件列表可以按 ID 引用它们
        """
        if not isinstance(data, dict) or not data.get("id"):
            raise ScriptFormatError(f"site needs an id: {data!r}")
        site_id = str(data["id"])
        shared_events = shared_events or {}

        events = []
        for idx, item in enumerate(data.get("events") or []):
            if isinstance(item, str):
                if item not in shared_events:
                    raise ScriptFormatError(f"site {site_id!r} references unknown event {item!r}")
                events.append(shared_events[item])
            else:
                if isinstance(item, dict) and "id" not in item:
                    item = {**item, "id": f"{site_id}_event_{idx}"}
                events.append(Event.from_dict(item))

        return cls(
            id=site_id,
            name=str(data.get("name", site_id)),
            ports=tuple(Port.from_dict(port) for port in data.get("ports") or []),
            events=tuple(events),
        )


@dataclass(frozen=True)
class Entry:
    """游戏入口"""
    site: str
    story: str = ""


@dataclass(frozen=True)
class ScriptData:
    """游戏数据，也就是脚本"""
    sites: Tuple[Site, ...]
    events: Tuple[Event, ...]
    entry: Entry
    _site_index: Dict[str, Site] = field(default_factory=dict, repr=False, compare=False)
    _event_index: Dict[str, Event] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._site_index.update(_index(self.sites, "site"))
        self._event_index.update(_index(self.events, "event"))

    def find_site(self, site_id: str) -> Optional[Site]:
        return self._site_index.get(site_id)

    def find_event(self, event_id: str) -> Optional[Event]:
        return self._event_index.get(event_id)

    @classmethod
    def build(
        cls,
        sites: Iterable[Union[Site, Dict[str, Any]]],
        events: Iterable[Union[Event, Dict[str, Any]]] = (),
        entry: Union[Entry, Dict[str, Any], None] = None,
    ) -> ScriptData:
        """Build script data from raw mappings and/or model objects."""
        event_list = tuple(e if isinstance(e, Event) else Event.from_dict(e) for e in events)
        shared = _index(event_list, "event")
        site_list = tuple(s if isinstance(s, Site) else Site.from_dict(s, shared) for s in sites)

        if entry is None:
            raise ScriptFormatError("script has no entry")
        if not isinstance(entry, Entry):
            if not entry.get("site"):
                raise ScriptFormatError("entry needs a site")
            entry = Entry(site=str(entry["site"]), story=str(entry.get("story", "")))
        return cls(sites=site_list, events=event_list, entry=entry)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ScriptData:
        """从字典创建 ScriptData"""
        return cls.build(
            sites=data.get("sites") or [],
            events=data.get("events") or [],
            entry=data.get("entry"),
        )


def _index(items: Iterable[Any], kind: str) -> Dict[str, Any]:
    index: Dict[str, Any] = {}
    for item in items:
        if item.id in index:
            raise ScriptFormatError(f"duplicate {kind} id: {item.id!r}")
        index[item.id] = item
    return index


def _parse_weight(data: Dict[str, Any]) -> float:
    raw = data.get("weight")
    if raw is None:
        return 0
    if isinstance(raw, bool):
        raise ScriptFormatError(f"event {data['id']!r} has a non-numeric weight: {raw!r}")
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise ScriptFormatError(f"event {data['id']!r} has a non-numeric weight: {raw!r}") from None
