"""Action and option data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Tuple, Union

from ..errors import ScriptFormatError

if TYPE_CHECKING:
    from ..contract import Game


ActionFunc = Callable[["Game"], None]

EFFECT_KINDS = ("text", "mutate", "go_to", "trigger", "call", "options", "show_state")


@dataclass(frozen=True)
class NamedAction:
    """按名称引用注册表中的行动"""
    name: str


@dataclass(frozen=True)
class DirectAction:
    """直接持有的可调用行动"""
    func: ActionFunc


@dataclass(frozen=True)
class Effect:
    """One step of a scripted action."""
    kind: str
    args: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Effect:
        if not isinstance(data, dict) or len(data) != 1:
            raise ScriptFormatError(f"effect must be a single-key mapping, got {data!r}")
        kind, value = next(iter(data.items()))
        if kind not in EFFECT_KINDS:
            raise ScriptFormatError(f"unknown effect kind: {kind!r}")

        if kind == "text":
            if isinstance(value, str):
                args = {"text": value, "types": ["normal"]}
            elif not isinstance(value, dict):
                raise ScriptFormatError(f"text effect takes a string or mapping, got {value!r}")
            else:
                types = value.get("types", ["normal"])
                if isinstance(types, str):
                    types = [types]
                elif not isinstance(types, list):
                    raise ScriptFormatError(f"text types must be a name or a list, got {types!r}")
                args = {"text": value.get("text", ""), "types": [str(t) for t in types]}
        elif kind == "mutate":
            if not isinstance(value, dict) or "key" not in value or "delta" not in value:
                raise ScriptFormatError(f"mutate effect needs key and delta: {value!r}")
            args = {"key": value["key"], "delta": int(value["delta"]), "reason": value.get("reason")}
        elif kind == "go_to":
            if isinstance(value, str):
                args = {"site": value, "instantly": False}
            elif not isinstance(value, dict) or "site" not in value:
                raise ScriptFormatError(f"go_to effect needs a site: {value!r}")
            else:
                args = {"site": value["site"], "instantly": bool(value.get("instantly", False))}
        elif kind in ("trigger", "call"):
            if not isinstance(value, str):
                raise ScriptFormatError(f"{kind} effect takes an id, got {value!r}")
            args = {"id": value}
        elif kind == "options":
            args = {"options": tuple(Option.from_dict(item) for item in value or [])}
        else:
            value = value or {}
            args = {"state": bool(value.get("state", True)), "options": bool(value.get("options", True))}
        return cls(kind=kind, args=args)


@dataclass(frozen=True)
class ScriptedAction:
    """在脚本中以效果列表描述的行动"""
    effects: Tuple[Effect, ...] = ()

    @classmethod
    def from_data(cls, data: Any) -> ScriptedAction:
        if isinstance(data, dict):
            data = data.get("effects", [])
        if not isinstance(data, list):
            raise ScriptFormatError(f"scripted action must list its effects, got {data!r}")
        return cls(effects=tuple(Effect.from_dict(item) for item in data))


Action = Union[NamedAction, DirectAction, ScriptedAction]


def parse_action(data: Any) -> Action:
    """Build an Action from script data or a Python value."""
    if isinstance(data, (NamedAction, DirectAction, ScriptedAction)):
        return data
    if isinstance(data, str):
        return NamedAction(data)
    if isinstance(data, (dict, list)):
        return ScriptedAction.from_data(data)
    if callable(data):
        return DirectAction(data)
    raise ScriptFormatError(f"cannot interpret {data!r} as an action")


@dataclass(frozen=True)
class Option:
    """单个选项：文本（占位符会被自动替换）与行动"""
    text: str
    action: Action

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Option:
        if not isinstance(data, dict) or "action" not in data:
            raise ScriptFormatError(f"option needs text and action: {data!r}")
        return cls(text=str(data.get("text", "")), action=parse_action(data["action"]))

    @classmethod
    def of(cls, text: str, action: Any) -> Option:
        """Convenience constructor accepting a name, callable or Action."""
        return cls(text=text, action=parse_action(action))


def options_to_list(options: Tuple[Option, ...]) -> List[Dict[str, Any]]:
    return [{"index": idx, "text": option.text} for idx, option in enumerate(options)]
