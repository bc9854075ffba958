"""Data models for the adventure runtime."""

from .action import (
    Action,
    DirectAction,
    Effect,
    NamedAction,
    Option,
    ScriptedAction,
    parse_action,
)
from .log import LogEntry, TextType
from .script import Entry, Event, Port, ScriptData, Site
from .state import State, StateView, StatusKey

__all__ = [
    # Action
    "Action",
    "DirectAction",
    "Effect",
    "NamedAction",
    "Option",
    "ScriptedAction",
    "parse_action",
    # Log
    "LogEntry",
    "TextType",
    # Script
    "Entry",
    "Event",
    "Port",
    "ScriptData",
    "Site",
    # State
    "State",
    "StateView",
    "StatusKey",
]
