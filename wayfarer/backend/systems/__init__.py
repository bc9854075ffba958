"""Runtime systems for the adventure game."""

from .action_dispatcher import ActionDispatcher, ActionRegistry
from .event_selector import EventSelector, select_weighted
from .navigator import (
    CostPolicy,
    Navigator,
    TravelCost,
    build_cost_policy,
    distance_cost_policy,
    flat_cost_policy,
)
from .presentation import BufferedSink, PresentationAdapter, PresentationSink
from .state_store import Mutation, StateStore
from .text_templater import TextTemplater

__all__ = [
    "ActionDispatcher",
    "ActionRegistry",
    "EventSelector",
    "select_weighted",
    "CostPolicy",
    "Navigator",
    "TravelCost",
    "build_cost_policy",
    "distance_cost_policy",
    "flat_cost_policy",
    "BufferedSink",
    "PresentationAdapter",
    "PresentationSink",
    "Mutation",
    "StateStore",
    "TextTemplater",
]
