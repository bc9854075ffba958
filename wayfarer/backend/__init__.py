"""Adventure runtime backend."""

from .errors import (
    InvalidKeyError,
    MissingEntrySiteError,
    ScriptError,
    ScriptFormatError,
    UnknownActionError,
    UnknownEventError,
    UnknownSiteError,
)
from .runtime import GameRuntime, create_game
from .script_source import ScriptSource

__all__ = [
    "InvalidKeyError",
    "MissingEntrySiteError",
    "ScriptError",
    "ScriptFormatError",
    "UnknownActionError",
    "UnknownEventError",
    "UnknownSiteError",
    "GameRuntime",
    "create_game",
    "ScriptSource",
]
