"""Errors raised by the adventure runtime.

Every error here points at a bug in the authored script, never at a transient
runtime fault, so none of them is retried or swallowed by the engine.
"""

from __future__ import annotations


class ScriptError(Exception):
    """Base class for script data integrity errors."""


class ScriptFormatError(ScriptError):
    """The script files are structurally malformed."""


class InvalidKeyError(ScriptError, KeyError):
    """`mutate` was called with a key outside the status key set."""

    def __init__(self, key: object):
        self.key = key
        super().__init__(f"unknown status key: {key!r}")

    def __str__(self) -> str:
        return self.args[0]


class UnknownSiteError(ScriptError, LookupError):
    """Navigation target does not exist."""

    def __init__(self, site_id: str):
        self.site_id = site_id
        super().__init__(f"unknown site: {site_id!r}")


class UnknownEventError(ScriptError, LookupError):
    """No top-level event has the requested id."""

    def __init__(self, event_id: str):
        self.event_id = event_id
        super().__init__(f"unknown event: {event_id!r}")


class UnknownActionError(ScriptError, LookupError):
    """A named action is missing from the registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown action: {name!r}")


class MissingEntrySiteError(ScriptError):
    """The script entry points at a site that does not exist."""

    def __init__(self, site_id: str):
        self.site_id = site_id
        super().__init__(f"entry site {site_id!r} is not defined")
