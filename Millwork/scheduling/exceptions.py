"""Errors raised by the scheduling engine.

``ConfigurationError`` covers broken stage/lead-time/calendar setup and is
meant for the operator.  ``InvalidInput`` is raised for caller mistakes such
as a malformed date or an unknown stage id.  A stage that cannot be
scheduled is never an error: it is simply absent from the result.
"""

from __future__ import annotations


class SchedulingError(Exception):
    """Base class for every error raised by the scheduling engine."""


class ConfigurationError(SchedulingError):
    """Pipeline, lead-time or calendar configuration is inconsistent."""


class InvalidInput(SchedulingError, ValueError):
    """The caller supplied a value the engine cannot work with."""
