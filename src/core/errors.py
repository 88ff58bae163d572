"""
Error types for the Colony Battle Simulator.

ValidationError covers bad user input (occupied coordinates, unknown IDs,
unknown resource or chamber kinds). It is raised before any state changes
and is meant to be shown to the user.

InvariantViolation means the simulation state itself is broken and is
never recovered from.
"""

from __future__ import annotations


class ValidationError(ValueError):
    """A request was rejected; no simulation state was changed."""


class InvariantViolation(RuntimeError):
    """The registry or a colony reached a state that should be impossible."""
