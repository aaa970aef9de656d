"""Exceptions raised while assembling acceleration models.

All errors are fatal for an assembly run: the first one raised aborts
:func:`~astroaccel.accelerations.assembly.create_acceleration_models` and no
acceleration map is returned.

- :class:`ConfigurationError`: the requested settings cannot be honoured
  (unknown acceleration type, inconsistent settings, unsupported
  aerodynamic/thrust ordering).
- :class:`MissingCapabilityError`: a body lacks an environment model that the
  requested acceleration needs.
- :class:`BodyNotFoundError`: a body name is absent from the registry.
- :class:`FrameMismatchError`: a rotation model and a gravity field disagree
  on the body-fixed frame.
"""

from __future__ import annotations


class AccelerationSetupError(Exception):
    """Base class for all acceleration assembly errors."""


class ConfigurationError(AccelerationSetupError, ValueError):
    """Acceleration settings are invalid or unsupported."""


class MissingCapabilityError(AccelerationSetupError):
    """A body lacks an environment model required by an acceleration.

    Args:
        message: Human-readable description.
        body_undergoing: Name of the body undergoing the acceleration.
        body_exerting: Name of the body exerting the acceleration.
        capability: Short name of the missing environment model
            (e.g. ``"gravity_field"``).
    """

    def __init__(
        self,
        message: str,
        body_undergoing: str | None = None,
        body_exerting: str | None = None,
        capability: str | None = None,
    ):
        super().__init__(message)
        self.body_undergoing = body_undergoing
        self.body_exerting = body_exerting
        self.capability = capability


class BodyNotFoundError(AccelerationSetupError, LookupError):
    """A referenced body name is not present in the body registry."""

    def __init__(self, message: str, body_name: str | None = None):
        super().__init__(message)
        self.body_name = body_name


class FrameMismatchError(AccelerationSetupError):
    """A rotation model's target frame differs from a gravity field's fixed frame."""
