"""Exception types raised by the raytracer.

Every failure path raises one of these instead of producing a sentinel
color or a NaN-valued ray. They also subclass the closest builtin so that
callers catching ``ValueError`` or ``RuntimeError`` keep working.
"""


class RaytracerError(Exception):
    """Base class for all raytracer errors."""


class ConfigurationError(RaytracerError, ValueError):
    """A camera, primitive or render setting cannot produce valid rays.

    Raised before ray generation begins, e.g. for a look direction parallel
    to the world up vector or a non-positive sensor size.
    """


class InvalidRayError(RaytracerError, ValueError):
    """A ray with a zero-length direction reached the intersection engine."""


class InitializationError(RaytracerError, RuntimeError):
    """A presenter could not acquire its display resources."""
