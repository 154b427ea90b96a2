"""Exception types raised by the slide layout engine."""


class SlideLayoutError(Exception):
    """Base class for all slidelayout errors."""


class UnknownArchetypeError(SlideLayoutError, ValueError):
    """Raised by strict strategy lookup for an unregistered archetype."""


class MalformedContentError(SlideLayoutError):
    """Raised by a layout strategy for content it cannot place."""


class ThemeNotFoundError(SlideLayoutError, KeyError):
    """Raised by strict theme lookup for an unknown theme id."""


class MeasurementError(SlideLayoutError):
    """Raised when a text measurement provider cannot be created."""
