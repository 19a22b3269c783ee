"""Exceptions and warnings raised while building track geometry."""


class Track3DError(Exception):
    """Base class for track geometry errors."""


class EmptyTrackError(Track3DError, ValueError):
    """The track has no points, so no geometry can be built."""

    def __init__(self, message: str = "Track contains no points"):
        super().__init__(message)


class InvalidTrackPointError(Track3DError, ValueError):
    """A track point has a non-finite latitude, longitude or elevation."""

    def __init__(self, index: int, field: str, value: float):
        self.index = index
        self.field = field
        self.value = value
        super().__init__(f"Track point {index} has invalid {field}: {value!r}")


class DegenerateBoundsWarning(UserWarning):
    """All points share the same latitude, longitude or elevation.

    Not fatal: grade and color computations substitute zero instead of
    dividing by a zero range.
    """
