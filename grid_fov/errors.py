"""
Exceptions raised by the field-of-view API.
"""


class FovError(ValueError):
    """Base class for invalid field-of-view requests."""


class InvalidOctant(FovError):
    def __init__(self, octant) -> None:
        super().__init__(f"octant must be an integer in [0, 7], got {octant!r}")
        self.octant = octant


class DegenerateRadius(FovError):
    def __init__(self, radius) -> None:
        super().__init__(f"radius must be >= 0, got {radius!r}")
        self.radius = radius


class RayCapacityExceeded(FovError):
    """A column produced more rays than the caller allowed."""

    def __init__(self, capacity: int) -> None:
        super().__init__(f"ray list grew beyond max_rays={capacity}")
        self.capacity = capacity
