# core/ray.py
from pathtrace.core.vector import Vector3

class Ray:
    """
    Represents a ray in 3D space with an origin, a direction and the moment
    in time at which it was cast (used for motion blur).
    """
    __slots__ = ("_origin", "_direction", "_time")

    def __init__(self, origin: Vector3, direction: Vector3, time: float = 0.0):
        self._origin = origin
        self._direction = direction
        self._time = time

    @property
    def origin(self) -> Vector3:
        return self._origin

    @property
    def direction(self) -> Vector3:
        return self._direction

    @property
    def time(self) -> float:
        return self._time

    def at(self, t: float) -> Vector3:
        """
        Returns the point along the ray at parameter t.
        """
        return self._origin + self._direction * t

    def __reduce__(self):
        return (Ray, (self._origin, self._direction, self._time))

    def __repr__(self) -> str:
        return f"Ray({self._origin!r}, {self._direction!r}, time={self._time})"
