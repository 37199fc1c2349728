# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# 2D vector value type for the rope simulation

from dataclasses import dataclass
from math import hypot, isfinite
from typing import Iterable, Iterator, Tuple

# Magnitudes below this are treated as zero (rest detection, degenerate springs)
ZERO_THRESHOLD = 1e-5


@dataclass(frozen=True)
class Vec2:
    """
    Immutable 2D vector in screen units (pixels).

    Every operator returns a new vector; operands are never mutated.

    Attributes:
        x: Horizontal component
        y: Vertical component (screen space, grows downward)
    """

    x: float = 0.0
    y: float = 0.0

    # ========================================================================
    # OPERATORS
    # ========================================================================

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vec2":
        return Vec2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> "Vec2":
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> "Vec2":
        return Vec2(self.x / scalar, self.y / scalar)

    def __neg__(self) -> "Vec2":
        return Vec2(-self.x, -self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    # ========================================================================
    # MAGNITUDE
    # ========================================================================

    def length(self) -> float:
        return hypot(self.x, self.y)

    def normalized(self) -> "Vec2":
        """Unit vector in the same direction. Callers must rule out near-zero length."""
        return self / self.length()

    def length_sub(self, amount: float) -> "Vec2":
        """
        Shrink the magnitude by ``amount`` without reversing direction.

        Returns the zero vector when the vector is shorter than ``amount``
        or shorter than ZERO_THRESHOLD, so a near-zero vector is never
        normalized.

        Args:
            amount: Magnitude to remove

        Returns:
            Shortened vector, or Vec2.ZERO
        """
        length = self.length()
        if length < amount or length < ZERO_THRESHOLD:
            return Vec2.ZERO
        return self - self.normalized() * amount

    def length_clamped(self, amount: float) -> "Vec2":
        """
        Cap the magnitude at ``amount``, keeping direction.

        Args:
            amount: Maximum magnitude (positive)

        Returns:
            ``self`` if already shorter than ``amount``, else the rescaled vector
        """
        if self.length() < amount:
            return self
        return self.normalized() * amount

    # ========================================================================
    # PRODUCTS
    # ========================================================================

    def dot(self, other: "Vec2") -> float:
        return self.x * other.x + self.y * other.y

    def project_onto(self, other: "Vec2") -> "Vec2":
        """Vector projection of self onto ``other`` (``other`` must be non-zero)."""
        return other.normalized() * (self.dot(other) / other.length())

    def rotated90(self, clockwise: bool) -> "Vec2":
        """
        Rotate by 90 degrees with quadrant-corrected handedness.

        The swap direction flips when exactly one component is negative, so
        that perpendiculars taken from opposite ends of a ribbon segment
        (``d.rotated90(True)`` and ``(-d).rotated90(False)``) agree.

        Args:
            clockwise: Requested handedness

        Returns:
            Either (-y, x) or (y, -x)
        """
        invert = (self.x < 0.0) != (self.y < 0.0)
        if invert != clockwise:
            return Vec2(-self.y, self.x)
        return Vec2(self.y, -self.x)

    # ========================================================================
    # CONVERSION
    # ========================================================================

    def is_finite(self) -> bool:
        return isfinite(self.x) and isfinite(self.y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @classmethod
    def from_iterable(cls, values: Iterable[float]) -> "Vec2":
        """Build a vector from any 2-element iterable (tuple, list, numpy array)."""
        x, y = values
        return cls(float(x), float(y))


Vec2.ZERO = Vec2(0.0, 0.0)
