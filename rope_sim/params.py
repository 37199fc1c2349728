# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Physical constants shared by every segment of a rope

from dataclasses import dataclass


@dataclass(frozen=True)
class SegmentParams:
    """
    Physical parameters of a rope segment.

    All values are per sub-step (one tick is one unit of time), in pixels.
    Defaults give the soft, lagging rope of the interactive demo.

    Attributes:
        mass: Point mass of each segment
        stiffness: Spring coefficient applied to the dampened pull
        damping: Fraction of the relative spring-axis velocity added to the pull
        rest_length: Separation at which the spring exerts no force
        static_friction: Force removed per tick while a segment is at rest
        kinetic_friction: Velocity loss (scaled by 1/mass) per tick while moving
        speed_cap: Maximum speed after integration
        force_cap: Maximum accumulated force integrated in one tick
    """

    mass: float = 0.5
    stiffness: float = 0.5
    damping: float = 0.015
    rest_length: float = 20.0
    static_friction: float = 0.0016
    kinetic_friction: float = 0.0008
    speed_cap: float = 100.0
    force_cap: float = 50.0

    def __post_init__(self):
        for name in ("mass", "rest_length", "speed_cap", "force_cap"):
            if getattr(self, name) <= 0.0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        for name in ("stiffness", "damping", "static_friction", "kinetic_friction"):
            if getattr(self, name) < 0.0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")


DEFAULT_PARAMS = SegmentParams()
