# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Point-mass rope segment with spring coupling and friction

from typing import Optional

from .params import DEFAULT_PARAMS, SegmentParams
from .vec2 import ZERO_THRESHOLD, Vec2


class Segment:
    """
    One point mass of a rope.

    Forces are accumulated with ``pull()`` during a sub-step and consumed by
    ``tick()``, which integrates velocity and position and clears the
    accumulator.

    Attributes:
        position: Current position (pixels)
        velocity: Displacement per tick
        force: Force accumulated for the current tick
        applied_force: Force actually integrated during the last tick,
            after static friction and the force cap
        params: Physical constants
    """

    def __init__(self, position: Vec2, params: Optional[SegmentParams] = None):
        self.params = params or DEFAULT_PARAMS
        self.position = position
        self.velocity = Vec2.ZERO
        self.force = Vec2.ZERO
        self.applied_force = Vec2.ZERO

    def __repr__(self):
        return (f"Segment(position={self.position.as_tuple()}, "
                f"velocity={self.velocity.as_tuple()})")

    def pull(self, force: Vec2):
        """Add an external force for the current tick."""
        self.force = self.force + force

    def apply_force_to_linked_segment(self, linked: "Segment"):
        """
        Apply the spring between ``self`` and ``linked`` onto ``linked``.

        Only the stretch beyond the rest length pulls. Damping acts along the
        spring axis: the relative velocity is projected onto the pull before
        it is scaled by the damping coefficient. ``self`` is not modified, so
        the reaction comes from the mirrored call made by the rope.

        Args:
            linked: Neighbouring segment receiving the force
        """
        p = self.params
        pull = (self.position - linked.position).length_sub(p.rest_length)
        if pull.length() < ZERO_THRESHOLD:
            return

        spring_speed = (self.velocity - linked.velocity).project_onto(pull)
        spring_damping = spring_speed * p.damping
        pull_dampened = pull + spring_damping
        linked.pull(pull_dampened * p.stiffness)

    def tick(self):
        """
        Integrate one sub-step.

        Static friction (on the force, while at rest) and kinetic friction
        (on the velocity, while moving) are mutually exclusive within a tick.
        """
        p = self.params

        friction_applied = False
        if self.velocity.length() < ZERO_THRESHOLD:
            self.velocity = Vec2.ZERO
            self.force = self.force.length_sub(p.static_friction)
            friction_applied = True

        self.force = self.force.length_clamped(p.force_cap)
        self.velocity = self.velocity + self.force / p.mass

        if not friction_applied:
            self.velocity = self.velocity.length_sub(p.kinetic_friction / p.mass)

        self.velocity = self.velocity.length_clamped(p.speed_cap)
        self.position = self.position + self.velocity

        self.applied_force = self.force
        self.force = Vec2.ZERO

    def reset(self, position: Vec2):
        """Place the segment at ``position`` at rest."""
        self.position = position
        self.velocity = Vec2.ZERO
        self.force = Vec2.ZERO
        self.applied_force = Vec2.ZERO

    def kinetic_energy(self) -> float:
        speed = self.velocity.length()
        return 0.5 * self.params.mass * speed * speed
