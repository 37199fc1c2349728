# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Rope: chain of spring-coupled segments dragged by a cursor

from typing import Iterator, Optional, Tuple

import numpy as np

from .params import SegmentParams
from .segment import Segment
from .state import RopeState
from .vec2 import ZERO_THRESHOLD, Vec2


class Rope:
    """
    Chain of point masses connected by damped springs.

    The head segment is tied to the cursor by a weak undamped spring; every
    other segment only feels its immediate neighbours. The segment count is
    fixed at construction.

    Example:
        >>> rope = Rope(40, Vec2(300.0, 300.0))
        >>> rope.pull(12, -4)      # relative mouse motion
        >>> rope.step(15)          # one rendered frame
        >>> state = rope.state()   # numpy snapshot

    Attributes:
        cursor: Target point the head is dragged toward
        segments: Segments, head first
    """

    # Coefficient of the cursor-to-head spring
    CURSOR_PULL = 0.0005

    def __init__(
        self,
        segment_count: int,
        position: Vec2,
        params: Optional[SegmentParams] = None,
    ):
        """
        Create a rope with every segment stacked at ``position``.

        Args:
            segment_count: Number of segments (>= 1)
            position: Starting position of all segments and of the cursor
            params: Physical constants (defaults to SegmentParams())
        """
        if segment_count < 1:
            raise ValueError(f"segment_count must be at least 1, got {segment_count}")

        self.params = params or SegmentParams()
        self.cursor = position
        self.segments: Tuple[Segment, ...] = tuple(
            Segment(position, self.params) for _ in range(segment_count)
        )

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    @property
    def head(self) -> Segment:
        return self.segments[0]

    @property
    def tail(self) -> Segment:
        return self.segments[-1]

    # ========================================================================
    # INPUT
    # ========================================================================

    def pull(self, dx: float, dy: float):
        """Move the cursor by a relative offset (accumulates across events)."""
        self.cursor = self.cursor + Vec2(float(dx), float(dy))

    # ========================================================================
    # SIMULATION
    # ========================================================================

    def tick(self):
        """
        Advance the rope by one sub-step.

        1. Pull the head toward the cursor.
        2. Exchange spring forces between neighbours, each pair once per
           direction, walking the chain from head to tail.
        3. Integrate every segment.
        """
        segments = self.segments
        last = len(segments) - 1

        diff = self.cursor - segments[0].position
        if diff.length() > ZERO_THRESHOLD:
            segments[0].pull(diff * self.CURSOR_PULL)

        for i, segment in enumerate(segments):
            if i != 0:
                segment.apply_force_to_linked_segment(segments[i - 1])
            if i != last:
                segment.apply_force_to_linked_segment(segments[i + 1])

        for segment in segments:
            segment.tick()

    def step(self, substeps: int = 15):
        """Run ``substeps`` ticks (one rendered frame)."""
        for _ in range(substeps):
            self.tick()

    def reset(self, position: Optional[Vec2] = None):
        """
        Stack every segment at ``position`` at rest and move the cursor there.

        Args:
            position: New anchor (default: current head position)
        """
        if position is None:
            position = self.head.position
        self.cursor = position
        for segment in self.segments:
            segment.reset(position)

    # ========================================================================
    # INSPECTION
    # ========================================================================

    def state(self) -> RopeState:
        """Copy positions, velocities and the cursor into numpy arrays."""
        return RopeState(
            positions=np.array([s.position.as_tuple() for s in self.segments], dtype=np.float64),
            velocities=np.array([s.velocity.as_tuple() for s in self.segments], dtype=np.float64),
            cursor=np.array(self.cursor.as_tuple(), dtype=np.float64),
        )

    def kinetic_energy(self) -> float:
        return sum(s.kinetic_energy() for s in self.segments)

    def length(self) -> float:
        """Polyline length from head to tail."""
        return sum(
            (b.position - a.position).length()
            for a, b in zip(self.segments, self.segments[1:])
        )

    # ========================================================================
    # RENDERING
    # ========================================================================

    def draw(self, canvas, renderer=None):
        """
        Draw the rope ribbon, its joints and the cursor marker.

        Args:
            canvas: pygame Surface to draw on
            renderer: pygame_renderer.Renderer (default renderer if None)
        """
        if renderer is None:
            from pygame_renderer import Renderer
            renderer = Renderer()
        renderer.draw_rope(canvas, self)
