"""
Pygame Renderer for the Rope Simulation

Draws a rope in screen coordinates:
1. Segment joints as filled circles
2. Ribbon quads between neighbouring segments
3. Cursor marker
4. Optional debug overlay: per-segment velocity arrows and HUD text

Usage:
    from pygame_renderer import Renderer

    renderer = Renderer(draw_width=10)

    # In render loop:
    canvas = renderer.create_canvas()
    renderer.draw_rope(canvas, rope)
    renderer.draw_velocity_arrows(canvas, state.positions, state.velocities)
    renderer.draw_info_text(canvas, [("Energy: 1.2", renderer.BLACK)])
    window.blit(canvas, (0, 0))
    pygame.display.flip()
"""

import numpy as np
import pygame
from typing import List, Optional, Sequence, Tuple

from rope_sim.vec2 import ZERO_THRESHOLD, Vec2


class Renderer:
    """
    Pygame renderer for rope visualization.

    Positions are already in pixels; no world-to-screen scaling is applied.
    Drawing errors raised by pygame are not caught.
    """

    # ========================================================================
    # COLOR CONSTANTS
    # ========================================================================

    WHITE = (255, 255, 255)
    BLACK = (0, 0, 0)
    GREY = (128, 128, 128)

    ROPE_COLOR = WHITE
    CURSOR_COLOR = BLACK
    BACKGROUND = GREY

    # Velocity arrow colors (gradient endpoints)
    SPEED_LOW = (170, 170, 170)    # Grey (slow)
    SPEED_MID = (255, 255, 255)    # White
    SPEED_HIGH = (180, 120, 80)    # Brown (at speed cap)

    # ========================================================================
    # INITIALIZATION
    # ========================================================================

    def __init__(
        self,
        draw_width: float = 10.0,
        cursor_radius: int = 10,
        arrow_head_size: int = 6,
        arrow_line_width: int = 2,
        arrow_scale: float = 4.0,
        max_arrow_length: float = 60.0,
        font_size: int = 24,
        font_size_small: int = 18,
    ):
        """
        Initialize the renderer.

        Args:
            draw_width: Ribbon width; joints are drawn with radius draw_width / 2
            cursor_radius: Cursor marker radius
            arrow_head_size: Velocity arrow head size
            arrow_line_width: Velocity arrow line width
            arrow_scale: Pixels of arrow per unit of speed
            max_arrow_length: Maximum arrow length in pixels
            font_size: Main font size
            font_size_small: Small font size for HUD lines
        """
        self.draw_width = draw_width
        self.cursor_radius = cursor_radius
        self.arrow_head_size = arrow_head_size
        self.arrow_line_width = arrow_line_width
        self.arrow_scale = arrow_scale
        self.max_arrow_length = max_arrow_length

        # Fonts (initialized lazily)
        self._font = None
        self._font_small = None
        self._font_size = font_size
        self._font_size_small = font_size_small

    @property
    def font(self):
        """Lazy font initialization."""
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.Font(None, self._font_size)
        return self._font

    @property
    def font_small(self):
        """Lazy small font initialization."""
        if self._font_small is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font_small = pygame.font.Font(None, self._font_size_small)
        return self._font_small

    # ========================================================================
    # CANVAS CREATION
    # ========================================================================

    def create_canvas(self, size: Tuple[int, int], background_color=None) -> pygame.Surface:
        """
        Create a new canvas (pygame Surface) filled with the background color.

        Args:
            size: (width, height) in pixels
            background_color: RGB tuple or None for grey

        Returns:
            pygame.Surface
        """
        canvas = pygame.Surface(size)
        canvas.fill(background_color or self.BACKGROUND)
        return canvas

    # ========================================================================
    # ROPE RENDERING
    # ========================================================================

    def draw_rope(self, canvas: pygame.Surface, rope):
        """
        Draw joints, ribbon and cursor of a rope.

        Args:
            canvas: pygame Surface to draw on
            rope: rope_sim.Rope
        """
        positions = [segment.position for segment in rope.segments]
        self.draw_joints(canvas, positions)
        self.draw_ribbon(canvas, positions)
        self.draw_cursor(canvas, rope.cursor)

    def draw_joints(self, canvas: pygame.Surface, positions: Sequence[Vec2], color=None):
        """Draw one filled circle per segment, centres truncated to pixels."""
        color = color or self.ROPE_COLOR
        radius = int(self.draw_width / 2.0)
        for pos in positions:
            pygame.draw.circle(canvas, color, (int(pos.x), int(pos.y)), radius)

    def draw_ribbon(self, canvas: pygame.Surface, positions: Sequence[Vec2], color=None):
        """
        Draw a filled quad between each pair of neighbouring positions.

        Pairs closer than ZERO_THRESHOLD are skipped.

        Args:
            canvas: pygame Surface to draw on
            positions: Segment positions, head first
            color: Fill color (default: white)
        """
        color = color or self.ROPE_COLOR
        for p1, p2 in zip(positions, positions[1:]):
            quad = self.ribbon_quad(p1, p2, self.draw_width)
            if quad is None:
                continue
            pygame.draw.polygon(canvas, color, [(int(v.x), int(v.y)) for v in quad])

    @staticmethod
    def ribbon_quad(p1: Vec2, p2: Vec2, width: float) -> Optional[List[Vec2]]:
        """
        Corners of the ribbon quad joining ``p1`` and ``p2``.

        Args:
            p1: First segment position
            p2: Second segment position
            width: Ribbon width

        Returns:
            [p1 + n1, p1 - n1, p2 - n2, p2 + n2], or None for a degenerate pair
        """
        if (p2 - p1).length() < ZERO_THRESHOLD:
            return None
        half = width / 2.0
        n1 = (p2 - p1).normalized().rotated90(True) * half
        n2 = (p1 - p2).normalized().rotated90(False) * half
        return [p1 + n1, p1 - n1, p2 - n2, p2 + n2]

    def draw_cursor(self, canvas: pygame.Surface, cursor: Vec2, color=None):
        """Draw the cursor marker at the rounded cursor position."""
        color = color or self.CURSOR_COLOR
        center = (int(round(cursor.x)), int(round(cursor.y)))
        pygame.draw.circle(canvas, color, center, self.cursor_radius)

    # ========================================================================
    # VELOCITY ARROW RENDERING
    # ========================================================================

    def draw_velocity_arrows(
        self,
        canvas: pygame.Surface,
        positions: np.ndarray,
        velocities: np.ndarray,
        speed_cap: float = 100.0,
        min_speed: float = 0.05,
    ):
        """
        Draw velocity arrows from segment positions with speed-based coloring.

        Uses gradient: Grey (slow) -> White (medium) -> Brown (at speed cap)

        Args:
            canvas: pygame Surface to draw on
            positions: Array of shape (N, 2) with segment positions
            velocities: Array of shape (N, 2) with segment velocities
            speed_cap: Speed mapped to the end of the color gradient
            min_speed: Minimum speed to draw
        """
        if positions is None or velocities is None or len(positions) == 0:
            return

        speeds = np.linalg.norm(velocities, axis=1)

        for i in range(len(positions)):
            speed = speeds[i]
            if speed < min_speed or not np.isfinite(speed):
                continue

            direction = velocities[i] / speed
            arrow_length = min(self.max_arrow_length, speed * self.arrow_scale)
            arrow_color = self._get_speed_color(speed, speed_cap)

            start = (int(positions[i][0]), int(positions[i][1]))
            end = (int(positions[i][0] + direction[0] * arrow_length),
                   int(positions[i][1] + direction[1] * arrow_length))

            pygame.draw.line(canvas, arrow_color, start, end, self.arrow_line_width)

            if arrow_length > 8:
                self._draw_arrowhead(canvas, start, end, arrow_color)

    def _draw_arrowhead(
        self,
        canvas: pygame.Surface,
        start: Tuple[int, int],
        end: Tuple[int, int],
        color: Tuple[int, int, int],
        size: Optional[int] = None,
    ):
        """
        Draw arrow head at end position.

        Args:
            canvas: pygame Surface to draw on
            start: Arrow start position
            end: Arrow end position
            color: Arrow color
            size: Head size (default: self.arrow_head_size)
        """
        dx = end[0] - start[0]
        dy = end[1] - start[1]
        length = np.sqrt(dx**2 + dy**2)

        if length < 1:
            return

        dx, dy = dx / length, dy / length

        # Perpendicular
        px, py = -dy, dx

        head_size = size if size else self.arrow_head_size
        p1 = (int(end[0] - dx * head_size + px * head_size * 0.5),
              int(end[1] - dy * head_size + py * head_size * 0.5))
        p2 = (int(end[0] - dx * head_size - px * head_size * 0.5),
              int(end[1] - dy * head_size - py * head_size * 0.5))

        pygame.draw.polygon(canvas, color, [end, p1, p2])

    def _get_speed_color(self, speed: float, speed_cap: float = 100.0) -> Tuple[int, int, int]:
        """
        Get arrow color for a speed.

        Gradient: Grey (slow) -> White (half cap) -> Brown (cap)

        Args:
            speed: Segment speed
            speed_cap: Speed at the end of the gradient

        Returns:
            RGB color tuple
        """
        t = min(abs(speed) / speed_cap, 1.0)

        if t < 0.5:
            lo, hi, t2 = self.SPEED_LOW, self.SPEED_MID, t * 2
        else:
            lo, hi, t2 = self.SPEED_MID, self.SPEED_HIGH, (t - 0.5) * 2

        return tuple(int(a + (b - a) * t2) for a, b in zip(lo, hi))

    # ========================================================================
    # TEXT
    # ========================================================================

    def draw_info_text(
        self,
        canvas: pygame.Surface,
        lines: List[Tuple[str, Tuple[int, int, int]]],
        position: Tuple[int, int] = (10, 10),
        line_spacing: int = 17,
    ):
        """
        Draw multiple lines of info text.

        Args:
            canvas: pygame Surface to draw on
            lines: List of (text, color) tuples
            position: Top-left position
            line_spacing: Vertical spacing between lines
        """
        x, y = position

        for i, (text, color) in enumerate(lines):
            text_surface = self.font_small.render(text, True, color)
            canvas.blit(text_surface, (x, y + i * line_spacing))
