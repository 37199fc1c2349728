"""Tests for the rope Renderer, drawing onto off-screen surfaces."""

import numpy as np
import pygame
import pytest

from pygame_renderer import Renderer
from rope_sim import Rope, Vec2


@pytest.fixture
def renderer():
    return Renderer(draw_width=10)


@pytest.fixture
def canvas(renderer):
    return renderer.create_canvas((200, 200))


def color_at(canvas, x, y):
    return tuple(canvas.get_at((x, y)))[:3]


# =============================================================================
# Geometry
# =============================================================================

def test_ribbon_quad_diagonal(renderer):
    quad = renderer.ribbon_quad(Vec2(0.0, 0.0), Vec2(30.0, 40.0), 10.0)
    expected = [(-4.0, 3.0), (4.0, -3.0), (34.0, 37.0), (26.0, 43.0)]
    for corner, (x, y) in zip(quad, expected):
        assert corner.x == pytest.approx(x)
        assert corner.y == pytest.approx(y)


def test_ribbon_quad_width(renderer):
    p1, p2 = Vec2(10.0, 50.0), Vec2(-15.0, 20.0)
    quad = renderer.ribbon_quad(p1, p2, 8.0)
    assert (quad[0] - quad[1]).length() == pytest.approx(8.0)
    assert (quad[3] - quad[2]).length() == pytest.approx(8.0)
    # Both ends use the same perpendicular, so the quad is not twisted
    assert (quad[0] - p1).x == pytest.approx((quad[3] - p2).x)
    assert (quad[0] - p1).y == pytest.approx((quad[3] - p2).y)


def test_ribbon_quad_degenerate(renderer):
    assert renderer.ribbon_quad(Vec2(5.0, 5.0), Vec2(5.0, 5.0), 10.0) is None


# =============================================================================
# Drawing
# =============================================================================

def test_create_canvas_background(renderer, canvas):
    assert canvas.get_size() == (200, 200)
    assert color_at(canvas, 0, 0) == Renderer.BACKGROUND


def test_draw_rope(renderer, canvas):
    rope = Rope(2, Vec2(50.0, 50.0))
    rope.segments[1].position = Vec2(80.0, 90.0)
    rope.cursor = Vec2(150.0, 150.0)

    renderer.draw_rope(canvas, rope)

    assert color_at(canvas, 50, 50) == Renderer.ROPE_COLOR
    assert color_at(canvas, 80, 90) == Renderer.ROPE_COLOR
    assert color_at(canvas, 65, 70) == Renderer.ROPE_COLOR   # ribbon
    assert color_at(canvas, 150, 150) == Renderer.CURSOR_COLOR
    assert color_at(canvas, 10, 190) == Renderer.BACKGROUND


def test_rope_draw_delegates_to_renderer(renderer, canvas):
    rope = Rope(3, Vec2(100.0, 100.0))
    rope.draw(canvas, renderer)
    # Cursor sits on the stacked segments and is drawn last
    assert color_at(canvas, 100, 100) == Renderer.CURSOR_COLOR


def test_draw_stacked_segments_skips_ribbon(renderer, canvas):
    rope = Rope(4, Vec2(20.0, 20.0))
    rope.cursor = Vec2(180.0, 180.0)
    renderer.draw_rope(canvas, rope)
    assert color_at(canvas, 20, 20) == Renderer.ROPE_COLOR


def test_draw_velocity_arrows(renderer, canvas):
    positions = np.array([[100.0, 100.0], [50.0, 150.0]])
    velocities = np.array([[10.0, 0.0], [0.0, 0.0]])
    renderer.draw_velocity_arrows(canvas, positions, velocities)

    assert color_at(canvas, 120, 100) != Renderer.BACKGROUND
    assert color_at(canvas, 50, 140) == Renderer.BACKGROUND


def test_draw_velocity_arrows_skips_non_finite(renderer, canvas):
    positions = np.array([[100.0, 100.0]])
    velocities = np.array([[np.nan, 1.0]])
    renderer.draw_velocity_arrows(canvas, positions, velocities)
    assert color_at(canvas, 100, 100) == Renderer.BACKGROUND


def test_speed_color_gradient(renderer):
    assert renderer._get_speed_color(0.0) == Renderer.SPEED_LOW
    assert renderer._get_speed_color(50.0) == Renderer.SPEED_MID
    assert renderer._get_speed_color(100.0) == Renderer.SPEED_HIGH
    assert renderer._get_speed_color(1e6) == Renderer.SPEED_HIGH


def test_draw_info_text(renderer, canvas):
    before = pygame.surfarray.array3d(canvas).copy()
    renderer.draw_info_text(canvas, [("Kinetic energy: 1.0", Renderer.BLACK)])
    after = pygame.surfarray.array3d(canvas)
    assert not np.array_equal(before, after)
