"""
Pygame Renderer for the Rope Simulation.

This module provides the rendering used by rope_demo:
- Rope ribbon, joints and cursor marker
- Velocity arrows and HUD text for the debug overlay

Main classes:
- Renderer: pygame-based rendering class
"""

from .renderer import Renderer

__all__ = ['Renderer']
