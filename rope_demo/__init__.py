"""
Rope Demo: interactive driver for the rope simulation.

Architecture:
- DemoConfig: dataclass configuration (rope, physics, display)
- RopeDemo: event -> sub-step -> render loop on pygame
- main(): command-line entry point (also runs headless traces)

Author: NBEL
License: Apache-2.0
"""

from .demo import DemoConfig, RopeDemo, main, run_trace

__all__ = [
    'DemoConfig',
    'RopeDemo',
    'main',
    'run_trace',
]
