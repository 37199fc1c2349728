#!/usr/bin/env python3
"""
Interactive Rope Demo

Drag a spring-mass rope with the mouse. Mouse motion is read in relative
mode and moves the cursor; the rope head follows it through a soft spring.

Each rendered frame runs a fixed number of physics sub-steps, which keeps the
stiff segment springs stable while the frame rate stays at 60 Hz.

Usage:
    python -m rope_demo
    python -m rope_demo --segments 60 --windowed --window-width 1280 --window-height 720
    python -m rope_demo --trace 600 --output rope_trace.png   # headless

Controls:
    Mouse   drag the rope
    SPACE   pause / resume
    R       reset the rope at the start position
    H       toggle the debug overlay
    Q/ESC   quit

Author: NBEL
License: Apache-2.0
"""

import argparse
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import pygame

from pygame_renderer import Renderer
from rope_sim import Rope, SegmentParams, Vec2


@dataclass
class DemoConfig:
    """Configuration for the rope demo."""
    # Rope
    segment_count: int = 40
    start_x: float = 300.0
    start_y: float = 300.0

    # Physics
    substeps: int = 15
    mass: float = 0.5
    stiffness: float = 0.5
    damping: float = 0.015
    rest_length: float = 20.0

    # Display
    fps: int = 60
    fullscreen: bool = True
    window_width: int = 0     # 0 x 0 = desktop size
    window_height: int = 0
    draw_width: float = 10.0
    relative_mouse: bool = True
    show_hud: bool = False

    # Simulation
    duration: float = 0.0     # seconds, 0 = until quit
    verbose: bool = False

    def __post_init__(self):
        if self.segment_count < 1:
            raise ValueError(f"segment_count must be at least 1, got {self.segment_count}")
        if self.substeps < 1:
            raise ValueError(f"substeps must be at least 1, got {self.substeps}")
        if self.fps < 1:
            raise ValueError(f"fps must be at least 1, got {self.fps}")

    @property
    def start_position(self) -> Vec2:
        return Vec2(self.start_x, self.start_y)

    def segment_params(self) -> SegmentParams:
        return SegmentParams(
            mass=self.mass,
            stiffness=self.stiffness,
            damping=self.damping,
            rest_length=self.rest_length,
        )


class RopeDemo:
    """
    Fixed-timestep driver: events -> physics sub-steps -> render -> pace.

    Example:
        demo = RopeDemo(DemoConfig(segment_count=60))
        summary = demo.run()
    """

    def __init__(self, config: Optional[DemoConfig] = None):
        """
        Initialize the demo.

        Args:
            config: Demo configuration (uses defaults if None)
        """
        self.config = config or DemoConfig()

        self.rope = Rope(
            self.config.segment_count,
            self.config.start_position,
            self.config.segment_params(),
        )

        # Initialized in setup()
        self.window: Optional[pygame.Surface] = None
        self.clock: Optional[pygame.time.Clock] = None
        self.renderer: Optional[Renderer] = None

        # State tracking
        self.t: float = 0.0
        self.frame_count: int = 0
        self.paused: bool = False
        self.running: bool = True
        self.show_hud: bool = self.config.show_hud

    # ========================================================================
    # SETUP
    # ========================================================================

    def setup(self) -> None:
        """Open the window, grab the mouse and create the renderer."""
        cfg = self.config

        print("=" * 70)
        print("ROPE DEMO")
        print("=" * 70)
        print(f"  Segments: {cfg.segment_count} (rest length {cfg.rest_length})")
        print(f"  Sub-steps per frame: {cfg.substeps} @ {cfg.fps} fps")
        print()

        pygame.init()
        flags = pygame.FULLSCREEN if cfg.fullscreen else 0
        self.window = pygame.display.set_mode((cfg.window_width, cfg.window_height), flags)
        pygame.display.set_caption("Rope")

        if cfg.relative_mouse:
            pygame.mouse.set_visible(False)
            pygame.event.set_grab(True)

        self.clock = pygame.time.Clock()
        self.renderer = Renderer(draw_width=cfg.draw_width)

    def reset(self) -> None:
        """Put the rope back at the start position."""
        self.rope.reset(self.config.start_position)
        self.t = 0.0
        self.frame_count = 0
        print("Reset!")

    # ========================================================================
    # EVENTS
    # ========================================================================

    def handle_event(self, event: pygame.event.Event) -> None:
        """Apply one pygame event to the demo state."""
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_q, pygame.K_ESCAPE):
                self.running = False
            elif event.key == pygame.K_r:
                self.reset()
            elif event.key == pygame.K_SPACE:
                self.paused = not self.paused
                print("Paused" if self.paused else "Resumed")
            elif event.key == pygame.K_h:
                self.show_hud = not self.show_hud
        elif event.type == pygame.MOUSEMOTION and not self.paused:
            dx, dy = event.rel
            self.rope.pull(dx, dy)

    def handle_events(self) -> None:
        """Drain pending pygame events."""
        for event in pygame.event.get():
            self.handle_event(event)

    # ========================================================================
    # SIMULATION / RENDERING
    # ========================================================================

    def step(self) -> None:
        """Advance the rope by one frame of sub-steps."""
        self.rope.step(self.config.substeps)
        self.t += 1.0 / self.config.fps
        self.frame_count += 1

    def get_info_lines(self) -> list:
        """
        HUD lines for the debug overlay.

        Returns:
            List of (text, color) tuples
        """
        head = self.rope.head.position
        cursor = self.rope.cursor
        black = Renderer.BLACK
        return [
            (f"Time: {self.t:.1f}s  Frame: {self.frame_count}", black),
            (f"Cursor: ({cursor.x:.0f}, {cursor.y:.0f})", black),
            (f"Head: ({head.x:.0f}, {head.y:.0f})", black),
            (f"Length: {self.rope.length():.1f}px", black),
            (f"Kinetic energy: {self.rope.kinetic_energy():.3f}", black),
            ("PAUSED" if self.paused else "", black),
        ]

    def draw(self, canvas: pygame.Surface) -> None:
        """Draw the scene onto ``canvas``."""
        self.rope.draw(canvas, self.renderer)

        if self.show_hud:
            state = self.rope.state()
            self.renderer.draw_velocity_arrows(
                canvas,
                state.positions,
                state.velocities,
                speed_cap=self.rope.params.speed_cap,
            )
            self.renderer.draw_info_text(canvas, self.get_info_lines())

    def render(self) -> None:
        """Render the current frame to the window."""
        if self.window is None:
            return
        self.window.fill(Renderer.BACKGROUND)
        self.draw(self.window)
        pygame.display.flip()

    def get_summary(self) -> Dict[str, Any]:
        """
        Summary statistics at end of simulation.

        Returns:
            Dictionary of summary statistics
        """
        head = self.rope.head.position
        start = self.config.start_position
        return {
            'duration': self.t,
            'frames': self.frame_count,
            'head_displacement_x': head.x - start.x,
            'head_displacement_y': head.y - start.y,
            'kinetic_energy': self.rope.kinetic_energy(),
        }

    def run(self) -> Dict[str, Any]:
        """
        Run the interactive loop until quit (or ``duration`` elapses).

        Returns:
            Summary dictionary with simulation results
        """
        cfg = self.config
        try:
            self.setup()

            print("Move the mouse to drag the rope")
            print("Press Q/ESC to quit, R to reset, SPACE to pause, H for overlay")
            print()

            start_time = time.time()
            while self.running:
                self.handle_events()
                if not self.running:
                    break

                if self.paused:
                    pygame.time.wait(50)
                    continue

                self.step()
                self.render()
                self.clock.tick(cfg.fps)

                if cfg.verbose and self.frame_count % 100 == 0:
                    fps = self.frame_count / max(time.time() - start_time, 0.01)
                    head = self.rope.head.position
                    print(f"t={self.t:.2f}s | head=({head.x:.0f}, {head.y:.0f}) | "
                          f"E={self.rope.kinetic_energy():.3f} | fps={fps:.1f}")

                if cfg.duration > 0 and self.t >= cfg.duration:
                    break
        finally:
            pygame.quit()

        summary = self.get_summary()

        print()
        print("=" * 70)
        print("SIMULATION COMPLETE")
        print("=" * 70)
        print(f"  Duration: {summary['duration']:.2f}s ({summary['frames']} frames)")
        print(f"  Head displacement: ({summary['head_displacement_x']:+.1f}, "
              f"{summary['head_displacement_y']:+.1f})px")
        print()

        return summary

    # ========================================================================
    # COMMAND LINE
    # ========================================================================

    @classmethod
    def add_common_args(cls, parser: argparse.ArgumentParser) -> None:
        """Add command-line arguments to parser."""
        parser.add_argument('--segments', '-n', type=int, default=40,
                            help='Number of rope segments (default: 40)')
        parser.add_argument('--start', type=float, nargs=2, default=[300.0, 300.0],
                            metavar=('X', 'Y'), help='Start position in pixels (default: 300 300)')
        parser.add_argument('--substeps', type=int, default=15,
                            help='Physics sub-steps per frame (default: 15)')
        parser.add_argument('--fps', type=int, default=60,
                            help='Target frame rate (default: 60)')
        parser.add_argument('--mass', type=float, default=0.5,
                            help='Segment mass (default: 0.5)')
        parser.add_argument('--stiffness', type=float, default=0.5,
                            help='Spring stiffness (default: 0.5)')
        parser.add_argument('--damping', type=float, default=0.015,
                            help='Spring damping (default: 0.015)')
        parser.add_argument('--rest-length', type=float, default=20.0,
                            help='Spring rest length in pixels (default: 20)')
        parser.add_argument('--windowed', action='store_true',
                            help='Open a window instead of fullscreen')
        parser.add_argument('--window-width', type=int, default=0,
                            help='Window width, 0 = desktop (default: 0)')
        parser.add_argument('--window-height', type=int, default=0,
                            help='Window height, 0 = desktop (default: 0)')
        parser.add_argument('--no-grab', action='store_true',
                            help='Do not hide and grab the mouse')
        parser.add_argument('--hud', action='store_true',
                            help='Start with the debug overlay shown')
        parser.add_argument('--duration', '-t', type=float, default=0.0,
                            help='Stop after this many seconds, 0 = never (default: 0)')
        parser.add_argument('--verbose', '-v', action='store_true',
                            help='Print progress every 100 frames')

    @classmethod
    def config_from_args(cls, args) -> DemoConfig:
        """Create DemoConfig from parsed arguments."""
        return DemoConfig(
            segment_count=args.segments,
            start_x=args.start[0],
            start_y=args.start[1],
            substeps=args.substeps,
            mass=args.mass,
            stiffness=args.stiffness,
            damping=args.damping,
            rest_length=args.rest_length,
            fps=args.fps,
            fullscreen=not args.windowed,
            window_width=args.window_width,
            window_height=args.window_height,
            relative_mouse=not args.no_grab,
            show_hud=args.hud,
            duration=args.duration,
            verbose=args.verbose,
        )


def run_trace(config: DemoConfig, frames: int, output: Optional[str]) -> Dict[str, Any]:
    """
    Headless run with a circular cursor sweep; optionally plot the result.

    Args:
        config: Demo configuration (rope and physics fields are used)
        frames: Number of frames to simulate
        output: Figure path, or None to skip plotting

    Returns:
        Summary dictionary
    """
    from rope_sim.trace import plot_trajectory, record, sweep_deltas

    rope = Rope(config.segment_count, config.start_position, config.segment_params())
    print(f"Tracing {frames} frames x {config.substeps} sub-steps...")
    trajectory = record(rope, sweep_deltas(frames), substeps=config.substeps)

    summary = {
        'frames': trajectory.frames,
        'max_speed': trajectory.max_speed,
        'finite': trajectory.is_finite(),
    }
    print(f"  Max speed: {summary['max_speed']:.2f} px/tick")
    print(f"  Finite: {summary['finite']}")

    if output:
        import matplotlib
        matplotlib.use('Agg')
        plot_trajectory(trajectory, output)

    return summary


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Interactive rope simulation')
    RopeDemo.add_common_args(parser)
    parser.add_argument('--trace', type=int, default=0, metavar='FRAMES',
                        help='Run headless for FRAMES frames instead of opening a window')
    parser.add_argument('--output', '-o', type=str, default='rope_trace.png',
                        help='Figure path for --trace (default: rope_trace.png)')
    args = parser.parse_args(argv)

    config = RopeDemo.config_from_args(args)

    if args.trace > 0:
        summary = run_trace(config, args.trace, args.output)
        return 0 if summary['finite'] else 1

    RopeDemo(config).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
