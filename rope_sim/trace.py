# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Headless trajectory recording for ropes driven by a scripted cursor

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

import numpy as np

from .rope import Rope


@dataclass
class Trajectory:
    """
    Recorded rope motion, one sample per rendered frame.

    Attributes:
        positions: Segment positions, shape [frames + 1, segment_count, 2]
        velocities: Segment velocities, shape [frames + 1, segment_count, 2]
        cursor: Cursor positions, shape [frames + 1, 2]
        substeps: Ticks run between consecutive samples
    """

    positions: np.ndarray
    velocities: np.ndarray
    cursor: np.ndarray
    substeps: int

    @property
    def frames(self) -> int:
        return self.positions.shape[0] - 1

    @property
    def head_path(self) -> np.ndarray:
        return self.positions[:, 0, :]

    @property
    def tail_path(self) -> np.ndarray:
        return self.positions[:, -1, :]

    @property
    def max_speed(self) -> float:
        return float(np.max(np.linalg.norm(self.velocities, axis=2)))

    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self.positions)) and np.all(np.isfinite(self.velocities)))


def sweep_deltas(frames: int, amplitude: float = 200.0, period: int = 120) -> np.ndarray:
    """
    Cursor deltas tracing a circle of radius ``amplitude`` every ``period`` frames.

    Args:
        frames: Number of deltas
        amplitude: Circle radius (pixels)
        period: Frames per revolution

    Returns:
        Array of shape [frames, 2]
    """
    t = np.arange(frames + 1) * (2.0 * np.pi / period)
    path = amplitude * np.stack([np.cos(t), np.sin(t)], axis=1)
    return np.diff(path, axis=0)


def record(rope: Rope, cursor_deltas: Iterable[Tuple[float, float]], substeps: int = 15) -> Trajectory:
    """
    Drive ``rope`` headlessly, one cursor delta per frame.

    Args:
        rope: Rope to simulate (mutated in place)
        cursor_deltas: Iterable of (dx, dy) applied before each frame
        substeps: Ticks per frame

    Returns:
        Trajectory including the initial state
    """
    if substeps < 1:
        raise ValueError(f"substeps must be at least 1, got {substeps}")

    states = [rope.state()]
    for dx, dy in cursor_deltas:
        rope.pull(dx, dy)
        rope.step(substeps)
        states.append(rope.state())

    return Trajectory(
        positions=np.stack([s.positions for s in states]),
        velocities=np.stack([s.velocities for s in states]),
        cursor=np.stack([s.cursor for s in states]),
        substeps=substeps,
    )


def plot_trajectory(trajectory: Trajectory, filepath: Optional[str] = None):
    """
    Plot cursor, head and tail paths plus per-frame peak speed.

    Args:
        trajectory: Recorded trajectory
        filepath: Save the figure here when given

    Returns:
        matplotlib Figure
    """
    import matplotlib.pyplot as plt

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))

    cursor = trajectory.cursor
    head = trajectory.head_path
    tail = trajectory.tail_path
    ax1.plot(cursor[:, 0], cursor[:, 1], 'k--', linewidth=1, alpha=0.5, label='Cursor')
    ax1.plot(head[:, 0], head[:, 1], 'b-', linewidth=2, label='Head')
    ax1.plot(tail[:, 0], tail[:, 1], 'r-', linewidth=2, label='Tail')
    ax1.invert_yaxis()  # screen coordinates
    ax1.set_aspect('equal')
    ax1.set_title('Rope Paths')
    ax1.set_xlabel('X (px)')
    ax1.set_ylabel('Y (px)')
    ax1.legend(loc='upper right')
    ax1.grid(True, alpha=0.3)

    speeds = np.linalg.norm(trajectory.velocities, axis=2)
    ax2.plot(speeds[:, 0], 'b-', linewidth=2, label='Head')
    ax2.plot(speeds[:, -1], 'r-', linewidth=2, label='Tail')
    ax2.plot(speeds.max(axis=1), 'k-', linewidth=1, alpha=0.5, label='Max')
    ax2.set_title(f'Segment Speed ({trajectory.substeps} ticks/frame)')
    ax2.set_xlabel('Frame')
    ax2.set_ylabel('Speed (px/tick)')
    ax2.legend(loc='upper right')
    ax2.grid(True, alpha=0.3)

    plt.tight_layout()
    if filepath is not None:
        plt.savefig(filepath, dpi=150)
        print(f"Saved trajectory plot to: {filepath}")
    return fig
