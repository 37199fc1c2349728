# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Array snapshot of a rope

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class RopeState:
    """
    Snapshot of the time-varying state of a rope.

    Attributes:
        positions: Segment positions, shape [segment_count, 2]
        velocities: Segment velocities, shape [segment_count, 2]
        cursor: Cursor target, shape [2]
    """

    positions: np.ndarray
    velocities: np.ndarray
    cursor: np.ndarray

    @property
    def segment_count(self) -> int:
        return self.positions.shape[0]

    @property
    def speeds(self) -> np.ndarray:
        return np.linalg.norm(self.velocities, axis=1)

    def is_finite(self) -> bool:
        return bool(
            np.all(np.isfinite(self.positions))
            and np.all(np.isfinite(self.velocities))
            and np.all(np.isfinite(self.cursor))
        )
