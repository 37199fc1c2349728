# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0

from .vec2 import Vec2, ZERO_THRESHOLD
from .params import SegmentParams, DEFAULT_PARAMS
from .segment import Segment
from .state import RopeState
from .rope import Rope

__all__ = [
    "DEFAULT_PARAMS",
    "Rope",
    "RopeState",
    "Segment",
    "SegmentParams",
    "Vec2",
    "ZERO_THRESHOLD",
]
