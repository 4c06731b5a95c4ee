"""
Trajectory Replay
=================
Progressive playback of a computed trajectory. Over a fixed wall-clock
window the visible part of the path grows from nothing to the full set of
samples; at progress p the first floor(n·p) samples are shown.

Replays are lazy and restartable: iterating twice yields the same frames.
"""

import math
from typing import Iterator, Optional, Tuple

from .calculator import PositionSample, TrajectoryResult


DEFAULT_DURATION = 2.0    # s, full playback window
DEFAULT_FRAMES = 60


class TrajectoryReplay:
    """Prefixes of ``result.samples`` keyed by elapsed fraction of the window."""

    def __init__(self, result: Optional[TrajectoryResult],
                 duration: float = DEFAULT_DURATION,
                 frame_count: int = DEFAULT_FRAMES):
        if duration <= 0:
            raise ValueError(f"Replay duration must be positive, got {duration}")
        self.result = result
        self.duration = duration
        self.frame_count = frame_count

    @property
    def samples(self) -> Tuple[PositionSample, ...]:
        return self.result.samples if self.result is not None else ()

    def prefix_at(self, progress: float) -> Tuple[PositionSample, ...]:
        progress = min(max(progress, 0.0), 1.0)
        count = math.floor(len(self.samples) * progress)
        return self.samples[:count]

    def prefix_at_elapsed(self, elapsed: float) -> Tuple[PositionSample, ...]:
        return self.prefix_at(elapsed / self.duration)

    def current_sample(self, progress: float) -> Optional[PositionSample]:
        """Leading point of the visible path, None before the first sample shows."""
        prefix = self.prefix_at(progress)
        return prefix[-1] if prefix else None

    def frames(self, count: Optional[int] = None) -> Iterator[Tuple[PositionSample, ...]]:
        """
        Yield ``count`` prefixes at evenly spaced progress values, the last
        one always being the complete trajectory.
        """
        if self.result is None:
            return
        count = self.frame_count if count is None else count
        if count <= 0:
            return
        if count == 1:
            yield self.prefix_at(1.0)
            return
        for i in range(count):
            yield self.prefix_at(i / (count - 1))

    def __iter__(self):
        return self.frames()

    def __len__(self):
        return 0 if self.result is None else max(self.frame_count, 0)
