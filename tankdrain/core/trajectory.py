# tankdrain/core/trajectory.py
"""Траектория уровня – результат интегрирования ОДУ.

После создания массивы времени и уровня переводятся в режим «только
чтение»: траектория передаётся потребителям (сэмплер, графики) и больше
никем не изменяется.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd


@dataclass(frozen=True, eq=False)
class Trajectory:
    """Упорядоченные пары (t, h): время растёт, уровень не растёт."""

    times: np.ndarray  # с
    heights: np.ndarray  # м

    def __post_init__(self) -> None:
        times = np.array(self.times, dtype=float)
        heights = np.array(self.heights, dtype=float)

        if times.ndim != 1 or heights.ndim != 1:
            raise ValueError("Trajectory arrays must be one-dimensional")
        if len(times) != len(heights):
            raise ValueError("Trajectory times and heights must have equal length")
        if len(times) < 2:
            raise ValueError("Trajectory needs at least two samples")
        if np.any(np.diff(times) <= 0):
            raise ValueError("Trajectory times must be strictly increasing")
        if np.any(heights < 0):
            raise ValueError("Trajectory heights must be non-negative")

        times.setflags(write=False)
        heights.setflags(write=False)
        object.__setattr__(self, "times", times)
        object.__setattr__(self, "heights", heights)

    def __len__(self) -> int:
        return len(self.times)

    @property
    def start_time(self) -> float:
        return float(self.times[0])

    @property
    def end_time(self) -> float:
        return float(self.times[-1])

    @property
    def span(self) -> float:
        return self.end_time - self.start_time

    @property
    def initial_height(self) -> float:
        return float(self.heights[0])

    @property
    def final_height(self) -> float:
        return float(self.heights[-1])

    def first_time_below(self, threshold: float) -> float | None:
        """Первый момент, когда уровень опустился ниже *threshold*; ``None`` – не опустился."""
        below = np.flatnonzero(self.heights < threshold)
        if below.size == 0:
            return None
        return float(self.times[below[0]])

    def to_frame(self) -> pd.DataFrame:
        """Траектория в виде DataFrame (колонки ``t, с`` и ``h, м``)."""
        return pd.DataFrame({"t, с": self.times, "h, м": self.heights})
