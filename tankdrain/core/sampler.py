# tankdrain/core/sampler.py
"""Выборка уровня из траектории по прошедшему времени.

Это единственная точка контакта с внешним слоем анимации: тот в цикле
(~30 Гц) спрашивает «какой уровень в момент *t*?» и рисует ответ.
Сам расчёт от частоты кадров не зависит.
"""

from __future__ import annotations

import math

from ..constants import SNAP_HEIGHT, SNAP_TIME_FRACTION
from ..domain.drain_settings import DrainSettings
from .interpolation import Interpolator, default_interp
from .trajectory import Trajectory


def height_at(
    trajectory: Trajectory,
    elapsed: float,
    snap_height: float = SNAP_HEIGHT,
    snap_time_fraction: float = SNAP_TIME_FRACTION,
    interp: Interpolator = default_interp,
) -> float:
    """Уровень жидкости в момент *elapsed*, м.

    * после конца интервала – ровно 0 (анимация всегда заканчивается
      пустым баком, даже если калибровка оставила остаток);
    * внутри интервала – линейная интерполяция между соседними точками;
    * на последних ``1 − snap_time_fraction`` интервала уровень ниже
      ``snap_height`` округляется до нуля.
    """
    if math.isnan(elapsed):
        raise ValueError("Elapsed time must be a number")
    if elapsed >= trajectory.end_time:
        return 0.0

    h = max(0.0, interp(elapsed, trajectory.times, trajectory.heights))
    snap_after = trajectory.start_time + snap_time_fraction * trajectory.span
    if h < snap_height and elapsed > snap_after:
        return 0.0
    return h


class TrajectorySampler:
    """Владелец готовой траектории с настроенными порогами выборки.

    Объект можно вызывать как функцию: ``sampler(t) -> h``.
    """

    def __init__(
        self,
        trajectory: Trajectory,
        settings: DrainSettings | None = None,
        interp: Interpolator = default_interp,
    ) -> None:
        self.settings = settings or DrainSettings()
        self.interp = interp
        self._trajectory = trajectory

    @property
    def trajectory(self) -> Trajectory:
        return self._trajectory

    @property
    def total_time(self) -> float:
        return self._trajectory.end_time

    def height_at(self, elapsed: float) -> float:
        return height_at(
            self._trajectory,
            elapsed,
            snap_height=self.settings.snap_height,
            snap_time_fraction=self.settings.snap_time_fraction,
            interp=self.interp,
        )

    __call__ = height_at
