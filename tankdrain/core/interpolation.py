# tankdrain/core/interpolation.py
"""Схемы интерполяции уровня между узлами траектории.

Сэмплер не привязан к конкретной схеме: подойдёт любой объект с
сигнатурой ``(t, times, heights) -> h``. По умолчанию – кусочно‑линейная.
"""

from __future__ import annotations

from typing import Protocol, Sequence

import numpy as np


class Interpolator(Protocol):
    """Уровень в момент *t* по узлам ``(times, heights)``; ``times`` возрастают."""

    def __call__(self, t: float, times: Sequence[float], heights: Sequence[float]) -> float:
        ...


def default_interp(t: float, times: Sequence[float], heights: Sequence[float]) -> float:
    """Кусочно‑линейная интерполяция (:func:`numpy.interp`), за краями – крайние значения."""
    return float(np.interp(t, times, heights))


def hold_interp(t: float, times: Sequence[float], heights: Sequence[float]) -> float:
    """Ступенчатая схема: значение последнего узла с ``times[i] <= t``.

    Удобна для отображения «как посчитано», без сглаживания между
    шагами решателя.
    """
    idx = int(np.searchsorted(times, t, side="right")) - 1
    return float(heights[max(idx, 0)])
