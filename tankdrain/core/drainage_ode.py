# tankdrain/core/drainage_ode.py
"""Правая часть ОДУ истечения по закону Торричелли.

Сохранение объёма: A(h)·dh/dt = −a·√(2gh), откуда

    dh/dt = −(a / A(h)) · √(2gh).

Уровень h ≤ 0 – поглощающее состояние: производная равна ровно нулю,
бак остаётся пустым и уровень не уходит в минус.
"""

from __future__ import annotations

import math
from typing import Callable, Sequence

from ..constants import GRAVITY, RADIUS_SQ_FLOOR
from ..domain.geometry import TankGeometry
from ..errors import SingularityGuardError
from .formulas import effective_area

OdeFn = Callable[[float, Sequence[float]], list[float]]


def height_rate(
    geom: TankGeometry,
    h: float,
    outlet_area: float,
    floor: float = RADIUS_SQ_FLOOR,
) -> float:
    """Скорость изменения уровня dh/dt, м/с (≤ 0)."""
    if h <= 0.0:
        return 0.0

    area = effective_area(geom, h, floor)
    # `not area > 0` ловит и NaN
    if not area > 0.0:
        raise SingularityGuardError(
            f"Cross-section area {area!r} at h={h!r} for {type(geom).__name__}"
        )
    return -(outlet_area / area) * math.sqrt(2.0 * GRAVITY * h)


def make_rhs(
    geom: TankGeometry,
    outlet_area: float,
    floor: float = RADIUS_SQ_FLOOR,
) -> OdeFn:
    """Обернуть :func:`height_rate` в сигнатуру ``f(t, y)`` для решателя."""
    if not outlet_area > 0:
        raise ValueError(f"Outlet area must be positive, got {outlet_area!r}")

    def rhs(t: float, y: Sequence[float]) -> list[float]:
        return [height_rate(geom, float(y[0]), outlet_area, floor)]

    return rhs
