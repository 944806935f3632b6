# tankdrain/core/formulas.py
"""Геометрические формулы: площадь зеркала, объём жидкости, время опорожнения.

Каждая функция разбирает *tagged variant* геометрии через ``isinstance``
и считает по формуле своей формы. Уровень *h* всегда отсчитывается от
нижней точки бака.
"""

from __future__ import annotations

import math

from ..constants import GRAVITY, RADIUS_SQ_FLOOR
from ..domain.geometry import Conical, Cylindrical, Spherical, TankGeometry


def _unsupported(geom: object) -> TypeError:
    return TypeError(f"Unsupported tank geometry: {type(geom).__name__}")


def _check_height(geom: TankGeometry, h: float) -> None:
    if h < 0:
        raise ValueError(f"Liquid height must be non-negative, got {h!r}")
    h_max = geom.max_height
    if h_max is not None and h > h_max:
        raise ValueError(f"Liquid height {h} exceeds tank height {h_max}")


def radius_squared(geom: TankGeometry, h: float) -> float:
    """r(h)² – квадрат радиуса зеркала без какой‑либо обрезки."""
    if isinstance(geom, Cylindrical):
        return geom.radius**2
    if isinstance(geom, Conical):
        return (geom.radius / geom.height * h) ** 2
    if isinstance(geom, Spherical):
        return geom.radius**2 - (geom.radius - h) ** 2
    raise _unsupported(geom)


def cross_section_area(geom: TankGeometry, h: float) -> float:
    """Площадь зеркала A(h), м².

    * цилиндр: π·R²;
    * конус:   π·(R/H)²·h²;
    * сфера:   π·(2R·h − h²).

    Для конуса и сферы A(0) = 0 точно.
    """
    _check_height(geom, h)
    if isinstance(geom, Cylindrical):
        return math.pi * geom.radius**2
    if isinstance(geom, Conical):
        return math.pi * (geom.radius / geom.height) ** 2 * h**2
    if isinstance(geom, Spherical):
        # max: у верхней точки 2R·h − h² может уйти в −1e‑16
        return max(0.0, math.pi * (2.0 * geom.radius * h - h**2))
    raise _unsupported(geom)


def cap_volume(geom: TankGeometry, h: float) -> float:
    """Объём жидкости от дна до уровня *h*, м³."""
    _check_height(geom, h)
    if isinstance(geom, Cylindrical):
        return math.pi * geom.radius**2 * h
    if isinstance(geom, Conical):
        return math.pi / 3.0 * (geom.radius / geom.height) ** 2 * h**3
    if isinstance(geom, Spherical):
        r = geom.radius
        if h <= r:
            return math.pi / 3.0 * h**2 * (3.0 * r - h)
        top = 2.0 * r - h  # высота пустого сегмента сверху
        return 4.0 / 3.0 * math.pi * r**3 - math.pi / 3.0 * top**2 * (3.0 * r - top)
    raise _unsupported(geom)


def effective_area(geom: TankGeometry, h: float, floor: float = RADIUS_SQ_FLOOR) -> float:
    """Площадь зеркала для правой части ОДУ.

    У конуса (вершина) и сферы (дно и верх) r(h)² обращается в ноль,
    поэтому здесь оно ограничено снизу значением *floor*. Цилиндр
    не трогаем: его радиус не зависит от уровня.
    """
    if isinstance(geom, Cylindrical):
        return math.pi * geom.radius**2
    return math.pi * max(floor, radius_squared(geom, h))


def surface_radius(geom: TankGeometry, h: float, floor: float = RADIUS_SQ_FLOOR) -> float:
    """Радиус зеркала r(h) для отрисовки; r² не опускается ниже *floor*."""
    if isinstance(geom, Cylindrical):
        return geom.radius
    return math.sqrt(max(floor, radius_squared(geom, h)))


def volume_fraction(geom: TankGeometry, h: float, h_ref: float) -> float:
    """Доля оставшегося объёма относительно уровня *h_ref* (0…1)."""
    full = cap_volume(geom, h_ref)
    if full <= 0:
        raise ValueError("Reference height must enclose a positive volume")
    return cap_volume(geom, max(0.0, h)) / full


def cylinder_outlet_area(
    geom: Cylindrical, h0: float, total_time: float, factor: float
) -> float:
    """Площадь отверстия цилиндра по замкнутой формуле.

    Formula: *a* = k · A · √h0 / (T · √(2g)).
    """
    area = math.pi * geom.radius**2
    return factor * area * math.sqrt(h0) / (total_time * math.sqrt(2.0 * GRAVITY))


def analytic_drain_time(geom: TankGeometry, h0: float, outlet_area: float) -> float:
    """Точное время опорожнения с уровня *h0*, с.

    Интеграл ∫₀^h0 A(h) / (a·√(2gh)) dh берётся в замкнутом виде:

    * цилиндр: π·R²·2√h0;
    * конус:   π·(R/H)²·(2/5)·h0^(5/2);
    * сфера:   π·(2R·(2/3)·h0^(3/2) − (2/5)·h0^(5/2)).

    Пол r² здесь не учитывается – это «идеальная» физика для сверки.
    """
    _check_height(geom, h0)
    if outlet_area <= 0:
        raise ValueError(f"Outlet area must be positive, got {outlet_area!r}")
    if isinstance(geom, Cylindrical):
        integral = math.pi * geom.radius**2 * 2.0 * math.sqrt(h0)
    elif isinstance(geom, Conical):
        integral = math.pi * (geom.radius / geom.height) ** 2 * 0.4 * h0**2.5
    elif isinstance(geom, Spherical):
        integral = math.pi * (
            2.0 * geom.radius * 2.0 / 3.0 * h0**1.5 - 0.4 * h0**2.5
        )
    else:
        raise _unsupported(geom)
    return integral / (outlet_area * math.sqrt(2.0 * GRAVITY))
