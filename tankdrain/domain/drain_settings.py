# tankdrain/domain/drain_settings.py
"""Настройки расчёта: пороги калибровки, допуски решателя, параметры воспроизведения."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

from .. import constants as c


@dataclass(frozen=True, slots=True)
class DrainSettings:
    """Все численные «ручки» в одном неизменяемом контейнере.

    Значения по умолчанию берутся из :mod:`tankdrain.constants`.  Порог
    приёмки калибровки (``accept_height``) и порог прилипания к нулю при
    воспроизведении (``snap_height``) – разные величины, хотя по
    умолчанию обе равны 0.05 м.
    """

    # --- приёмка калибровки ---
    accept_height: float = c.ACCEPT_HEIGHT
    coarse_height: float = c.COARSE_HEIGHT
    coarse_step: float = c.COARSE_STEP
    fine_step: float = c.FINE_STEP
    search_start_area: float = c.SEARCH_START_AREA
    max_iterations: int = c.MAX_SEARCH_ITERATIONS
    search_time_limit: float | None = None  # с, стенные часы; None – без лимита

    closed_form_factor: float = c.CLOSED_FORM_FACTOR
    escalation_factor: float = c.ESCALATION_FACTOR
    fixed_outlet_area: float = c.FIXED_OUTLET_AREA

    # --- решатель ---
    rtol: float = c.DEFAULT_RTOL
    atol: float = c.DEFAULT_ATOL
    grid_points: int = c.DEFAULT_GRID_POINTS
    radius_sq_floor: float = c.RADIUS_SQ_FLOOR

    # --- диагностика и воспроизведение ---
    empty_height: float = c.EMPTY_HEIGHT
    snap_height: float = c.SNAP_HEIGHT
    snap_time_fraction: float = c.SNAP_TIME_FRACTION

    def __post_init__(self) -> None:
        positive = {
            "accept_height": self.accept_height,
            "coarse_height": self.coarse_height,
            "search_start_area": self.search_start_area,
            "fixed_outlet_area": self.fixed_outlet_area,
            "closed_form_factor": self.closed_form_factor,
            "rtol": self.rtol,
            "atol": self.atol,
            "radius_sq_floor": self.radius_sq_floor,
            "empty_height": self.empty_height,
        }
        for name, value in positive.items():
            if not value > 0:
                raise ValueError(f"'{name}' must be positive, got {value!r}")

        # Множители поиска обязаны увеличивать площадь, иначе поиск не сойдётся
        for name in ("coarse_step", "fine_step", "escalation_factor"):
            if not getattr(self, name) > 1.0:
                raise ValueError(f"'{name}' must be greater than 1")

        if self.coarse_height < self.accept_height:
            raise ValueError("'coarse_height' must not be below 'accept_height'")
        if self.max_iterations < 1:
            raise ValueError("'max_iterations' must be at least 1")
        if self.search_time_limit is not None and self.search_time_limit <= 0:
            raise ValueError("'search_time_limit' must be positive or None")
        if self.grid_points < 2:
            raise ValueError("'grid_points' must be at least 2")
        if self.snap_height < 0:
            raise ValueError("'snap_height' must be non-negative")
        if not 0.0 <= self.snap_time_fraction <= 1.0:
            raise ValueError("'snap_time_fraction' must lie in [0, 1]")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> DrainSettings:
        """Создать настройки из словаря (например, из аргументов CLI).

        Неизвестные ключи считаются опечаткой и приводят к ``ValueError``.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(sorted(unknown))}")
        return cls(**data)
