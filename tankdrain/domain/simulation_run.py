# tankdrain/domain/simulation_run.py

from __future__ import annotations

import math
from dataclasses import dataclass

from ..constants import GRAVITY
from .geometry import TankGeometry


def check_run_inputs(geom: TankGeometry, initial_height: float, total_time: float) -> None:
    """Проверить начальный уровень и длительность до запуска расчёта."""
    if not math.isfinite(initial_height) or initial_height <= 0:
        raise ValueError(f"Initial height must be positive, got {initial_height!r}")
    h_max = geom.max_height
    if h_max is not None and initial_height > h_max:
        raise ValueError(
            f"Initial height {initial_height} exceeds tank height {h_max}"
        )
    if not math.isfinite(total_time) or total_time <= 0:
        raise ValueError(f"Total time must be positive, got {total_time!r}")


@dataclass(frozen=True, slots=True)
class DrainParameters:
    """Параметры истечения: эффективная площадь отверстия (с учётом коэф. расхода)."""

    outlet_area: float  # a, м²

    def __post_init__(self) -> None:
        if not math.isfinite(self.outlet_area) or self.outlet_area <= 0:
            raise ValueError(f"Outlet area must be positive, got {self.outlet_area!r}")

    @property
    def gravity(self) -> float:
        return GRAVITY


@dataclass(frozen=True, slots=True)
class SimulationRun:
    """Одна постановка: бак, начальный уровень, интервал и отверстие."""

    geometry: TankGeometry
    initial_height: float  # h0, м
    total_time: float  # T, с
    params: DrainParameters

    def __post_init__(self) -> None:
        check_run_inputs(self.geometry, self.initial_height, self.total_time)

    @property
    def outlet_area(self) -> float:
        return self.params.outlet_area
