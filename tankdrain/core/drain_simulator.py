# tankdrain/core/drain_simulator.py
"""Модуль расчёта опорожнения бака.

* Принимает на вход:
  - геометрию бака (цилиндр, конус или сфера),
  - начальный уровень и целевое время опорожнения,
  - объект‑калибратор, который подбирает площадь отверстия,
  - настройки (пороги, допуски, плотность сетки).
* На выходе формируется :class:`SimulationReport`: итог калибровки,
  неизменяемая траектория на фиксированной сетке и сэмплер для
  внешнего слоя анимации.

Модуль отделяет *подбор отверстия* (за который отвечает калибратор) от
*итогового расчёта* уровня. Это позволяет сравнивать разные стратегии
калибровки при одинаковой «физике» истечения.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd

from .drainage_ode import make_rhs
from .formulas import cap_volume
from .integrator import integrate
from .interpolation import Interpolator, default_interp
from .sampler import TrajectorySampler
from .trajectory import Trajectory
from ..calibrators import AbstractCalibrator, CalibrationResult, for_geometry, get as get_calibrator
from ..domain.drain_settings import DrainSettings
from ..domain.geometry import TankGeometry
from ..domain.simulation_run import DrainParameters, SimulationRun, check_run_inputs
from ..errors import CalibrationError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Результат расчёта
# ---------------------------------------------------------------------------


@dataclass(frozen=True, eq=False)
class SimulationReport:
    """Всё, что нужно потребителю: постановка, калибровка, траектория, сэмплер."""

    run: SimulationRun
    calibration: CalibrationResult
    trajectory: Trajectory
    sampler: TrajectorySampler

    def height_at(self, elapsed: float) -> float:
        return self.sampler.height_at(elapsed)

    def summary(self) -> dict[str, Any]:
        """Диагностика для печати: площадь, остаток, время опорожнения."""
        return {
            "shape": self.run.geometry.shape.name.lower(),
            "outlet_area": self.run.outlet_area,
            "calibration": str(self.calibration.status),
            "iterations": self.calibration.iterations,
            "final_height": self.trajectory.final_height,
            "drain_time": self.calibration.drain_time,
            "total_time": self.run.total_time,
        }

    def to_frame(self) -> pd.DataFrame:
        """Траектория с объёмом и процентом заполнения по каждой точке."""
        geom = self.run.geometry
        heights = self.trajectory.heights
        volumes = np.array([cap_volume(geom, h) for h in heights])
        initial_volume = cap_volume(geom, self.run.initial_height)

        pd.set_option("display.max_columns", None)
        pd.set_option("display.width", 0)
        return pd.DataFrame(
            {
                "t, с": self.trajectory.times,
                "h, м": heights,
                "V, м³": volumes,
                "V, %": 100.0 * volumes / initial_volume,
            }
        )


# ---------------------------------------------------------------------------
# Основной класс симулятора
# ---------------------------------------------------------------------------


class DrainSimulator:
    """Калибровка отверстия + итоговый расчёт уровня.

    Шаги работы:
    1. Калибратор подбирает площадь отверстия по адаптивным прогонам.
    2. По подобранной площади выполняется итоговый прогон на
       равномерной сетке из ``settings.grid_points`` точек.
    3. Траектория отдаётся сэмплеру, которым пользуется анимация.
    """

    def __init__(
        self,
        geom: TankGeometry,
        initial_height: float,
        total_time: float,
        calibrator: AbstractCalibrator | str | None = None,
        settings: DrainSettings | None = None,
        interp: Interpolator = default_interp,
    ) -> None:
        check_run_inputs(geom, initial_height, total_time)

        self.geom = geom
        self.initial_height = initial_height
        self.total_time = total_time
        self.settings = settings or DrainSettings()
        # Позволяем передавать строку‑алиас, готовый объект или ничего
        if calibrator is None:
            self.calibrator = for_geometry(geom, self.settings)
        elif isinstance(calibrator, str):
            self.calibrator = get_calibrator(calibrator, self.settings)
        else:
            self.calibrator = calibrator
        self.interp = interp

    def calibrate(self) -> CalibrationResult:
        """Подобрать площадь отверстия; неудача возвращается как результат."""
        return self.calibrator.calibrate(self.geom, self.initial_height, self.total_time)

    def run(self) -> SimulationReport:
        """Запустить калибровку и итоговый расчёт.

        Raises
        ------
        CalibrationError
            Если калибратор не смог подобрать площадь.
        """
        logger.info(
            "Starting drain simulation: %s tank, h0=%.3f m, T=%.1f s",
            self.geom.shape,
            self.initial_height,
            self.total_time,
        )

        calibration = self.calibrate()
        if not calibration.ok:
            raise CalibrationError(
                f"{self.calibrator.name} calibration failed: {calibration.reason}"
            )
        if not calibration.accepted:
            logger.warning("Proceeding with unverified outlet area: %s", calibration.reason)

        run = SimulationRun(
            geometry=self.geom,
            initial_height=self.initial_height,
            total_time=self.total_time,
            params=DrainParameters(outlet_area=calibration.outlet_area),
        )
        trajectory = self._production_run(run)

        logger.info(
            "Simulation finished: a=%.6f m², h(T)=%.4f m",
            run.outlet_area,
            trajectory.final_height,
        )
        return SimulationReport(
            run=run,
            calibration=calibration,
            trajectory=trajectory,
            sampler=TrajectorySampler(trajectory, self.settings, self.interp),
        )

    def _production_run(self, run: SimulationRun) -> Trajectory:
        s = self.settings
        grid = np.linspace(0.0, run.total_time, s.grid_points)
        return integrate(
            make_rhs(run.geometry, run.outlet_area, s.radius_sq_floor),
            (0.0, run.total_time),
            run.initial_height,
            rtol=s.rtol,
            atol=s.atol,
            t_eval=grid,
        )
