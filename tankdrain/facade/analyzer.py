# tankdrain/facade/analyzer.py
"""Высокоуровневый *facade* для запуска расчёта и построения графиков.

Класс **DrainAnalyzer** инкапсулирует последовательность вызовов:
1. Выбор калибратора по форме бака (или по алиасу).
2. Калибровка отверстия + итоговый расчёт (DrainSimulator).
3. (опц.) Визуализация результатов через модуль *visualization.plots*.

Клиентскому коду достаточно создать один объект **DrainAnalyzer** и
вызвать ``simulate`` – всё остальное делается «под капотом».
"""

from __future__ import annotations

import pandas as pd

from ..calibrators import AbstractCalibrator
from ..core.drain_simulator import DrainSimulator, SimulationReport
from ..domain.drain_settings import DrainSettings
from ..domain.geometry import TankGeometry
from ..visualization import plots


class DrainAnalyzer:
    """Единая точка входа для внешних пользователей библиотеки."""

    # ------------------------------------------------------------------
    # Конструктор
    # ------------------------------------------------------------------

    def __init__(
        self,
        geom: TankGeometry,
        total_time: float,
        initial_height: float | None = None,
        settings: DrainSettings | None = None,
    ) -> None:
        # По умолчанию бак заполнен доверху
        if initial_height is None:
            initial_height = geom.max_height
        if initial_height is None:
            raise ValueError("Initial height is required for a cylinder without a height")

        self.g = geom
        self.h0 = initial_height
        self.T = total_time
        self.settings = settings or DrainSettings()

    # ------------------------------------------------------------------
    # Основной публичный метод
    # ------------------------------------------------------------------

    def simulate(
        self,
        calibrator: str | AbstractCalibrator | None = None,
    ) -> SimulationReport:
        """Запустить калибровку + расчёт и вернуть отчёт."""
        sim = DrainSimulator(
            self.g, self.h0, self.T, calibrator=calibrator, settings=self.settings
        )
        return sim.run()

    def table(self, report: SimulationReport) -> pd.DataFrame:
        """Таблица h, V, V% по времени."""
        return report.to_frame()

    # ------------------------------------------------------------------
    # Быстрые обёртки для графиков
    # ------------------------------------------------------------------

    def plot_height(self, report: SimulationReport):
        """График уровня во времени."""
        plots.plot_height(report)

    def plot_volume(self, report: SimulationReport):
        """График оставшегося объёма в процентах."""
        plots.plot_volume(report)

    def animate(self, report: SimulationReport):
        """Анимация опорожнения в реальном времени."""
        return plots.animate(report)
