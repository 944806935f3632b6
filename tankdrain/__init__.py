# tankdrain/__init__.py
"""Пакет **tankdrain** (опорожнение баков по закону Торричелли).

Инициализационный модуль упрощает импорт «ключевых сущностей»
библиотеки для внешних пользователей:

--- from tankdrain import DrainAnalyzer, Cylindrical, Conical, Spherical ---

Экспортируемые объекты перечислены в ``__all__`` — это служит
*public API* пакета, ограничивая автодополнение и документацию теми
классами и функциями, которые нужны снаружи.
"""

from __future__ import annotations

from .calibrators import CalibrationResult, CalibrationStatus
from .core.drain_simulator import DrainSimulator, SimulationReport
from .core.drainage_ode import height_rate
from .core.formulas import cap_volume, cross_section_area
from .core.integrator import integrate
from .core.sampler import TrajectorySampler, height_at
from .core.trajectory import Trajectory
from .domain.drain_settings import DrainSettings
from .domain.geometry import Conical, Cylindrical, Spherical, TankGeometry, TankShape
from .facade.analyzer import DrainAnalyzer

__all__ = [
    "DrainAnalyzer",  # фасад для расчёта и графиков
    "DrainSimulator",  # калибровка + итоговый прогон
    "SimulationReport",
    "DrainSettings",  # пороги, допуски, сетка
    "Cylindrical",  # формы бака
    "Conical",
    "Spherical",
    "TankGeometry",
    "TankShape",
    "cross_section_area",  # геометрия
    "cap_volume",
    "height_rate",  # правая часть ОДУ
    "integrate",  # RK45
    "Trajectory",
    "height_at",  # выборка уровня для анимации
    "TrajectorySampler",
    "CalibrationResult",
    "CalibrationStatus",
]
