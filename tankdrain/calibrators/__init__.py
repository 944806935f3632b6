# tankdrain/calibrators/__init__.py
"""Базовые абстракции и фабрика калибраторов площади отверстия.

*Модуль объединяет:*
1. **CalibrationResult** — итог подбора: площадь, остаточный уровень,
   число прогонов, диагностическое время опорожнения. Неудача поиска –
   это тоже результат (``FAILED``), а не исключение.
2. **AbstractCalibrator** — абстрактный базовый класс (ABC) с единым
   методом ``calibrate`` и общим «проверочным» прогоном ОДУ.
3. Функции‑фабрики **get(name)** и **for_geometry(geom)**, возвращающие
   калибратор по строковому алиасу или по форме бака.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto

from ..core.drainage_ode import make_rhs
from ..core.integrator import integrate
from ..core.trajectory import Trajectory
from ..domain.drain_settings import DrainSettings
from ..domain.geometry import Conical, Cylindrical, Spherical, TankGeometry

# ---------------------------------------------------------------------------
# Результат калибровки
# ---------------------------------------------------------------------------


class CalibrationStatus(Enum):
    """Исход подбора площади отверстия."""

    ACCEPTED = auto()  # к концу интервала бак практически пуст
    UNVERIFIED = auto()  # площадь есть, но порог приёмки не выполнен
    FAILED = auto()  # площадь подобрать не удалось

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True, slots=True)
class CalibrationResult:
    """Итог калибровки."""

    status: CalibrationStatus
    outlet_area: float | None  # м²; None только при FAILED
    final_height: float | None  # м, уровень в конце интервала
    iterations: int  # число проверочных прогонов ОДУ
    drain_time: float | None = None  # с, первый момент h < empty_height
    reason: str = ""

    @property
    def ok(self) -> bool:
        """Можно ли продолжать расчёт с этой площадью."""
        return self.status is not CalibrationStatus.FAILED

    @property
    def accepted(self) -> bool:
        return self.status is CalibrationStatus.ACCEPTED


# ---------------------------------------------------------------------------
# Абстрактный базовый класс калибраторов
# ---------------------------------------------------------------------------


class AbstractCalibrator(ABC):
    """Интерфейс любой стратегии подбора площади отверстия *a* (м²).

    Метод ``calibrate`` получает бак, начальный уровень и целевое время
    опорожнения и возвращает :class:`CalibrationResult`.
    """

    name: str = "abstract"

    def __init__(self, settings: DrainSettings | None = None) -> None:
        self.settings = settings or DrainSettings()

    @abstractmethod
    def calibrate(
        self,
        geom: TankGeometry,
        initial_height: float,
        total_time: float,
    ) -> CalibrationResult:
        """Подобрать площадь отверстия для опорожнения за *total_time*."""
        ...

    # ------------------------------------------------------------------
    # Общие помощники
    # ------------------------------------------------------------------

    def _trial_run(
        self,
        geom: TankGeometry,
        initial_height: float,
        total_time: float,
        outlet_area: float,
    ) -> Trajectory:
        """Проверочный прогон на адаптивной сетке решателя."""
        s = self.settings
        return integrate(
            make_rhs(geom, outlet_area, s.radius_sq_floor),
            (0.0, total_time),
            initial_height,
            rtol=s.rtol,
            atol=s.atol,
        )

    def _drain_time(self, trajectory: Trajectory) -> float | None:
        return trajectory.first_time_below(self.settings.empty_height)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


# ---------------------------------------------------------------------------
# Фабрика калибраторов по строковому имени и по форме бака
# ---------------------------------------------------------------------------


def get(name: str = "search", settings: DrainSettings | None = None) -> AbstractCalibrator:
    """Вернуть готовый калибратор по алиасу *name*.

    Parameters
    ----------
    name : str
        Допустимые значения:
        * ``"closed_form"`` – ClosedFormCalibrator (только цилиндр),
        * ``"search"``      – MultiplicativeSearchCalibrator,
        * ``"fixed"``       – FixedAreaCalibrator.

    Raises
    ------
    ValueError
        Если передано неизвестное имя калибратора.
    """
    if name == "closed_form":
        from .closed_form import ClosedFormCalibrator

        return ClosedFormCalibrator(settings)
    if name == "search":
        from .search import MultiplicativeSearchCalibrator

        return MultiplicativeSearchCalibrator(settings)
    if name == "fixed":
        from .fixed import FixedAreaCalibrator

        return FixedAreaCalibrator(settings)

    raise ValueError(f"Unknown calibrator '{name}'")


def for_geometry(geom: TankGeometry, settings: DrainSettings | None = None) -> AbstractCalibrator:
    """Калибратор по умолчанию для формы бака.

    Цилиндр – замкнутая формула, конус – мультипликативный поиск,
    сфера – заранее подобранная площадь с проверкой.
    """
    if isinstance(geom, Cylindrical):
        return get("closed_form", settings)
    if isinstance(geom, Conical):
        return get("search", settings)
    if isinstance(geom, Spherical):
        return get("fixed", settings)
    raise TypeError(f"Unsupported tank geometry: {type(geom).__name__}")
