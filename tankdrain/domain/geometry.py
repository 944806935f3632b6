# tankdrain/domain/geometry.py
"""Описание формы бака.

Поддерживаются ровно три формы, каждая – неизменяемая запись со своими
параметрами:

* **Cylindrical** – вертикальный цилиндр радиуса *R*; площадь зеркала
  постоянна. Высота бака необязательна: уровень задаётся при запуске.
* **Conical** – конус вершиной вниз, радиус *R* на высоте *H*; площадь
  зеркала растёт как h².
* **Spherical** – шар радиуса *R*; уровень меняется от 0 (дно) до 2R
  (верх), площадь зеркала обращается в ноль на обоих концах.

Вместо иерархии классов с виртуальными методами геометрия – это
*tagged variant*: формулы площади и объёма собраны в
:mod:`tankdrain.core.formulas` и выбирают ветку по типу записи.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, auto

from ..errors import InvalidGeometryError


class TankShape(Enum):
    """Перечисление поддерживаемых форм."""

    CYLINDRICAL = auto()
    CONICAL = auto()
    SPHERICAL = auto()

    def __str__(self) -> str:
        return {
            TankShape.CYLINDRICAL: "цилиндр",
            TankShape.CONICAL: "конус",
            TankShape.SPHERICAL: "сфера",
        }[self]


def _require_positive(**params: float | None) -> None:
    """Проверить, что все переданные параметры – конечные числа > 0."""
    for name, value in params.items():
        if value is None:
            continue
        if not math.isfinite(value) or value <= 0:
            raise InvalidGeometryError(
                f"Tank parameter '{name}' must be a positive finite number, got {value!r}"
            )


@dataclass(frozen=True, slots=True)
class Cylindrical:
    """Вертикальный цилиндр."""

    radius: float  # R, м
    height: float | None = None  # высота стенки, м (если известна)

    def __post_init__(self) -> None:
        _require_positive(radius=self.radius, height=self.height)

    @property
    def shape(self) -> TankShape:
        return TankShape.CYLINDRICAL

    @property
    def max_height(self) -> float | None:
        return self.height


@dataclass(frozen=True, slots=True)
class Conical:
    """Конус вершиной вниз: радиус ``radius`` на высоте ``height``."""

    radius: float  # R, м
    height: float  # H, м

    def __post_init__(self) -> None:
        _require_positive(radius=self.radius, height=self.height)

    @property
    def shape(self) -> TankShape:
        return TankShape.CONICAL

    @property
    def max_height(self) -> float:
        return self.height


@dataclass(frozen=True, slots=True)
class Spherical:
    """Шар радиуса ``radius``; уровень отсчитывается от нижней точки."""

    radius: float  # R, м

    def __post_init__(self) -> None:
        _require_positive(radius=self.radius)

    @property
    def shape(self) -> TankShape:
        return TankShape.SPHERICAL

    @property
    def max_height(self) -> float:
        return 2.0 * self.radius


TankGeometry = Cylindrical | Conical | Spherical


def make_geometry(shape: str | TankShape, **params: float) -> TankGeometry:
    """Собрать геометрию по имени формы (``"cylindrical"``, ``"conical"``, ``"spherical"``).

    Удобно для создания бака из CLI‑аргументов или словаря настроек.

    Raises
    ------
    ValueError
        Если форма неизвестна или переданы лишние параметры.
    """
    if isinstance(shape, str):
        try:
            shape = TankShape[shape.upper()]
        except KeyError:
            raise ValueError(f"Unknown tank shape '{shape}'") from None

    cls = {
        TankShape.CYLINDRICAL: Cylindrical,
        TankShape.CONICAL: Conical,
        TankShape.SPHERICAL: Spherical,
    }[shape]
    try:
        return cls(**params)
    except TypeError as exc:
        raise ValueError(f"Bad parameters for {shape.name.lower()} tank: {exc}") from exc
