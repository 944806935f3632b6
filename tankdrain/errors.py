# tankdrain/errors.py
"""Иерархия исключений пакета.

Все ошибки наследуют :class:`TankDrainError`, а также подходящий
встроенный класс, чтобы вызывающий код мог ловить их привычным
``except ValueError`` / ``except RuntimeError``.
"""

from __future__ import annotations


class TankDrainError(Exception):
    """Base class for all tankdrain errors."""


class InvalidGeometryError(TankDrainError, ValueError):
    """Нулевые, отрицательные или нечисловые параметры формы бака."""


class SingularityGuardError(TankDrainError, ArithmeticError):
    """Площадь зеркала ≤ 0 при положительном уровне.

    Означает дефект геометрической модели, поэтому не «лечится»
    обрезкой, а поднимается наверх.
    """


class IntegrationError(TankDrainError, RuntimeError):
    """Решатель не смог выдержать заданные допуски."""


class CalibrationError(TankDrainError, RuntimeError):
    """Подбор площади отверстия завершился неудачей."""
