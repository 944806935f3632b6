# tankdrain/core/integrator.py
"""Численное интегрирование ОДУ истечения.

Используется :func:`scipy.integrate.solve_ivp` с методом ``RK45``
(вложенная пара Дормана–Принса 4(5)) и автоматическим выбором шага.
Основная трудность – окрестность h = 0: правая часть ведёт себя как √h
(у конуса и сферы ещё и делится на малую площадь), поэтому шаг у дна
должен уменьшаться сам, а не задаваться сеткой.

Два режима:
* без ``t_eval`` – возвращаются собственные шаги решателя (калибровка);
* с ``t_eval`` – значения на фиксированной плотной сетке (итоговый
  расчёт для сэмплера).

Как только уровень достигает нуля, срабатывает терминальное событие;
остаток интервала дополняется точными нулями, так что траектория
всегда заканчивается в t = T.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
from scipy.integrate import solve_ivp

from ..constants import DEFAULT_ATOL, DEFAULT_RTOL, MAX_TOLERANCE
from ..errors import IntegrationError
from .drainage_ode import OdeFn
from .trajectory import Trajectory

logger = logging.getLogger(__name__)


def _empty_event(t: float, y: Sequence[float]) -> float:
    return y[0]


_empty_event.terminal = True
_empty_event.direction = -1


def integrate(
    ode_fn: OdeFn,
    t_span: tuple[float, float],
    h0: float,
    rtol: float = DEFAULT_RTOL,
    atol: float = DEFAULT_ATOL,
    t_eval: Sequence[float] | np.ndarray | None = None,
) -> Trajectory:
    """Проинтегрировать ``dh/dt = ode_fn(t, h)`` от *h0* на интервале *t_span*.

    Parameters
    ----------
    ode_fn : callable
        Правая часть в форме ``f(t, y) -> [dh/dt]``.
    t_span : (float, float)
        Начало и конец интервала, с.
    h0 : float
        Начальный уровень, м (≥ 0).
    rtol, atol : float
        Допуски решателя; грубее ``MAX_TOLERANCE`` не допускаются.
    t_eval : array‑like, optional
        Фиксированная сетка вывода. Должна начинаться в ``t_span[0]``
        и заканчиваться в ``t_span[1]``.

    Raises
    ------
    ValueError
        Некорректный интервал, уровень, допуски или сетка.
    IntegrationError
        Решатель не смог выдержать допуски (например, шаг «схлопнулся»).
    """
    t0, t1 = float(t_span[0]), float(t_span[1])
    if not t1 > t0:
        raise ValueError(f"Empty or reversed time span ({t0}, {t1})")
    if h0 < 0:
        raise ValueError(f"Initial height must be non-negative, got {h0!r}")
    if not (0 < rtol <= MAX_TOLERANCE and 0 < atol <= MAX_TOLERANCE):
        raise ValueError(
            f"Tolerances rtol={rtol}, atol={atol} must lie in (0, {MAX_TOLERANCE}]"
        )

    grid = None
    if t_eval is not None:
        grid = np.asarray(t_eval, dtype=float)
        if grid.ndim != 1 or len(grid) < 2:
            raise ValueError("t_eval must be a one-dimensional grid of two or more points")
        if not (np.isclose(grid[0], t0) and np.isclose(grid[-1], t1)):
            raise ValueError("t_eval must start and end at the span boundaries")

    if h0 == 0:
        # Пустой бак так и остаётся пустым
        times = grid if grid is not None else np.array([t0, t1])
        return Trajectory(times=times, heights=np.zeros(len(times)))

    sol = solve_ivp(
        ode_fn,
        (t0, t1),
        [float(h0)],
        method="RK45",
        t_eval=grid,
        events=_empty_event,
        rtol=rtol,
        atol=atol,
    )
    if sol.status == -1:
        raise IntegrationError(f"RK45 failed on ({t0}, {t1}) from h0={h0}: {sol.message}")

    times = np.asarray(sol.t, dtype=float)
    # Перелёт ниже нуля на последнем шаге – допустимая погрешность, а не ошибка
    heights = np.clip(np.asarray(sol.y[0], dtype=float), 0.0, None)

    if sol.status == 1:
        t_empty = float(sol.t_events[0][0])
        logger.debug("Tank emptied at t=%.4f s of %.4f s", t_empty, t1)
        times, heights = _pad_empty(times, heights, grid, t1)

    # Плотный вывод RK45 может дрожать на уровне допуска – уровень не растёт
    heights = np.minimum.accumulate(heights)

    logger.debug(
        "integrate: %d samples, h(%.3f)=%.6f, nfev=%d",
        len(times),
        times[-1],
        heights[-1],
        sol.nfev,
    )
    return Trajectory(times=times, heights=heights)


def _pad_empty(
    times: np.ndarray,
    heights: np.ndarray,
    grid: np.ndarray | None,
    t_end: float,
) -> tuple[np.ndarray, np.ndarray]:
    """Дополнить траекторию нулями от момента опорожнения до конца интервала."""
    if grid is None:
        # Последняя точка решателя – момент события; фиксируем точный ноль
        if len(times) > 1 and times[-1] <= times[-2]:
            times, heights = times[:-1], heights[:-1]
        heights = heights.copy()
        heights[-1] = 0.0
        if times[-1] < t_end:
            times = np.append(times, t_end)
            heights = np.append(heights, 0.0)
        return times, heights

    rest = grid[len(times):]
    return (
        np.concatenate([times, rest]),
        np.concatenate([heights, np.zeros(len(rest))]),
    )
