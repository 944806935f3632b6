# tankdrain/calibrators/search.py
"""Мультипликативный поиск площади отверстия.

Для конуса (как и для любой формы без замкнутой формулы) площадь
подбирается пробными прогонами ОДУ. Автомат одного состояния
«поиск» с правилом перехода после каждого прогона:

* h(T) < accept_height              → **приём**, площадь окончательная;
* h(T) > coarse_height              → a ×= coarse_step (грубо, +20 %);
* иначе                             → a ×= fine_step  (точно, +10 %).

Площадь только растёт, а с ростом площади остаток h(T) монотонно
убывает, поэтому поиск сходится. Тем не менее число прогонов и (по
желанию) время на стенных часах ограничены: превышение лимита даёт
результат ``FAILED``, а не бесконечный цикл.
"""

from __future__ import annotations

import logging
import time

from . import AbstractCalibrator, CalibrationResult, CalibrationStatus
from ..domain.geometry import TankGeometry
from ..errors import IntegrationError

logger = logging.getLogger(__name__)


class MultiplicativeSearchCalibrator(AbstractCalibrator):
    """Монотонный поиск *a* с ограничением числа итераций."""

    name = "search"

    def calibrate(
        self,
        geom: TankGeometry,
        initial_height: float,
        total_time: float,
    ) -> CalibrationResult:
        s = self.settings
        area = s.search_start_area
        started = time.monotonic()
        logger.info("Searching outlet area for %s tank, start a=%.6f m²", geom.shape, area)

        for iteration in range(1, s.max_iterations + 1):
            try:
                trajectory = self._trial_run(geom, initial_height, total_time, area)
            except IntegrationError as exc:
                logger.error("Trial run %d at a=%.6f failed: %s", iteration, area, exc)
                return self._failure(iteration, f"integration failed at a={area:.6g}: {exc}")

            final = trajectory.final_height
            logger.debug("iter=%4d a=%.6f h_end=%.4f", iteration, area, final)

            if final < s.accept_height:
                logger.info(
                    "Calculated outlet area: %.6f m² after %d runs (h_end=%.4f m)",
                    area,
                    iteration,
                    final,
                )
                return CalibrationResult(
                    status=CalibrationStatus.ACCEPTED,
                    outlet_area=area,
                    final_height=final,
                    iterations=iteration,
                    drain_time=self._drain_time(trajectory),
                )

            area *= s.coarse_step if final > s.coarse_height else s.fine_step

            if s.search_time_limit is not None and time.monotonic() - started > s.search_time_limit:
                return self._failure(
                    iteration,
                    f"time limit {s.search_time_limit:g} s exceeded, last a={area:.6g}",
                )

        return self._failure(
            s.max_iterations,
            f"no acceptable area within {s.max_iterations} iterations, last a={area:.6g}",
        )

    @staticmethod
    def _failure(iterations: int, reason: str) -> CalibrationResult:
        logger.warning("Outlet area search did not converge: %s", reason)
        return CalibrationResult(
            status=CalibrationStatus.FAILED,
            outlet_area=None,
            final_height=None,
            iterations=iterations,
            reason=reason,
        )
