# tankdrain/calibrators/closed_form.py
"""Площадь отверстия цилиндра по замкнутой формуле.

Для цилиндра площадь зеркала постоянна, и оценка получается сразу:

    a = k · A · √h0 / (T · √(2g)),  k = 1.25.

Затем одна проверка ОДУ. Если к концу интервала остаётся больше порога
приёмки, оценка один раз усиливается множителем эскалации (1.5) и
проверяется повторно. Больше итераций нет: это ограниченный запасной
ход, а не поиск.
"""

from __future__ import annotations

import logging

from . import AbstractCalibrator, CalibrationResult, CalibrationStatus
from ..core.formulas import cylinder_outlet_area
from ..domain.geometry import Cylindrical, TankGeometry
from ..errors import IntegrationError

logger = logging.getLogger(__name__)


class ClosedFormCalibrator(AbstractCalibrator):
    """Замкнутая формула + не более одной эскалации."""

    name = "closed_form"

    def calibrate(
        self,
        geom: TankGeometry,
        initial_height: float,
        total_time: float,
    ) -> CalibrationResult:
        if not isinstance(geom, Cylindrical):
            raise TypeError(
                f"Closed-form sizing applies to cylindrical tanks only, got {type(geom).__name__}"
            )
        s = self.settings

        area = cylinder_outlet_area(geom, initial_height, total_time, s.closed_form_factor)
        iterations = 0
        try:
            trajectory = self._trial_run(geom, initial_height, total_time, area)
            iterations += 1
            logger.info(
                "Closed-form outlet area %.6f m² (k=%.2f) leaves %.4f m",
                area,
                s.closed_form_factor,
                trajectory.final_height,
            )

            if trajectory.final_height > s.accept_height:
                area *= s.escalation_factor
                trajectory = self._trial_run(geom, initial_height, total_time, area)
                iterations += 1
                logger.info(
                    "Escalated outlet area to %.6f m² (x%.2f), final height %.4f m",
                    area,
                    s.escalation_factor,
                    trajectory.final_height,
                )
        except IntegrationError as exc:
            logger.error("Closed-form verification failed: %s", exc)
            return CalibrationResult(
                status=CalibrationStatus.FAILED,
                outlet_area=None,
                final_height=None,
                iterations=iterations,
                reason=str(exc),
            )

        final = trajectory.final_height
        if final <= s.accept_height:
            status, reason = CalibrationStatus.ACCEPTED, ""
        else:
            status = CalibrationStatus.UNVERIFIED
            reason = f"{final:.4f} m left after escalation"
            logger.warning("Cylinder not drained within %.1f s: %s", total_time, reason)

        return CalibrationResult(
            status=status,
            outlet_area=area,
            final_height=final,
            iterations=iterations,
            drain_time=self._drain_time(trajectory),
            reason=reason,
        )
