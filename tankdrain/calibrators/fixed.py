# tankdrain/calibrators/fixed.py
"""Заранее подобранная площадь отверстия с проверкой.

Для сферы площадь не ищется: берётся константа (0.15 м², подобрана для
R = 2.5 м и T = 70 с). Калибратор её *не меняет*, а только проверяет
остаток в конце интервала и сообщает фактическое время опорожнения –
первый момент, когда уровень опустился ниже ``empty_height``.
"""

from __future__ import annotations

import logging

from . import AbstractCalibrator, CalibrationResult, CalibrationStatus
from ..domain.geometry import TankGeometry
from ..errors import IntegrationError

logger = logging.getLogger(__name__)


class FixedAreaCalibrator(AbstractCalibrator):
    """Фиксированная площадь ``settings.fixed_outlet_area``."""

    name = "fixed"

    def calibrate(
        self,
        geom: TankGeometry,
        initial_height: float,
        total_time: float,
    ) -> CalibrationResult:
        s = self.settings
        area = s.fixed_outlet_area
        try:
            trajectory = self._trial_run(geom, initial_height, total_time, area)
        except IntegrationError as exc:
            logger.error("Verification run at a=%.6f failed: %s", area, exc)
            return CalibrationResult(
                status=CalibrationStatus.FAILED,
                outlet_area=None,
                final_height=None,
                iterations=1,
                reason=str(exc),
            )

        final = trajectory.final_height
        drain_time = self._drain_time(trajectory)
        logger.info("Final height at %g s: %.4f m", total_time, final)
        if drain_time is not None:
            logger.info("Tank drains in approximately %.1f s", drain_time)

        if final < s.accept_height:
            status, reason = CalibrationStatus.ACCEPTED, ""
        else:
            status = CalibrationStatus.UNVERIFIED
            reason = f"fixed area a={area:g} leaves {final:.4f} m after {total_time:g} s"
            logger.warning("Fixed outlet area not verified: %s", reason)

        return CalibrationResult(
            status=status,
            outlet_area=area,
            final_height=final,
            iterations=1,
            drain_time=drain_time,
            reason=reason,
        )
