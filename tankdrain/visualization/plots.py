# tankdrain/visualization/plots.py
"""Мини‑обёртки над matplotlib для отображения результатов расчёта.

Статические графики строятся *интерактивно* (``plt.show()``) и ничего не
возвращают, чтобы API оставался простым. Анимация – внешний потребитель
траектории: на каждом кадре (~30 Гц) она лишь спрашивает у сэмплера
уровень в текущий момент и перерисовывает силуэт бака.
"""

from __future__ import annotations

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation

from ..core.drain_simulator import SimulationReport
from ..core.formulas import surface_radius, volume_fraction
from ..domain.geometry import TankGeometry

FPS = 30

# ---------------------------------------------------------------------------
# 1) Уровень во времени
# ---------------------------------------------------------------------------


def plot_height(report: SimulationReport) -> None:
    """Кривая h(t) + порог приёмки калибровки."""
    traj = report.trajectory
    plt.plot(traj.times, traj.heights)
    plt.axhline(
        report.sampler.settings.accept_height, ls="--", color="red", label="порог приёмки"
    )
    plt.title(
        f"Опорожнение бака ({report.run.geometry.shape}), a = {report.run.outlet_area:.4f} м²"
    )
    plt.xlabel("t, с")
    plt.ylabel("h, м")
    plt.grid(True)
    plt.legend()
    plt.show()

# ---------------------------------------------------------------------------
# 2) Оставшийся объём в процентах
# ---------------------------------------------------------------------------


def plot_volume(report: SimulationReport) -> None:
    """Процент оставшегося объёма по времени."""
    df = report.to_frame()
    plt.plot(df["t, с"], df["V, %"])
    plt.title("Оставшийся объём жидкости")
    plt.xlabel("t, с")
    plt.ylabel("V, %")
    plt.ylim(0, 105)
    plt.grid(True)
    plt.show()

# ---------------------------------------------------------------------------
# 3) Анимация в реальном времени
# ---------------------------------------------------------------------------


def _profile(geom: TankGeometry, top: float, n: int = 60) -> tuple[np.ndarray, np.ndarray]:
    """Правая половина силуэта бака от дна до уровня *top*: (r, h)."""
    hs = np.linspace(0.0, top, n)
    rs = np.array([surface_radius(geom, h) for h in hs])
    return rs, hs


def animate(report: SimulationReport, fps: int = FPS) -> FuncAnimation:
    """Воспроизвести опорожнение в реальном времени.

    Кадры идут с интервалом ``1000 / fps`` мс, симулированное время кадра
    равно ``i / fps``; после ``T`` уровень по сэмплеру ровно ноль.
    """
    geom = report.run.geometry
    h0 = report.run.initial_height
    total = report.run.total_time
    h_top = geom.max_height or h0

    fig, ax = plt.subplots(figsize=(6, 8))
    r_out, h_out = _profile(geom, h_top)
    ax.plot(np.concatenate([-r_out[::-1], r_out]), np.concatenate([h_out[::-1], h_out]), "k-", lw=2)
    ax.set_xlim(-1.2 * r_out.max(), 1.2 * r_out.max())
    ax.set_ylim(-0.5, h_top + 0.5)
    ax.set_aspect("equal")
    ax.grid(True)
    ax.set_xlabel("r, м")
    ax.set_ylabel("h, м")

    water = ax.fill([0.0], [0.0], color=(0.0, 0.5, 0.8))[0]
    label = ax.text(0.0, 0.5 * h_top, "", ha="center", fontsize=14, fontweight="bold")

    def update(frame: int):
        t = min(frame / fps, total)
        h = report.height_at(t)
        if h > 0:
            rs, hs = _profile(geom, h)
            water.set_xy(np.column_stack([np.concatenate([-rs[::-1], rs]), np.concatenate([hs[::-1], hs])]))
        else:
            water.set_xy(np.zeros((1, 2)))
        label.set_text(f"{100.0 * volume_fraction(geom, h, h0):.1f}%")
        ax.set_title(f"Опорожнение бака: {t:.1f} с")
        return water, label

    frames = int(np.ceil(total * fps)) + 1
    anim = FuncAnimation(fig, update, frames=frames, interval=1000.0 / fps, blit=False, repeat=False)
    plt.show()
    return anim
