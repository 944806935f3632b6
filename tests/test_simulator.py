import numpy as np
import pytest
import matplotlib.pyplot as plt

from tankdrain import DrainAnalyzer, DrainSimulator, DrainSettings
from tankdrain.calibrators import CalibrationStatus
from tankdrain.calibrators.search import MultiplicativeSearchCalibrator
from tankdrain.cli import demo
from tankdrain.domain.geometry import Conical, Cylindrical, Spherical
from tankdrain.domain.simulation_run import DrainParameters, check_run_inputs
from tankdrain.errors import CalibrationError
from tankdrain.visualization import plots


SCENARIOS = [
    (Cylindrical(radius=1.0), 5.0, 40.0),
    (Conical(radius=2.0, height=5.0), 5.0, 40.0),
    (Spherical(radius=2.5), 5.0, 70.0),
]


@pytest.mark.parametrize('geom, h0, total', SCENARIOS)
def test_reference_scenarios(geom, h0, total):
    report = DrainSimulator(geom, h0, total).run()
    traj = report.trajectory
    assert len(traj) == 1000
    assert traj.start_time == 0.0
    assert traj.end_time == pytest.approx(total)
    assert traj.initial_height == h0
    assert np.all(np.diff(traj.heights) <= 0.0)
    assert report.calibration.ok
    assert report.run.outlet_area == report.calibration.outlet_area
    # the animation always ends with an empty tank
    assert report.height_at(total) == 0.0


def test_cylinder_and_cone_drain_within_span():
    cyl = DrainSimulator(Cylindrical(radius=1.0), 5.0, 40.0).run()
    cone = DrainSimulator(Conical(radius=2.0, height=5.0), 5.0, 40.0, calibrator='search').run()
    assert cyl.calibration.status is CalibrationStatus.ACCEPTED
    assert cone.calibration.status is CalibrationStatus.ACCEPTED
    assert cyl.trajectory.final_height <= 0.05
    assert cone.trajectory.final_height <= 0.05


def test_failed_calibration_raises():
    sim = DrainSimulator(
        Conical(radius=2.0, height=5.0), 5.0, 40.0,
        calibrator=MultiplicativeSearchCalibrator(DrainSettings(max_iterations=1)),
    )
    assert not sim.calibrate().ok
    with pytest.raises(CalibrationError):
        sim.run()


def test_report_frame_and_summary(cone):
    report = DrainSimulator(cone, 5.0, 40.0).run()
    df = report.to_frame()
    assert list(df.columns) == ['t, с', 'h, м', 'V, м³', 'V, %']
    assert df['V, %'].iloc[0] == pytest.approx(100.0)
    assert df['V, %'].iloc[-1] == pytest.approx(0.0)

    summary = report.summary()
    assert summary['shape'] == 'conical'
    assert summary['calibration'] == str(CalibrationStatus.ACCEPTED)
    assert summary['total_time'] == 40.0
    assert summary['drain_time'] is not None


@pytest.mark.parametrize('h0, total', [(0.0, 40.0), (-1.0, 40.0), (6.0, 40.0), (5.0, 0.0)])
def test_run_inputs_checked(cone, h0, total):
    with pytest.raises(ValueError):
        check_run_inputs(cone, h0, total)
    with pytest.raises(ValueError):
        DrainSimulator(cone, h0, total)


def test_open_cylinder_accepts_any_height():
    check_run_inputs(Cylindrical(radius=1.0), 50.0, 10.0)


def test_drain_parameters():
    assert DrainParameters(outlet_area=0.1).gravity == 9.81
    with pytest.raises(ValueError):
        DrainParameters(outlet_area=0.0)


def test_settings_validation():
    with pytest.raises(ValueError):
        DrainSettings(coarse_step=1.0)
    with pytest.raises(ValueError):
        DrainSettings(accept_height=0.6, coarse_height=0.5)
    with pytest.raises(ValueError):
        DrainSettings(grid_points=1)
    with pytest.raises(ValueError):
        DrainSettings.from_mapping({'accept_hieght': 0.1})
    assert DrainSettings.from_mapping({'max_iterations': 5}).max_iterations == 5


def test_analyzer_defaults_to_full_tank(sphere):
    analyzer = DrainAnalyzer(sphere, total_time=70.0)
    assert analyzer.h0 == 5.0
    with pytest.raises(ValueError):
        DrainAnalyzer(Cylindrical(radius=1.0), total_time=40.0)


def test_analyzer_plots(monkeypatch, cone):
    shown = []
    monkeypatch.setattr(plt, 'show', lambda *a, **k: shown.append(True))

    analyzer = DrainAnalyzer(cone, total_time=40.0)
    report = analyzer.simulate()
    assert len(analyzer.table(report)) == 1000

    analyzer.plot_height(report)
    analyzer.plot_volume(report)
    anim = analyzer.animate(report)
    assert anim is not None
    assert len(shown) == 3
    plt.close('all')


def test_animation_frames_sample_the_report(monkeypatch, cylinder):
    monkeypatch.setattr(plt, 'show', lambda *a, **k: None)
    report = DrainSimulator(cylinder, 5.0, 40.0).run()
    seen = []
    original = report.sampler.height_at
    monkeypatch.setattr(report.sampler, 'height_at', lambda t: seen.append(t) or original(t))

    anim = plots.animate(report, fps=2)
    seen.clear()
    anim._func(0)
    anim._func(200)
    assert seen == [0.0, 40.0]
    plt.close('all')


def test_demo_prints_summary(capsys):
    demo.main(['conical'])
    out = capsys.readouterr().out
    assert 'Calculated hole size' in out
    assert 'Final height at 40 seconds' in out


def test_demo_sphere_reports_residual(capsys):
    demo.main(['spherical', '--calibrator', 'fixed'])
    out = capsys.readouterr().out
    assert 'Calculated hole size: 0.150000' in out
    assert 'does not fully drain' in out
