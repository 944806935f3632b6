import importlib
import math

import pytest

formulas = importlib.import_module('tankdrain.core.formulas')
ode = importlib.import_module('tankdrain.core.drainage_ode')
geometry = importlib.import_module('tankdrain.domain.geometry')
errors = importlib.import_module('tankdrain.errors')


def test_cylinder_area_is_constant(cylinder):
    assert formulas.cross_section_area(cylinder, 0.0) == pytest.approx(math.pi)
    assert formulas.cross_section_area(cylinder, 3.0) == pytest.approx(math.pi)


def test_area_vanishes_at_singular_points(cone, sphere):
    assert formulas.cross_section_area(cone, 0.0) == 0.0
    assert formulas.cross_section_area(sphere, 0.0) == 0.0
    assert formulas.cross_section_area(sphere, 5.0) == 0.0


def test_area_formulas(cone, sphere):
    # cone: pi * (R/H * h)^2, R/H = 0.4
    assert formulas.cross_section_area(cone, 2.5) == pytest.approx(math.pi * 1.0)
    # sphere equator: pi * R^2
    assert formulas.cross_section_area(sphere, 2.5) == pytest.approx(math.pi * 6.25)


def test_area_non_negative_over_range(any_tank):
    top = any_tank.max_height or 5.0
    for i in range(101):
        assert formulas.cross_section_area(any_tank, top * i / 100) >= 0.0


def test_height_out_of_range_rejected(cone, sphere):
    with pytest.raises(ValueError):
        formulas.cross_section_area(cone, -0.1)
    with pytest.raises(ValueError):
        formulas.cap_volume(sphere, 5.1)


def test_full_volumes():
    assert formulas.cap_volume(geometry.Cylindrical(radius=1.0), 5.0) == pytest.approx(math.pi * 5.0)
    assert formulas.cap_volume(geometry.Conical(radius=2.0, height=5.0), 5.0) == pytest.approx(math.pi * 4.0 * 5.0 / 3.0)
    assert formulas.cap_volume(geometry.Spherical(radius=2.5), 5.0) == pytest.approx(4.0 / 3.0 * math.pi * 2.5 ** 3)


def test_sphere_volume_branches_meet_at_equator(sphere):
    half = 2.0 / 3.0 * math.pi * 2.5 ** 3
    assert formulas.cap_volume(sphere, 2.5) == pytest.approx(half)
    assert formulas.cap_volume(sphere, 2.5 + 1e-9) == pytest.approx(half)


def test_volume_fraction(cone):
    assert formulas.volume_fraction(cone, 5.0, 5.0) == pytest.approx(1.0)
    assert formulas.volume_fraction(cone, 2.5, 5.0) == pytest.approx(0.125)
    assert formulas.volume_fraction(cone, 0.0, 5.0) == 0.0


def test_surface_radius_uses_floor(sphere, cone):
    assert formulas.surface_radius(sphere, 0.0) == pytest.approx(math.sqrt(1e-3))
    assert formulas.surface_radius(sphere, 2.5) == pytest.approx(2.5)
    assert formulas.surface_radius(cone, 5.0) == pytest.approx(2.0)


def test_height_rate_zero_when_empty(any_tank):
    assert ode.height_rate(any_tank, 0.0, 0.1) == 0.0
    assert ode.height_rate(any_tank, -0.5, 0.1) == 0.0


def test_height_rate_torricelli(cylinder):
    a = 0.05
    expected = -(a / math.pi) * math.sqrt(2 * 9.81 * 4.0)
    assert ode.height_rate(cylinder, 4.0, a) == pytest.approx(expected)


def test_height_rate_finite_at_sphere_top(sphere):
    rate = ode.height_rate(sphere, 5.0, 0.15)
    assert math.isfinite(rate)
    assert rate < 0


def test_singularity_guard(monkeypatch, cone):
    monkeypatch.setattr(ode, 'effective_area', lambda geom, h, floor: 0.0)
    with pytest.raises(errors.SingularityGuardError):
        ode.height_rate(cone, 1.0, 0.05)


def test_make_rhs_rejects_non_positive_area(cylinder):
    with pytest.raises(ValueError):
        ode.make_rhs(cylinder, 0.0)
    rhs = ode.make_rhs(cylinder, 0.05)
    assert rhs(0.0, [4.0])[0] == pytest.approx(ode.height_rate(cylinder, 4.0, 0.05))


@pytest.mark.parametrize('params', [
    {'radius': 0.0},
    {'radius': -1.0},
    {'radius': float('nan')},
])
def test_invalid_geometry(params):
    with pytest.raises(errors.InvalidGeometryError):
        geometry.Spherical(**params)
    with pytest.raises(ValueError):
        geometry.Cylindrical(**params)


def test_invalid_cone_height():
    with pytest.raises(errors.InvalidGeometryError):
        geometry.Conical(radius=2.0, height=0.0)


def test_make_geometry():
    g = geometry.make_geometry('conical', radius=2.0, height=5.0)
    assert g == geometry.Conical(radius=2.0, height=5.0)
    assert g.shape is geometry.TankShape.CONICAL
    with pytest.raises(ValueError):
        geometry.make_geometry('cubic', radius=1.0)
    with pytest.raises(ValueError):
        geometry.make_geometry('spherical', radius=1.0, height=2.0)


def test_analytic_drain_time_cylinder(cylinder):
    # T = 2 A sqrt(h0) / (a sqrt(2g))
    a = 0.05
    expected = 2 * math.pi * math.sqrt(5.0) / (a * math.sqrt(2 * 9.81))
    assert formulas.analytic_drain_time(cylinder, 5.0, a) == pytest.approx(expected)


def test_cylinder_outlet_area_formula(cylinder):
    a = formulas.cylinder_outlet_area(cylinder, 5.0, 40.0, 1.25)
    assert a == pytest.approx(1.25 * math.pi * math.sqrt(5.0) / (40.0 * math.sqrt(2 * 9.81)))
