import importlib
import os
import sys
import pytest

os.environ.setdefault('MPLBACKEND', 'Agg')

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

geometry_mod = importlib.import_module('tankdrain.domain.geometry')
DrainSettings = importlib.import_module('tankdrain.domain.drain_settings').DrainSettings

@pytest.fixture
def cylinder():
    return geometry_mod.Cylindrical(radius=1.0)

@pytest.fixture
def cone():
    return geometry_mod.Conical(radius=2.0, height=5.0)

@pytest.fixture
def sphere():
    return geometry_mod.Spherical(radius=2.5)

@pytest.fixture(params=['cylinder', 'cone', 'sphere'])
def any_tank(request):
    return request.getfixturevalue(request.param)

@pytest.fixture
def settings():
    return DrainSettings()
