import importlib
import pytest

def test_import_screenot():
    import screenot  # noqa

@pytest.mark.parametrize("mod", [
    "screenot.errors",
    "screenot.thresholding.pseudo_noise",
    "screenot.thresholding.functionals",
    "screenot.thresholding.solver",
    "screenot.thresholding.adaptive",
    "screenot.analysis.marchenko_pastur",
    "screenot.simulation.noise",
])
def test_import_module(mod):
    importlib.import_module(mod)

@pytest.mark.parametrize("name", [
    "adaptive_hard_thresholding",
    "adaptive_hard_thresholding_svd",
    "optimal_threshold",
    "ThresholdResult",
    "SolverOptions",
])
def test_lazy_exports(name):
    import screenot
    assert getattr(screenot, name) is not None

def test_unknown_attribute():
    import screenot
    with pytest.raises(AttributeError):
        screenot.does_not_exist
