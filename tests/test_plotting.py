import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import pytest

from screenot import adaptive_hard_thresholding
from screenot.simulation.noise import spiked_matrix
from screenot.visualization.plotting import plot_functional, plot_scree


@pytest.fixture(scope="module")
def result():
    Y, _ = spiked_matrix((60, 120), [8.0, 5.0], rng=9)
    return adaptive_hard_thresholding(Y, 5)

@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


def test_plot_scree_result(result):
    ax = plot_scree(result)
    points, line = ax.lines
    np.testing.assert_allclose(points.get_ydata(), result.singular_values)
    np.testing.assert_allclose(line.get_ydata(), [result.Topt, result.Topt])

def test_plot_scree_array_on_axes():
    _, ax = plt.subplots()
    values = np.array([0.1, 3.0, 1.0])
    out = plot_scree(values, threshold=0.5, ax=ax, log=True)
    assert out is ax
    np.testing.assert_allclose(ax.lines[0].get_ydata(), [3.0, 1.0, 0.1])
    assert ax.get_yscale() == "log"

def test_plot_scree_without_threshold():
    ax = plot_scree(np.array([2.0, 1.0]))
    assert len(ax.lines) == 1

def test_plot_functional(result):
    ax = plot_functional(result.pseudo_noise, result.gamma, n_points=50)
    curve, target = ax.lines
    ys = curve.get_xdata()
    assert ys.size == 50
    assert np.all(ys > result.pseudo_noise.max())
    assert np.all(np.isfinite(curve.get_ydata()))
    np.testing.assert_allclose(target.get_ydata(), [-4.0, -4.0])

def test_plot_functional_range_check(result):
    with pytest.raises(ValueError):
        plot_functional(result.pseudo_noise, result.gamma, y_max=0.0)
