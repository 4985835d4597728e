import matplotlib.pyplot as plt
from matplotlib import rcParams
import numpy as np

from screenot import adaptive_hard_thresholding
from screenot.analysis.marchenko_pastur import bulk_edge, optimal_white_noise_threshold
from screenot.simulation.noise import correlated_noise, spiked_matrix, white_noise
from screenot.visualization.plotting import plot_functional, plot_scree

def plot_params():
    rcParams['font.size'] = 12
    rcParams['lines.linewidth'] = 1
    rcParams['axes.linewidth'] = 1.5
    rcParams['axes.labelsize'] = 14
    rcParams['legend.frameon'] = False
    rcParams['xtick.minor.visible'] = True
    rcParams['ytick.minor.visible'] = True
    rcParams['figure.figsize'] = (6, 4)

plot_params()


def white_noise_demo(n: int = 1000, k: int = 10, seed: int = 0):
    # Y is an n x n i.i.d. Gaussian matrix, scaled so the bulk ends at 2.
    Y = white_noise((n, n), rng=seed)
    result = adaptive_hard_thresholding(Y, k)
    print(result.summary())
    print('Computed threshold: ', result.Topt)
    print('Known optimal threshold: ', 4 / np.sqrt(3))
    print('Bulk edge: ', bulk_edge(1.0))
    return result

def correlated_noise_demo(shape=(500, 1000), k: int = 20, seed: int = 1):
    rng = np.random.default_rng(seed)
    noise = correlated_noise(shape, rho=0.6, rng=rng)
    spikes = np.array([6.0, 4.0, 3.0, 2.5, 1.5])
    Y, X = spiked_matrix(shape, spikes, noise=noise, rng=rng)

    result = adaptive_hard_thresholding(Y, k)
    gamma = min(shape) / max(shape)
    print(result.summary(style='technical'))
    print('White-noise threshold (would be wrong here): ', optimal_white_noise_threshold(gamma))

    error = np.linalg.norm(result.Xest - X) ** 2
    print('Squared Frobenius error of the estimate: ', error)
    return result

if __name__ == "__main__":
    res_white = white_noise_demo()
    res_corr = correlated_noise_demo()

    fig, axes = plt.subplots(1, 3, figsize=(15, 4), layout='constrained')
    plot_scree(res_white, ax=axes[0], markersize=2)
    plot_scree(res_corr, ax=axes[1], markersize=2, log=True)
    plot_functional(res_corr.pseudo_noise, res_corr.gamma, ax=axes[2])
    axes[2].set_ylim((-10, 0))
    plt.show()
