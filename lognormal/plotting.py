from __future__ import annotations

import matplotlib.pyplot as plt
import numpy as np

from ._distributions import LogNormalModel
from .util import fmp

color_model = (0.55, 0.55, 0.69)
color_data = [0.6, 0.6, 0.6]

FONTSIZE = dict(
    label=14,
    xlabel=14,
    ylabel=14,
    tick=11,
    title=14
)


def _x_range(model, samples=None, quantiles=(0.001, 0.995), npoints=500):
    lo, hi = model.inverse_cumulative_probability(quantiles)
    if samples is not None:
        hi = max(hi, np.quantile(samples, quantiles[1]))
    return np.linspace(lo, hi, npoints)


def _label(model):
    return rf'$m={fmp(model.scale)},\ s={fmp(model.shape)}$'


def plot_density(model: LogNormalModel, samples: np.ndarray | None = None, ax=None, nbins: int = 100,
                 xlim: tuple | None = None, label: str | None = None):
    """
    Plot the probability density function, optionally overlaid on a histogram of samples.

    Args:
        model: `lognormal.LogNormalModel` instance
        samples: (optional) samples to show as a density-normalized histogram
        ax: (optional) matplotlib axis; a new figure is created if None
        nbins: number of histogram bins
        xlim: (optional) x-axis range; defaults to the central 99.4% of the distribution
        label: (optional) legend label of the model curve

    Returns: the matplotlib axis
    """
    if ax is None:
        ax = plt.figure(figsize=(6, 4)).gca()

    x = np.linspace(*xlim, 500) if xlim is not None else _x_range(model, samples)
    if samples is not None:
        samples = np.asarray(samples)
        ax.hist(samples[(samples >= x[0]) & (samples <= x[-1])], bins=nbins, density=True, color=color_data,
                label='Samples')
    ax.plot(x, model.density(x), color=color_model, lw=2, label=_label(model) if label is None else label)

    ax.set_xlim(x[0], x[-1])
    ax.set_xlabel('x', fontsize=FONTSIZE['xlabel'])
    ax.set_ylabel('Density', fontsize=FONTSIZE['ylabel'])
    ax.tick_params(labelsize=FONTSIZE['tick'])
    ax.legend(frameon=False)
    return ax


def plot_cumulative(model: LogNormalModel, samples: np.ndarray | None = None, ax=None, xlim: tuple | None = None,
                    label: str | None = None):
    """
    Plot the cumulative distribution function, optionally with the empirical CDF of samples.

    Args:
        model: `lognormal.LogNormalModel` instance
        samples: (optional) samples to show as an empirical CDF
        ax: (optional) matplotlib axis; a new figure is created if None
        xlim: (optional) x-axis range; defaults to the central 99.4% of the distribution
        label: (optional) legend label of the model curve

    Returns: the matplotlib axis
    """
    if ax is None:
        ax = plt.figure(figsize=(6, 4)).gca()

    x = np.linspace(*xlim, 500) if xlim is not None else _x_range(model, samples)
    if samples is not None:
        samples_sorted = np.sort(np.asarray(samples))
        ecdf = np.arange(1, len(samples_sorted) + 1) / len(samples_sorted)
        ax.step(samples_sorted, ecdf, where='post', color=color_data, lw=3, label='Samples')
    ax.plot(x, model.cumulative_probability(x), color=color_model, lw=2,
            label=_label(model) if label is None else label)

    ax.set_xlim(x[0], x[-1])
    ax.set_ylim(0, 1.02)
    ax.set_xlabel('x', fontsize=FONTSIZE['xlabel'])
    ax.set_ylabel('Cumulative probability', fontsize=FONTSIZE['ylabel'])
    ax.tick_params(labelsize=FONTSIZE['tick'])
    ax.legend(frameon=False)
    return ax
