from __future__ import annotations

import numpy as np

from .configuration import Configuration
from ._distributions import LogNormalModel
from .util import descriptive_statistics, print_sample_characteristics


def simulate(
    scale: float = None,
    shape: float = None,
    nsamples: int = None,
    random_state=None,
    cfg: Configuration = None,
    compute_stats: bool = True,
    silence_warnings: bool = False,
    verbosity: int = None,
    **kwargs
) -> Simulation:
    """
    Simulate log-normally distributed samples

    Usage:
        `sim = simulate(scale=0, shape=1)`

        `sim = simulate(scale=0, shape=1, nsamples=500, random_state=2)`

        `sim = simulate(cfg=cfg)`

    Args:
        scale: mean of ln(X); overrides the configuration value
        shape: standard deviation of ln(X); overrides the configuration value
        nsamples: number of samples; overrides the configuration value
        random_state: seed or numpy Generator; overrides the configuration value
        cfg: `lognormal.configuration.Configuration` instance
        compute_stats: if `True`, compute descriptive statistics of the samples
        silence_warnings: if `True`, silences configuration warnings
        verbosity: verbosity level (possible values: 0, 1); overrides the configuration value
        **kwargs: extra arguments will be passed to the configuration

    Returns: a `lognormal.simulation.Simulation` instance
    """

    if cfg is None:
        cfg_kwargs = {k: v for k, v in kwargs.items() if k in Configuration.__dataclass_fields__}
        cfg = Configuration(**cfg_kwargs)
    for k, v in dict(scale=scale, shape=shape, nsamples=nsamples, random_state=random_state,
                     verbosity=verbosity).items():
        if v is not None:
            setattr(cfg, k, v)
    cfg.setup(silence_warnings=silence_warnings or None)

    model = cfg.build_model()
    samples = model.create_sampler(cfg.random_state).samples(cfg.nsamples)

    sim = Simulation(
        nsamples=cfg.nsamples,
        model=model,
        cfg=cfg,
        samples=samples
    )
    if compute_stats:
        sim.stats = descriptive_statistics(sim.samples, log_samples=sim.log_samples)
        if cfg.verbosity:
            print_sample_characteristics(sim)

    return sim


class Simulation:
    """Class to store simulated data.
    This class is created by `lognormal.simulation.simulate()`. Manual creation is discouraged.

    Args:
        nsamples: Number of samples
        model: `lognormal.LogNormalModel` the samples were drawn from
        cfg: `lognormal.configuration.Configuration` instance
        samples: simulated samples
        stats: descriptive statistics of the samples
    """

    def __init__(self,
        nsamples: int = None,
        model: LogNormalModel = None,
        cfg: Configuration = None,
        samples: np.ndarray = None,
        stats: dict = None
    ):
        self.nsamples = nsamples
        self.model = model
        self.cfg = cfg
        self.samples = samples
        self.log_samples = None if samples is None else np.log(samples)
        self.stats = stats

    def __repr__(self):
        return f'{self.__class__.__name__}(nsamples={self.nsamples}, model={self.model!r})'
