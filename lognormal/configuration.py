import warnings
from dataclasses import dataclass

import numpy as np

from ._distributions import DEFAULT_INVERSE_ABSOLUTE_ACCURACY, InvalidParameterError, LogNormalModel
from .util import ReprMixin


@dataclass
class Configuration(ReprMixin):
    """
    Configuration for the lognormal toolbox

    Parameters
    ----------
    *** Distribution parameters ***
    scale : float (default: 0)
        Mean of the underlying normal distribution of ln(X). Any real number.
    shape : float (default: 1)
        Standard deviation of the underlying normal distribution of ln(X). Must be strictly positive.

    *** Numerical settings ***
    inverse_accuracy : float (default: 1e-9)
        Absolute accuracy of the root finder that inverts the cumulative distribution function.

    *** Sampling ***
    random_state : int, numpy.random.Generator or None (default: None)
        Seed or generator for the uniform random source of samplers built from this configuration.
    nsamples : int (default: 100000)
        Number of samples drawn by `lognormal.simulation.simulate`.

    *** Other ***
    verbosity : int (default: 1)
        0: silent; 1: print a summary of simulated samples.
    silence_configuration_warnings : bool (default: False)
        If True, ignore warnings about user-specified settings.
    """

    scale: float = 0.0
    shape: float = 1.0
    inverse_accuracy: float = DEFAULT_INVERSE_ABSOLUTE_ACCURACY
    random_state: object = None
    nsamples: int = 100000
    verbosity: int = 1
    silence_configuration_warnings: bool = False

    _nsamples_reliable_min = 1000

    def setup(self, silence_warnings=None):
        silence_warnings = self.silence_configuration_warnings if silence_warnings is None else silence_warnings

        if not self.shape > 0:
            raise InvalidParameterError('shape', self.shape)
        if not np.isfinite(self.scale):
            raise ValueError(f'scale must be a finite number, got {self.scale}')
        if self.nsamples < 1:
            raise ValueError(f'nsamples must be a positive integer, got {self.nsamples}')

        if not silence_warnings:
            if not self.inverse_accuracy > 0:
                warnings.warn(f'inverse_accuracy={self.inverse_accuracy} is not positive. Inverting the cumulative '
                              f'distribution function will fail with this setting.')
            if self.nsamples < self._nsamples_reliable_min:
                warnings.warn(f'Only {self.nsamples} samples are drawn. Descriptive statistics of the simulated '
                              f'samples may deviate considerably from the closed-form moments.')
        return self

    def build_model(self):
        return LogNormalModel(self.scale, self.shape, self.inverse_accuracy)

    def build_sampler(self):
        return self.build_model().create_sampler(self.random_state)
