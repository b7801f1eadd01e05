from ._distributions import (ContinuousDistribution, LogNormalModel, InvalidParameterError, OrderingError,
                             OutOfRangeError, DEFAULT_INVERSE_ABSOLUTE_ACCURACY)
from .configuration import Configuration
from .sampling import LogNormalSampler, MarsagliaNormalizedGaussianSampler
from .simulation import simulate, Simulation
from .special import erf, erf_diff
from .plotting import plot_density, plot_cumulative
