import numpy as np
from scipy.optimize import brentq

from .sampling import LogNormalSampler, as_random_source
from .special import erf, erf_diff

DEFAULT_INVERSE_ABSOLUTE_ACCURACY = 1e-9

SQRT2PI = np.sqrt(2 * np.pi)
SQRT2 = np.sqrt(2.0)
HALF_LOG_2PI = 0.5 * np.log(2 * np.pi)

# Beyond this many shape-widths from the scale the CDF is within the smallest positive double of 0 or 1
TAIL_SATURATION_SHAPE_WIDTHS = 40


class InvalidParameterError(ValueError):
    """A distribution parameter is outside its domain."""

    def __init__(self, name, value):
        self.name = name
        self.value = value
        super().__init__(f'{name} must be strictly positive, got {value}')


class OrderingError(ValueError):
    """The lower endpoint of an interval lies above the upper endpoint."""

    def __init__(self, lower, upper):
        self.lower = lower
        self.upper = upper
        super().__init__(f'Lower endpoint ({lower}) must be less than or equal to upper endpoint ({upper})')


class OutOfRangeError(ValueError):
    """A value lies outside the closed interval [low, high]."""

    def __init__(self, name, value, low, high):
        self.name = name
        self.value = value
        self.low = low
        self.high = high
        super().__init__(f'{name} = {value} is out of range [{low}, {high}]')


def _scalar_or_array(out):
    return out[()] if out.ndim == 0 else out


class ContinuousDistribution:
    """
    Generic behaviour shared by continuous univariate distributions.

    Subclasses implement `density`, `log_density`, `cumulative_probability`, `mean`, `variance`, the support bounds
    and `create_sampler`. This base class provides the interval probability as a difference of two CDF values, the
    inverse CDF by root finding, sampling of many values and the scipy-style aliases (pdf, logpdf, cdf, ppf, rvs).
    """

    inverse_accuracy = DEFAULT_INVERSE_ABSOLUTE_ACCURACY

    def density(self, x):
        raise NotImplementedError

    def log_density(self, x):
        raise NotImplementedError

    def cumulative_probability(self, x):
        raise NotImplementedError

    def probability(self, x0, x1):
        x0 = np.asarray(x0, dtype=np.float64)
        x1 = np.asarray(x1, dtype=np.float64)
        if np.any(x0 > x1):
            raise OrderingError(_scalar_or_array(x0), _scalar_or_array(x1))
        return self.cumulative_probability(x1) - self.cumulative_probability(x0)

    def mean(self):
        raise NotImplementedError

    def variance(self):
        raise NotImplementedError

    def std(self):
        return np.sqrt(self.variance())

    def support_lower_bound(self):
        raise NotImplementedError

    def support_upper_bound(self):
        raise NotImplementedError

    def is_support_connected(self):
        raise NotImplementedError

    def create_sampler(self, random_source=None):
        raise NotImplementedError

    def inverse_cumulative_probability(self, p):
        """
        Quantile function, found by bracketing and solving cdf(x) = p with Brent's method.

        Parameters
        ----------
        p : float or array-like
            Cumulative probability in [0, 1].

        Returns
        ----------
        x : float or ndarray
            Smallest x with cdf(x) >= p, up to `inverse_accuracy`.
        """
        p = np.asarray(p, dtype=np.float64)
        invalid = ~((p >= 0) & (p <= 1))
        if np.any(invalid):
            raise OutOfRangeError('p', _scalar_or_array(p[invalid] if p.ndim else p), 0, 1)
        out = np.vectorize(self._inverse_cumulative_probability, otypes=[np.float64])(p)
        return _scalar_or_array(np.asarray(out))

    def _inverse_cumulative_probability(self, p):
        lower = self.support_lower_bound()
        if p == 0:
            return lower
        upper = self.support_upper_bound()
        if p == 1:
            return upper

        mu = self.mean()
        sig = self.std()
        chebyshev_applies = np.isfinite(mu) and np.isfinite(sig) and sig != 0

        if lower == -np.inf:
            if chebyshev_applies:
                lower = mu - sig * np.sqrt((1 - p) / p)
            else:
                lower = -1.0
                while self.cumulative_probability(lower) >= p:
                    lower *= 2
        if upper == np.inf:
            if chebyshev_applies:
                upper = mu + sig * np.sqrt(p / (1 - p))
            else:
                upper = 1.0
                while self.cumulative_probability(upper) < p:
                    lower = max(lower, upper)
                    upper *= 2

        f_upper = self.cumulative_probability(upper) - p
        if f_upper == 0:
            return upper
        return brentq(lambda x: self.cumulative_probability(x) - p, lower, upper, xtol=self.inverse_accuracy)

    def sample(self, n, random_source=None):
        return self.create_sampler(random_source).samples(n)

    def rvs(self, size=None, random_state=None):
        sampler = self.create_sampler(random_state)
        if size is None:
            return sampler.sample()
        return sampler.samples(np.prod(size)).reshape(size)

    def pdf(self, x):
        return self.density(x)

    def logpdf(self, x):
        return self.log_density(x)

    def cdf(self, x):
        return self.cumulative_probability(x)

    def ppf(self, q):
        return self.inverse_cumulative_probability(q)


class LogNormalModel(ContinuousDistribution):
    """
    Log-normal distribution: ln(X) is normally distributed with mean `scale` and standard deviation `shape`.

    The instance is immutable after construction. All evaluation methods work element-wise on scalars or
    array-likes.

    Parameters
    ----------
    scale : float (default: 0)
        Mean of the underlying normal distribution of ln(X).
    shape : float (default: 1)
        Standard deviation of the underlying normal distribution of ln(X). Must be strictly positive.
    inverse_accuracy : float (default: 1e-9)
        Absolute accuracy of the root finder used by `inverse_cumulative_probability`.
    """

    def __init__(self, scale=0.0, shape=1.0, inverse_accuracy=DEFAULT_INVERSE_ABSOLUTE_ACCURACY):
        # NaN fails this comparison as well
        if not shape > 0:
            raise InvalidParameterError('shape', shape)
        object.__setattr__(self, '_scale', float(scale))
        object.__setattr__(self, '_shape', float(shape))
        object.__setattr__(self, '_log_shape_plus_half_log_2pi', float(np.log(shape) + HALF_LOG_2PI))
        object.__setattr__(self, '_inverse_accuracy', float(inverse_accuracy))

    def __setattr__(self, name, value):
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    def __delattr__(self, name):
        raise AttributeError(f'{self.__class__.__name__} is immutable')

    @property
    def scale(self):
        return self._scale

    @property
    def shape(self):
        return self._shape

    @property
    def inverse_accuracy(self):
        return self._inverse_accuracy

    def density(self, x):
        """
        exp(-0.5 * ((ln(x) - scale) / shape)^2) / (shape * sqrt(2 * pi) * x) for x > 0, and 0 otherwise.
        """
        x = np.asarray(x, dtype=np.float64)
        out = np.zeros_like(x)
        mask = ~(x <= 0)
        with np.errstate(divide='ignore', invalid='ignore', over='ignore', under='ignore'):
            z = (np.log(x[mask]) - self._scale) / self._shape
            out[mask] = np.exp(-0.5 * z * z) / (self._shape * SQRT2PI * x[mask])
        return _scalar_or_array(out)

    def log_density(self, x):
        """
        Log of the density, evaluated directly so that it stays accurate where `density` underflows to 0.
        """
        x = np.asarray(x, dtype=np.float64)
        out = np.full_like(x, -np.inf)
        mask = ~(x <= 0)
        with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
            log_x = np.log(x[mask])
            z = (log_x - self._scale) / self._shape
            out[mask] = -0.5 * z * z - (self._log_shape_plus_half_log_2pi + log_x)
        return _scalar_or_array(out)

    def cumulative_probability(self, x):
        """
        0.5 + 0.5 * erf((ln(x) - scale) / (shape * sqrt(2))) for x > 0, and 0 otherwise.

        More than 40 shape-widths away from the scale the result is exactly 0 (below) or 1 (above).
        """
        x = np.asarray(x, dtype=np.float64)
        out = np.zeros_like(x)
        mask = ~(x <= 0)
        with np.errstate(divide='ignore', invalid='ignore'):
            dev = np.log(x[mask]) - self._scale
            saturated = np.abs(dev) > TAIL_SATURATION_SHAPE_WIDTHS * self._shape
            out[mask] = np.where(
                saturated,
                np.where(dev < 0, 0.0, 1.0),
                0.5 + 0.5 * erf(dev / (self._shape * SQRT2))
            )
        return _scalar_or_array(out)

    def probability(self, x0, x1):
        """
        P(x0 < X <= x1).

        For positive endpoints the difference of the two error functions is computed with `erf_diff`, which stays
        accurate for close endpoints. Otherwise the generic CDF difference is used.
        """
        x0 = np.asarray(x0, dtype=np.float64)
        x1 = np.asarray(x1, dtype=np.float64)
        if np.any(x0 > x1):
            raise OrderingError(_scalar_or_array(x0), _scalar_or_array(x1))
        x0, x1 = np.broadcast_arrays(x0, x1)

        out = np.empty(x0.shape, dtype=np.float64)
        fallback = (x0 <= 0) | (x1 <= 0)
        if np.any(fallback):
            out[fallback] = super().probability(x0[fallback], x1[fallback])
        positive = ~fallback
        if np.any(positive):
            denom = self._shape * SQRT2
            with np.errstate(invalid='ignore'):
                v0 = (np.log(x0[positive]) - self._scale) / denom
                v1 = (np.log(x1[positive]) - self._scale) / denom
            out[positive] = 0.5 * erf_diff(v0, v1)
        return _scalar_or_array(out)

    def mean(self):
        """exp(scale + shape^2 / 2)"""
        s = self._shape
        with np.errstate(over='ignore'):
            return np.exp(self._scale + (s * s / 2))

    def variance(self):
        """(exp(shape^2) - 1) * exp(2 * scale + shape^2)"""
        ss = self._shape * self._shape
        with np.errstate(over='ignore', under='ignore', invalid='ignore'):
            return np.expm1(ss) * np.exp(2 * self._scale + ss)

    def support_lower_bound(self):
        return 0.0

    def support_upper_bound(self):
        return np.inf

    def is_support_connected(self):
        return True

    def create_sampler(self, random_source=None):
        """
        Sampler bound to this distribution's parameters.

        Parameters
        ----------
        random_source : numpy.random.Generator, int or None
            Uniform random source. A Generator is used directly, anything else seeds a new one.

        Returns
        ----------
        sampler : LogNormalSampler
        """
        return LogNormalSampler(self._scale, self._shape, as_random_source(random_source))

    def __eq__(self, other):
        if not isinstance(other, LogNormalModel):
            return NotImplemented
        return (self._scale, self._shape, self._inverse_accuracy) == \
            (other._scale, other._shape, other._inverse_accuracy)

    def __hash__(self):
        return hash((self.__class__.__name__, self._scale, self._shape, self._inverse_accuracy))

    def __repr__(self):
        return f'{self.__class__.__name__}(scale={self._scale}, shape={self._shape}, ' \
               f'inverse_accuracy={self._inverse_accuracy})'
