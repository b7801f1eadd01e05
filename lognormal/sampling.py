import numpy as np

_ACCEPTANCE_RATE = np.pi / 4


def as_random_source(random_source=None):
    """Return a numpy Generator; an existing Generator is passed through so that its state stays with the caller."""
    if isinstance(random_source, np.random.Generator):
        return random_source
    return np.random.default_rng(random_source)


class MarsagliaNormalizedGaussianSampler:
    """
    Standard normal variates from Marsaglia's polar method.

    Each accepted pair of uniform points inside the unit circle produces two independent normal variates. The
    second one is kept and returned by the following call.

    Parameters
    ----------
    random_source : numpy.random.Generator, int or None
        Uniform random source. Anything other than a Generator is used to seed a new one.
    """

    def __init__(self, random_source=None):
        self.rng = as_random_source(random_source)
        self._next_gaussian = np.nan

    def sample(self):
        if np.isnan(self._next_gaussian):
            while True:
                x = 2 * self.rng.random() - 1
                y = 2 * self.rng.random() - 1
                r2 = x * x + y * y
                if 0 < r2 < 1:
                    break
            alpha = np.sqrt(-2 * np.log(r2) / r2)
            self._next_gaussian = alpha * x
            return alpha * y
        value = self._next_gaussian
        self._next_gaussian = np.nan
        return value

    def samples(self, n):
        """
        Draw `n` standard normal variates at once.

        Uniform pairs are drawn in blocks and both values of every accepted pair are used, in the same order as
        repeated calls of `sample`. A value cached by a previous `sample` call is returned first. Variates left over
        from the last block are discarded.
        """
        n = int(n)
        z = []
        count = 0
        if n > 0 and not np.isnan(self._next_gaussian):
            z.append(np.array([self._next_gaussian]))
            self._next_gaussian = np.nan
            count = 1
        while count < n:
            # pi / 4 of the pairs fall inside the unit circle
            npairs = int(np.ceil((n - count) / (2 * _ACCEPTANCE_RATE))) + 8
            u = self.rng.random((npairs, 2))
            x = 2 * u[:, 0] - 1
            y = 2 * u[:, 1] - 1
            r2 = x * x + y * y
            accept = (r2 > 0) & (r2 < 1)
            x, y, r2 = x[accept], y[accept], r2[accept]
            alpha = np.sqrt(-2 * np.log(r2) / r2)
            z.append(np.column_stack((alpha * y, alpha * x)).ravel())
            count += 2 * len(r2)
        if not z:
            return np.empty(0, dtype=np.float64)
        return np.concatenate(z)[:n]

    def __repr__(self):
        return f'{self.__class__.__name__}(rng={self.rng!r})'


class LogNormalSampler:
    """
    Log-normal variates exp(scale + shape * z), with z drawn by the polar method.

    Parameters
    ----------
    scale : float
        Mean of the underlying normal distribution.
    shape : float
        Standard deviation of the underlying normal distribution.
    random_source : numpy.random.Generator, int or None
        Uniform random source shared with the underlying normal sampler.
    """

    def __init__(self, scale, shape, random_source=None):
        self.scale = scale
        self.shape = shape
        self.gaussian = MarsagliaNormalizedGaussianSampler(random_source)

    @property
    def rng(self):
        return self.gaussian.rng

    def sample(self):
        return np.exp(self.scale + self.shape * self.gaussian.sample())

    def samples(self, n):
        return np.exp(self.scale + self.shape * self.gaussian.samples(n))

    def __repr__(self):
        return f'{self.__class__.__name__}(scale={self.scale}, shape={self.shape})'
