import numpy as np


TAB = '    '


class ReprMixin:
    def __str__(self):
        return self.__repr__()

    def __repr__(self):
        return f'{self.__class__.__name__}\n' + '\n'.join([f'\t{k}: {v}' for k, v in self.__dict__.items()])


def fmp(v, k=3):
    # 1. Format to exactly k decimal places
    s = f"{v:.{k}f}"

    # 2. If it ends in k zeros (e.g. .000 for k=3), strip it all (for cases like 1.000 -> 1)
    if s.endswith('.' + '0'*k):
        return s[:-(k+1)]

    # 1.110 -> 1.11
    orig_str = str(v)
    if '.' in orig_str and 'e' not in orig_str:
        decimal_places = len(orig_str.split('.')[1])
        precision = min(decimal_places, k)
        return f"{v:.{precision}f}"

    return s


def descriptive_statistics(samples, log_samples=None):
    """Empirical moments of a sample and of its logarithm; pass `log_samples` to reuse a precomputed logarithm."""
    samples = np.asarray(samples, dtype=np.float64)
    log_samples = np.log(samples) if log_samples is None else np.asarray(log_samples, dtype=np.float64)
    return dict(
        mean=np.mean(samples),
        variance=np.var(samples, ddof=1),
        log_mean=np.mean(log_samples),
        log_sd=np.std(log_samples, ddof=1),
        median=np.median(samples)
    )


def print_sample_characteristics(sim):
    print('----------------------------------')
    print('..Generative parameters:')
    print(f'{TAB}scale: {fmp(sim.model.scale)}')
    print(f'{TAB}shape: {fmp(sim.model.shape)}')
    print('..Descriptive statistics:')
    print(f'{TAB}No. samples: {sim.nsamples}')
    print(f"{TAB}Mean: {sim.stats['mean']:.4f} (expected: {sim.model.mean():.4f})")
    print(f"{TAB}Variance: {sim.stats['variance']:.4f} (expected: {sim.model.variance():.4f})")
    print(f"{TAB}Median: {sim.stats['median']:.4f} (expected: {np.exp(sim.model.scale):.4f})")
    print(f"{TAB}Log-mean: {sim.stats['log_mean']:.4f} (expected: {sim.model.scale:.4f})")
    print(f"{TAB}Log-SD: {sim.stats['log_sd']:.4f} (expected: {sim.model.shape:.4f})")
    print('----------------------------------')
