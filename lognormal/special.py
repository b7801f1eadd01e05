import numpy as np
from scipy.special import erf, erfc

# erf(X_CRIT) = 0.5; below this point erf is more accurate than 1 - erfc and vice versa
X_CRIT = 0.4769362762044697


def erf_diff(x1, x2):
    """
    Compute erf(x2) - erf(x1) without the cancellation of a plain subtraction.

    When both arguments sit in the same tail, erf(x) is close to +/-1 and the difference of two erf values loses
    all significant digits. In these regions the difference is evaluated via the complementary error function.

    Parameters
    ----------
    x1 : float or array-like
        First argument.
    x2 : float or array-like
        Second argument.

    Returns
    ----------
    diff : float or ndarray
        erf(x2) - erf(x1)
    """
    x1 = np.asarray(x1, dtype=np.float64)
    x2 = np.asarray(x2, dtype=np.float64)
    x1_b, x2_b = np.broadcast_arrays(x1, x2)

    # erf is odd: erf(x2) - erf(x1) = -(erf(x1) - erf(x2))
    swap = x1_b > x2_b
    lo = np.where(swap, x2_b, x1_b)
    hi = np.where(swap, x1_b, x2_b)
    sign = np.where(swap, -1.0, 1.0)

    out = erf(hi) - erf(lo)

    lower_tail = (lo < -X_CRIT) & (hi < 0)
    out = np.where(lower_tail, erfc(-hi) - erfc(-lo), out)

    upper_tail = (hi > X_CRIT) & (lo > 0)
    out = np.where(upper_tail, erfc(lo) - erfc(hi), out)

    out = sign * out
    return out[()] if out.ndim == 0 else out


__all__ = ['X_CRIT', 'erf', 'erfc', 'erf_diff']
