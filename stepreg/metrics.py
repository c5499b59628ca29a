"""
Model quality criteria for comparing nested OLS fits.

All functions take fitted ``LinearModel`` objects. ``p`` below is the
number of estimated coefficients including the intercept, ``SSE`` the
residual sum of squares and ``n`` the number of observations.

References
----------
.. [1] Sawa, T. (1978). "Information criteria for discriminating among
       alternative regression models." Econometrica, 46(6), 1273-1291.
.. [2] Mallows, C. L. (1973). "Some comments on Cp." Technometrics,
       15(4), 661-675.
"""

import numpy as np


def loglik(model) -> float:
    """
    Gaussian log-likelihood at the ML estimate of sigma (R's ``logLik.lm``).

    logL = -n/2 * (log(2*pi) + 1 + log(SSE/n))
    """
    n = model.n_obs
    return -0.5 * n * (np.log(2 * np.pi) + 1 + np.log(model.rss / n))


def aic(model) -> float:
    """
    Akaike information criterion, counting sigma as a parameter (R's ``AIC``).

    AIC = -2 logL + 2 (p + 1)
    """
    return -2 * loglik(model) + 2 * (model.rank + 1)


def sbc(model) -> float:
    """
    Schwarz Bayesian criterion (R's ``BIC``).

    SBC = -2 logL + log(n) (p + 1)
    """
    return -2 * loglik(model) + np.log(model.n_obs) * (model.rank + 1)


def sbic(model, full_model) -> float:
    """
    Sawa's Bayesian information criterion.

    SBIC = n log(SSE/n) + 2 (p + 2) q - 2 q^2,  q = n sigma_full^2 / SSE

    where sigma_full^2 is the residual mean square of the full model.

    Parameters
    ----------
    model : LinearModel
        Candidate (reduced) model
    full_model : LinearModel
        Model containing every candidate predictor

    Returns
    -------
    float
    """
    _check_same_observations(model, full_model)
    n = model.n_obs
    p = model.rank
    q = n * full_model.residual_mean_square / model.rss
    return n * np.log(model.rss / n) + 2 * (p + 2) * q - 2 * q**2


def mallows_cp(model, full_model) -> float:
    """
    Mallows' Cp of ``model`` relative to ``full_model``.

    Cp = SSE / sigma_full^2 + 2p - n
    """
    _check_same_observations(model, full_model)
    return model.rss / full_model.residual_mean_square + 2 * model.rank - model.n_obs


def rmse(model) -> float:
    """Root mean squared error, sqrt of the residual mean square."""
    return float(np.sqrt(model.residual_mean_square))


def _check_same_observations(model, full_model):
    if model.n_obs != full_model.n_obs:
        raise ValueError(
            f"Models are fitted on different data: n={model.n_obs} "
            f"vs full model n={full_model.n_obs}"
        )
