"""
Diagnostic plots: stepwise metric trends, the simple regression line and
the residual normal Q-Q plot.
"""

import matplotlib.pyplot as plt
import numpy as np
from scipy import stats

from .exceptions import InvalidModelError
from .lm import LinearModel


# (attribute, panel title), laid out row by row in a 3 x 2 grid
PANELS = [
    ('rsquare', 'R-Square'),
    ('adjr', 'Adj. R-Square'),
    ('mallows_cp', 'C(p)'),
    ('aic', 'AIC'),
    ('sbic', 'SBIC'),
    ('sbc', 'SBC'),
]


def plot_step_forward(result, figsize=(10, 9)):
    """
    Draw R-Square, Adj. R-Square, C(p), AIC, SBIC and SBC against step.

    Parameters
    ----------
    result : StepForwardResult
        Output of ``ols_step_forward``
    figsize : tuple
        Figure size in inches

    Returns
    -------
    matplotlib.figure.Figure
    """
    if result.steps == 0:
        raise ValueError("No variables have been added to the model; nothing to plot")

    steps = np.arange(1, result.steps + 1)
    fig, axes = plt.subplots(3, 2, figsize=figsize, sharex=True)

    for ax, (attr, title) in zip(axes.flat, PANELS):
        ax.plot(steps, getattr(result, attr), color='blue',
                marker='o', markerfacecolor='none', markersize=6)
        ax.set_title(title)
        ax.grid(True, alpha=0.3)

    for ax in axes[-1]:
        ax.set_xticks(steps)
        ax.set_xlabel('Step')

    fig.suptitle('Stepwise Forward Regression')
    fig.tight_layout()
    return fig


def plot_reg_line(response, predictor, figsize=(6, 5)):
    """
    Scatter of ``response`` against ``predictor`` with the least-squares line.

    The point (mean of predictor, mean of response) is marked; the fitted
    line always passes through it.

    Parameters
    ----------
    response, predictor : array-like or pandas Series
        Equal-length numeric vectors. Series names label the axes.
    figsize : tuple
        Figure size in inches

    Returns
    -------
    matplotlib.figure.Figure
    """
    x_label = getattr(predictor, 'name', None) or 'predictor'
    y_label = getattr(response, 'name', None) or 'response'
    x = np.asarray(predictor, dtype=np.float64)
    y = np.asarray(response, dtype=np.float64)

    model = LinearModel(y, x.reshape(-1, 1))
    x_line = np.array([x.min(), x.max()])
    y_line = model.predict(x_line.reshape(-1, 1))

    fig, ax = plt.subplots(figsize=figsize)
    ax.scatter(x, y, color='blue')
    ax.plot(x_line, y_line, color='blue')
    ax.scatter([x.mean()], [y.mean()], color='red', marker='^', s=60)
    ax.set_xlabel(str(x_label))
    ax.set_ylabel(str(y_label))
    ax.set_title('Regression Line')
    fig.tight_layout()
    return fig


def _ppoints(n):
    """Probability points for Q-Q plots (R's ``ppoints``)."""
    a = 3 / 8 if n <= 10 else 1 / 2
    return (np.arange(1, n + 1) - a) / (n + 1 - 2 * a)


def qq_reference_line(sample):
    """
    Slope and intercept of the line through the sample and normal quartiles
    (R's ``qqline``).
    """
    y = np.quantile(sample, [0.25, 0.75])
    x = stats.norm.ppf([0.25, 0.75])
    slope = (y[1] - y[0]) / (x[1] - x[0])
    return slope, y[0] - slope * x[0]


def plot_residual_qq(model, figsize=(6, 5)):
    """
    Normal Q-Q plot of the residuals, for checking the normality assumption.

    Parameters
    ----------
    model : LinearModel
    figsize : tuple
        Figure size in inches

    Returns
    -------
    matplotlib.figure.Figure
    """
    if not isinstance(model, LinearModel):
        raise InvalidModelError("Please specify a OLS linear regression model.")

    resid = model.residuals[~np.isnan(model.residuals)]
    sample = np.sort(resid)
    theoretical = stats.norm.ppf(_ppoints(len(sample)))
    slope, intercept = qq_reference_line(resid)

    fig, ax = plt.subplots(figsize=figsize)
    ax.scatter(theoretical, sample, color='blue')
    ends = np.array([theoretical[0], theoretical[-1]])
    ax.plot(ends, intercept + slope * ends, color='red')
    ax.set_xlabel('Theoretical Quantiles')
    ax.set_ylabel('Sample Quantiles')
    ax.set_title('Normal Q-Q Plot')
    fig.tight_layout()
    return fig
