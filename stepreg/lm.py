"""
Linear regression with R-style interface and output.

This is the fitting layer the stepwise procedures are built on.
"""

import warnings

import numpy as np
import pandas as pd
from typing import Optional, Union, List
from scipy import stats

from ._backends import get_backend
from ._formula import is_formula, parse_formula
from ._utils import check_array, check_vector, check_consistent_length


class LinearModel:
    """
    Fit an ordinary least-squares regression with intercept (like R's lm()).

    Examples
    --------
    >>> import pandas as pd
    >>> from stepreg import lm
    >>>
    >>> data = pd.read_csv('surgical.csv')
    >>>
    >>> # Column names
    >>> model = lm(y='y', X=['bcs', 'pindex', 'enzyme_test'], data=data)
    >>>
    >>> # Or an additive formula, '.' meaning "all other columns"
    >>> model = lm('y ~ .', data=data)
    >>>
    >>> model.summary()    # Prints a table like R's summary.lm
    >>> model.coef         # Named coefficients
    >>> model.pvalues      # P-values for each coefficient
    >>> model.conf_int()   # Confidence intervals
    """

    def __init__(
        self,
        y: Union[str, np.ndarray],
        X: Optional[Union[List[str], np.ndarray]] = None,
        data: Optional[pd.DataFrame] = None,
        backend='cpu',
        singular_ok: bool = True
    ):
        """
        Fit linear regression model.

        Parameters
        ----------
        y : str or array
            Response variable
            - If formula string ('y ~ a + b', 'y ~ .'): X must be omitted
            - If string: column name in data
            - If array: numeric values
        X : list of str or array, optional
            Predictor variables
            - If list of strings: column names in data
            - If array: numeric matrix (n x p)
        data : DataFrame, optional
            Dataset containing y and X variables
        backend : str or BackendBase
            Computational backend: 'auto', 'cpu'
        singular_ok : bool
            If False, a rank-deficient design raises SingularFitError
            instead of producing NaN (aliased) coefficients.
        """
        if is_formula(y):
            if X is not None:
                raise ValueError("X must be omitted when y is a formula")
            y, X = parse_formula(y, data)
        elif X is None:
            raise ValueError("Must provide X unless y is a formula")

        if isinstance(X, list) and all(isinstance(x, str) for x in X):
            if data is None:
                raise ValueError("Must provide data when X is list of strings")
            self.X_values = check_array(data[X].values)
            self.X_names = list(X)
        else:
            self.X_values = check_array(X)
            self.X_names = [f'x{i}' for i in range(self.X_values.shape[1])]

        if isinstance(y, str):
            if data is None:
                raise ValueError("Must provide data when y is a string")
            if y in self.X_names:
                raise ValueError(f"Response '{y}' is also listed as a predictor")
            self.y_values = check_vector(data[y].values, name=y)
            self.y_name = y
        else:
            self.y_values = check_vector(y)
            self.y_name = _unused_name('y', self.X_names)

        check_consistent_length(self.y_values, self.X_values)

        self.n_obs = len(self.y_values)
        self.n_coef = self.X_values.shape[1] + 1  # +1 for intercept
        self.var_names = ['Intercept'] + self.X_names

        if self.n_obs <= self.n_coef:
            raise ValueError(
                f"Need more observations ({self.n_obs}) than "
                f"coefficients ({self.n_coef})"
            )

        self.backend = get_backend(backend)
        self._backend_result = self.backend.fit_linear_model(
            self.X_values,
            self.y_values,
            singular_ok=singular_ok
        )

        self._compute_statistics()

    def _compute_statistics(self):
        """Compute standard errors, t-stats, p-values, etc."""
        result = self._backend_result

        self.coefficients = result.coef
        self.residuals = result.residuals
        self.fitted_values = result.fitted_values
        self.rank = result.rank
        self.df_residual = result.df_residual

        self.rss = np.sum(self.residuals**2)
        self.tss = np.sum((self.y_values - np.mean(self.y_values))**2)
        self.residual_mean_square = self.rss / self.df_residual
        self.sigma = np.sqrt(self.residual_mean_square)

        # Var(beta) = sigma^2 (X'X)^-1, computed from the pivoted R factor
        R = result.qr_R[:self.rank, :self.rank]
        R_inv = np.linalg.inv(R)
        XtX_inv = R_inv @ R_inv.T

        pivot = result.qr_pivot[:self.rank] - 1
        var_beta = np.full((self.n_coef, self.n_coef), np.nan)
        var_beta[np.ix_(pivot, pivot)] = XtX_inv * self.residual_mean_square
        self.vcov = var_beta

        self.std_errors = np.sqrt(np.diag(self.vcov))
        self.t_values = self.coefficients / self.std_errors

        # Two-tailed
        self.pvalues = 2 * stats.t.sf(np.abs(self.t_values), self.df_residual)

        if self.tss > 0:
            self.r_squared = 1 - self.rss / self.tss
        else:
            warnings.warn("Response is constant; R-squared set to 0")
            self.r_squared = 0.0

        n = self.n_obs
        p = self.rank - 1  # Exclude intercept
        self.adj_r_squared = 1 - (1 - self.r_squared) * (n - 1) / self.df_residual

        if p > 0 and self.rss > 0:
            self.f_statistic = ((self.tss - self.rss) / p) / self.residual_mean_square
            self.f_pvalue = stats.f.sf(self.f_statistic, p, self.df_residual)
        else:
            self.f_statistic = np.nan
            self.f_pvalue = np.nan

    @property
    def ems(self):
        """Error mean square (alias of ``residual_mean_square``)."""
        return self.residual_mean_square

    @property
    def coef(self):
        """Named coefficients (pandas Series)."""
        return pd.Series(self.coefficients, index=self.var_names)

    def model_frame(self) -> pd.DataFrame:
        """Response followed by the predictor columns, in fit order."""
        frame = pd.DataFrame(self.X_values, columns=self.X_names)
        frame.insert(0, self.y_name, self.y_values)
        return frame

    def conf_int(self, alpha: float = 0.05):
        """
        Confidence intervals for coefficients.

        Parameters
        ----------
        alpha : float
            Significance level (default: 0.05 for 95% CI)

        Returns
        -------
        DataFrame
            Confidence intervals with columns 'lower' and 'upper'
        """
        t_crit = stats.t.ppf(1 - alpha/2, self.df_residual)
        lower = self.coefficients - t_crit * self.std_errors
        upper = self.coefficients + t_crit * self.std_errors

        return pd.DataFrame({
            'lower': lower,
            'upper': upper
        }, index=self.var_names)

    def summary(self):
        """Print summary of regression results (like R's summary.lm)."""
        print()
        print("="*80)
        print("LINEAR REGRESSION RESULTS")
        print("="*80)
        print()

        print(f"Dependent variable: {self.y_name}")
        print(f"Number of observations: {self.n_obs}")
        print(f"Degrees of freedom: {self.df_residual} (residual), {self.rank - 1} (model)")
        print()

        print("Coefficients:")
        print("-"*80)
        print(f"{'Variable':<20} {'Estimate':>12} {'Std. Error':>12} {'t value':>10} {'Pr(>|t|)':>12}")
        print("-"*80)

        for i, name in enumerate(self.var_names):
            p = self.pvalues[i]
            if np.isnan(p):
                sig = ' (aliased)'
                p_str = 'NA'
            else:
                sig = _significance_stars(p)
                p_str = f"{p:.4f}" if p >= 0.0001 else "<.0001"

            print(f"{name:<20} {self.coefficients[i]:>12.4f} {self.std_errors[i]:>12.4f} "
                  f"{self.t_values[i]:>10.3f} {p_str:>12}{sig}")

        print("-"*80)
        print("Signif. codes:  0 '***' 0.001 '**' 0.01 '*' 0.05 '.' 0.1 ' ' 1")
        print()

        print(f"Residual standard error: {self.sigma:.4f} on {self.df_residual} degrees of freedom")
        print(f"Multiple R-squared:      {self.r_squared:.4f}")
        print(f"Adjusted R-squared:      {self.adj_r_squared:.4f}")

        if not np.isnan(self.f_statistic):
            f_pval_str = f"{self.f_pvalue:.4e}" if self.f_pvalue >= 2.2e-16 else "< 2.2e-16"
            print(f"F-statistic:             {self.f_statistic:.2f} on {self.rank-1} and {self.df_residual} DF, p-value: {f_pval_str}")

        print("="*80)
        print()

    def predict(self, newdata: Union[pd.DataFrame, np.ndarray]) -> np.ndarray:
        """
        Predict response for new data.

        Parameters
        ----------
        newdata : DataFrame or array
            New predictor values
            - If DataFrame: must have columns matching self.X_names
            - If array: must have same number of columns as X

        Returns
        -------
        array
            Predicted values
        """
        if isinstance(newdata, pd.DataFrame):
            X_new = newdata[self.X_names].values
        else:
            X_new = np.asarray(newdata)

        X_new_full = np.column_stack([np.ones(len(X_new)), X_new])

        # Aliased (NaN) coefficients contribute nothing
        valid = ~np.isnan(self.coefficients)
        return X_new_full[:, valid] @ self.coefficients[valid]

    def __repr__(self):
        return f"LinearModel(n={self.n_obs}, p={self.rank-1}, R²={self.r_squared:.3f})"


def _unused_name(name, taken):
    """``name``, or ``name`` with underscores appended until it is not in ``taken``."""
    while name in taken:
        name += '_'
    return name


def _significance_stars(p):
    if p < 0.001:
        return ' ***'
    elif p < 0.01:
        return ' **'
    elif p < 0.05:
        return ' *'
    elif p < 0.1:
        return ' .'
    return ''


def lm(y, X=None, data=None, **kwargs):
    """
    Fit linear regression model (convenience function).

    Parameters
    ----------
    y : str or array
        Response variable, or an additive formula such as ``'y ~ .'``
    X : list of str or array, optional
        Predictor variables (omit when y is a formula)
    data : DataFrame, optional
        Dataset
    **kwargs
        Additional arguments passed to LinearModel

    Returns
    -------
    LinearModel
        Fitted model object

    Examples
    --------
    >>> model = lm('mpg ~ wt + hp', data=mtcars)
    >>> model = lm(y='mpg', X=['wt', 'hp'], data=mtcars)
    >>> model.pvalues
    """
    return LinearModel(y=y, X=X, data=data, **kwargs)
