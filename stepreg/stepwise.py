"""
Stepwise forward selection for OLS regression.

Predictors enter one step at a time, ranked by the absolute t-statistic of
their coefficient when added to the current model, until no remaining
candidate is significant at the entry level ``penter``.

References
----------
.. [1] Chatterjee, S. and Hadi, A. (2012). Regression Analysis by Example,
       5th ed. Wiley.
.. [2] Kutner, M. H., Nachtsheim, C. J., Neter, J. and Li, W. (2004).
       Applied Linear Statistical Models, 5th ed. McGraw-Hill/Irwin.
"""

import logging
import numbers
from dataclasses import dataclass
from typing import Tuple

import numpy as np
import pandas as pd
from scipy import stats

from . import metrics
from .exceptions import InvalidModelError, InvalidParameterError
from .lm import LinearModel
from .report import format_step_forward, print_step_detail

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ModelSelectionData:
    """
    Response and candidate predictor columns taken from the full model.

    Parameters
    ----------
    response : str
        Response column name
    predictors : tuple of str
        Candidate predictor names, in the full model's order
    frame : DataFrame
        Response column followed by the predictor columns
    """
    response: str
    predictors: Tuple[str, ...]
    frame: pd.DataFrame

    @classmethod
    def from_model(cls, model: LinearModel) -> 'ModelSelectionData':
        return cls(
            response=model.y_name,
            predictors=tuple(model.X_names),
            frame=model.model_frame(),
        )

    @property
    def n(self) -> int:
        return len(self.frame)

    @property
    def df(self) -> int:
        """Degrees of freedom of the entry test (n - 2)."""
        return self.n - 2


@dataclass(frozen=True)
class StepRecord:
    """Quality of the cumulative model after one accepted step."""
    step: int
    entered: Tuple[str, ...]
    rsquare: float
    adjr: float
    aic: float
    sbc: float
    sbic: float
    mallows_cp: float
    rmse: float


@dataclass(frozen=True)
class CandidateScores:
    """Significance of each remaining candidate's coefficient within one step."""
    names: Tuple[str, ...]
    tvalues: np.ndarray
    pvalues: np.ndarray

    @property
    def max_abs_t(self) -> float:
        """Largest defined |t|; NaN when no candidate has one."""
        abs_t = np.abs(self.tvalues)
        defined = abs_t[~np.isnan(abs_t)]
        if defined.size == 0:
            return np.nan
        return float(defined.max())

    def best(self) -> Tuple[str, ...]:
        """
        All candidates whose |t| equals the maximum.

        Equality is exact: candidates tied on |t| enter together.
        Candidates with an undefined (NaN) t value never win; the result
        is empty when none is defined.
        """
        max_abs_t = self.max_abs_t
        if np.isnan(max_abs_t):
            return ()
        winners = np.flatnonzero(np.abs(self.tvalues) == max_abs_t)
        return tuple(self.names[i] for i in winners)


@dataclass(frozen=True)
class StepForwardResult:
    """
    Outcome of stepwise forward selection.

    Attributes
    ----------
    response : str
        Response variable name
    predictors : tuple of str
        Selected predictors in order of entry
    indvar : tuple of str
        Every candidate predictor of the full model
    records : tuple of StepRecord
        One record per accepted step
    penter : float
        Entry significance level
    t_enter : float
        Two-tailed critical t value derived from ``penter``
    """
    response: str
    predictors: Tuple[str, ...]
    indvar: Tuple[str, ...]
    records: Tuple[StepRecord, ...]
    penter: float
    t_enter: float

    @property
    def steps(self) -> int:
        return len(self.records)

    def _metric(self, name):
        return np.array([getattr(r, name) for r in self.records], dtype=np.float64)

    @property
    def rsquare(self):
        return self._metric('rsquare')

    @property
    def adjr(self):
        return self._metric('adjr')

    @property
    def aic(self):
        return self._metric('aic')

    @property
    def sbc(self):
        return self._metric('sbc')

    @property
    def sbic(self):
        return self._metric('sbic')

    @property
    def mallows_cp(self):
        return self._metric('mallows_cp')

    @property
    def rmse(self):
        return self._metric('rmse')

    def to_frame(self) -> pd.DataFrame:
        """One row per step, indexed by step number."""
        columns = ['entered', 'rsquare', 'adjr', 'mallows_cp', 'aic', 'sbc', 'sbic', 'rmse']
        rows = [
            [', '.join(r.entered)] + [getattr(r, c) for c in columns[1:]]
            for r in self.records
        ]
        frame = pd.DataFrame(rows, columns=columns,
                             index=pd.RangeIndex(1, self.steps + 1, name='step'))
        return frame

    def plot(self, **kwargs):
        """Six-panel metric trend chart; see ``plotting.plot_step_forward``."""
        from .plotting import plot_step_forward
        return plot_step_forward(self, **kwargs)

    def __str__(self):
        return format_step_forward(self)


def fit_subset(data: ModelSelectionData, names, backend) -> LinearModel:
    """Fit the response on ``names`` (in order); singular designs raise."""
    return LinearModel(
        y=data.response,
        X=list(names),
        data=data.frame,
        backend=backend,
        singular_ok=False,
    )


class StepwiseForwardSelector:
    """
    Build a regression model by entering predictors based on p values.

    Parameters
    ----------
    model : LinearModel
        Fit containing every candidate predictor (at least 2)
    penter : float
        Entry significance level, in (0, 1]
    details : bool
        Print the cumulative fit after every accepted step
    backend : str or BackendBase, optional
        Backend for the refits; defaults to the one ``model`` was fitted with

    Examples
    --------
    >>> model = lm('y ~ .', data=surgical)
    >>> result = StepwiseForwardSelector(model, penter=0.3).run()
    >>> result.predictors
    """

    def __init__(self, model, penter=0.3, details=False, backend=None):
        _validate_inputs(model, penter, details)

        self.model = model
        self.penter = float(penter)
        self.details = bool(details)
        self.backend = model.backend if backend is None else backend
        self.data = ModelSelectionData.from_model(model)
        self.t_enter = float(stats.t.ppf(1 - self.penter / 2, self.data.df))

    def score_candidates(self, selected, remaining) -> CandidateScores:
        """
        Fit ``selected + (candidate,)`` for every remaining candidate and
        collect the t and p values of the candidate's coefficient.
        """
        # Intercept sits at 0 and the candidate is appended after `selected`
        position = len(selected) + 1
        tvalues = np.empty(len(remaining))
        pvalues = np.empty(len(remaining))
        for i, name in enumerate(remaining):
            fit = fit_subset(self.data, selected + (name,), self.backend)
            tvalues[i] = fit.t_values[position]
            pvalues[i] = fit.pvalues[position]
            logger.debug("candidate %s: t=%.4f p=%.4g", name, tvalues[i], pvalues[i])
        return CandidateScores(names=tuple(remaining), tvalues=tvalues, pvalues=pvalues)

    def _record(self, step, entered, fit) -> StepRecord:
        return StepRecord(
            step=step,
            entered=entered,
            rsquare=fit.r_squared,
            adjr=fit.adj_r_squared,
            aic=metrics.aic(fit),
            sbc=metrics.sbc(fit),
            sbic=metrics.sbic(fit, self.model),
            mallows_cp=metrics.mallows_cp(fit, self.model),
            rmse=metrics.rmse(fit),
        )

    def run(self) -> StepForwardResult:
        """
        Run the selection.

        Step 1 always admits the candidate(s) with the largest |t| in a
        simple regression. Later steps admit the best candidate(s) only
        while their |t| reaches ``t_enter``.

        Returns
        -------
        StepForwardResult
        """
        logger.info("We are selecting variables based on p value...")

        indvar = self.data.predictors
        selected = ()
        remaining = indvar
        records = []

        while remaining and len(records) < len(indvar):
            scores = self.score_candidates(selected, remaining)
            entering = scores.best()

            if not entering and not records:
                raise InvalidModelError(
                    "No candidate predictor has a defined t statistic; "
                    "is the response constant?"
                )

            if not scores.max_abs_t >= self.t_enter and records:
                logger.info("No more variables satisfy the condition of penter: %s", self.penter)
                break

            selected = selected + entering
            remaining = tuple(name for name in remaining if name not in entering)
            step = len(records) + 1

            fit = fit_subset(self.data, selected, self.backend)
            records.append(self._record(step, entering, fit))
            logger.info("%d variable(s) added....", len(entering))

            if self.details:
                header = self.data.response if step == 1 else None
                print_step_detail(step, entering, fit, response=header)

            # t statistics of further candidates are 0/0 once nothing is left to explain
            if remaining and fit.rss <= np.finfo(np.float64).eps * fit.tss:
                logger.info("Response is fitted exactly; no further variables can be tested")
                break

        return StepForwardResult(
            response=self.data.response,
            predictors=selected,
            indvar=indvar,
            records=tuple(records),
            penter=self.penter,
            t_enter=self.t_enter,
        )


def _validate_inputs(model, penter, details):
    if not isinstance(model, LinearModel):
        raise InvalidModelError("Please specify a OLS linear regression model.")

    if (isinstance(penter, bool) or not isinstance(penter, numbers.Real)
            or not 0 < penter <= 1):
        raise InvalidParameterError(
            "p value for entering variables into the model must be in (0, 1]."
        )

    if not isinstance(details, (bool, np.bool_)):
        raise InvalidParameterError("details must be either True or False")

    if len(model.X_names) < 2:
        raise InvalidModelError("Please specify a model with at least 2 predictors.")


def ols_step_forward(model, penter=0.3, details=False, backend=None) -> StepForwardResult:
    """
    Stepwise forward regression.

    Build a regression model from the candidate predictors of ``model`` by
    entering predictors based on p values, in a stepwise manner, until no
    remaining variable is significant at level ``penter``.

    Parameters
    ----------
    model : LinearModel
        Fit including every candidate predictor
    penter : float
        Entry significance level, in (0, 1] (default 0.3)
    details : bool
        Print the fit after each step
    backend : str or BackendBase, optional
        Backend for the refits

    Returns
    -------
    StepForwardResult

    Examples
    --------
    >>> model = lm('y ~ .', data=surgical)
    >>> k = ols_step_forward(model)
    >>> print(k)
    >>> k.plot()
    """
    return StepwiseForwardSelector(model, penter=penter, details=details,
                                   backend=backend).run()
