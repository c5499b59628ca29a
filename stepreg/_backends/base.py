"""
Abstract base class for fitting backends.

Defines the interface all backends must implement.
"""

from abc import ABC, abstractmethod
import numpy as np
from typing import Optional
from dataclasses import dataclass


@dataclass
class LinearModelResult:
    """Raw least-squares results returned by a backend."""
    coef: np.ndarray
    residuals: np.ndarray
    fitted_values: np.ndarray
    rank: int
    df_residual: int
    qr_R: np.ndarray
    qr_pivot: np.ndarray
    qr_tol: float


class BackendBase(ABC):
    """Abstract base class for all backends."""

    name = "base"
    precision = "fp64"

    @abstractmethod
    def fit_linear_model(
        self,
        X: np.ndarray,
        y: np.ndarray,
        tol: Optional[float] = None,
        singular_ok: bool = True
    ) -> LinearModelResult:
        """
        Fit an ordinary least-squares model with intercept.

        Parameters
        ----------
        X : ndarray, shape (n, p)
            Design matrix (WITHOUT intercept)
        y : ndarray, shape (n,)
            Response vector
        tol : float, optional
            Relative tolerance for rank determination (default 1e-7, as R)
        singular_ok : bool
            Allow rank-deficient fits. When False a rank-deficient
            design raises ``SingularFitError``.

        Returns
        -------
        LinearModelResult
            Complete least-squares results (all numpy arrays)
        """
        pass
