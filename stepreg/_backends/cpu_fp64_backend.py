"""
CPU backend using NumPy + SciPy.

Pivoted Householder QR with R's ``lm.fit`` rank tolerance.
"""

import numpy as np
from scipy.linalg import qr, solve_triangular
from typing import Optional

from .base import BackendBase, LinearModelResult
from ..exceptions import SingularFitError


class CPUBackendFP64(BackendBase):
    """
    CPU backend using NumPy + SciPy.

    Always uses FP64 precision.
    """

    name = "cpu_fp64"
    precision = "fp64"

    def fit_linear_model(
        self,
        X: np.ndarray,
        y: np.ndarray,
        tol: Optional[float] = None,
        singular_ok: bool = True
    ) -> LinearModelResult:
        n = len(y)
        if tol is None:
            tol = 1e-7

        X_work = np.column_stack([np.ones(n), X]).astype(np.float64)
        y_work = np.asarray(y, dtype=np.float64)
        p = X_work.shape[1]

        # economic mode keeps Q at n x p; full Q is never needed
        Q, R, P = qr(X_work, mode='economic', pivoting=True)

        R_diag = np.abs(np.diag(R))
        if R_diag[0] == 0:
            rank = 0
        else:
            rank = int(np.sum(R_diag >= tol * R_diag[0]))

        if not singular_ok and rank < p:
            raise SingularFitError(
                f"Singular fit: design matrix has rank {rank} < {p} columns"
            )

        qty = Q.T @ y_work

        # Aliased coefficients stay NaN, as in R
        coef = np.full(p, np.nan, dtype=np.float64)
        if rank > 0:
            coef_active = solve_triangular(
                R[:rank, :rank],
                qty[:rank],
                lower=False
            )
            coef[P[:rank]] = coef_active

        valid_coef = ~np.isnan(coef)
        if np.any(valid_coef):
            fitted = X_work[:, valid_coef] @ coef[valid_coef]
        else:
            fitted = np.zeros(n, dtype=np.float64)

        return LinearModelResult(
            coef=coef,
            residuals=y_work - fitted,
            fitted_values=fitted,
            rank=rank,
            df_residual=n - rank,
            qr_R=R[:p, :p],
            qr_pivot=P.astype(np.int64) + 1,  # 1-indexed like R
            qr_tol=tol
        )
