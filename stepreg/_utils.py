"""
Utility functions.
"""

import numpy as np


def check_array(X, name='X', dtype=np.float64):
    """Validate 2-D numeric input."""
    X = np.asarray(X, dtype=dtype)
    if X.ndim == 1:
        X = X.reshape(-1, 1)
    if X.ndim != 2:
        raise ValueError(f"{name} must be 2-dimensional")
    if not np.all(np.isfinite(X)):
        raise ValueError(f"{name} contains NaN or Inf")
    return X


def check_vector(y, name='y', dtype=np.float64):
    """Validate 1-D numeric input."""
    y = np.asarray(y, dtype=dtype)
    if y.ndim != 1:
        raise ValueError(f"{name} must be 1-dimensional")
    if not np.all(np.isfinite(y)):
        raise ValueError(f"{name} contains NaN or Inf")
    return y


def check_consistent_length(y, X):
    """Response and design matrix must share the observation axis."""
    if X.shape[0] != y.shape[0]:
        raise ValueError(
            f"y has {y.shape[0]} observations but X has {X.shape[0]} rows"
        )
