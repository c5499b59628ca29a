"""Shared fixtures for stepreg tests."""

import numpy as np
import pandas as pd
import pytest

from stepreg import lm


def make_forward_data(n=20, seed=20241224):
    """
    Response driven strongly by `a`, moderately by `b`; `c` is pure noise.
    """
    rng = np.random.RandomState(seed)
    a = rng.normal(0, 1, n)
    b = rng.normal(0, 1, n)
    c = rng.normal(0, 1, n)
    y = 1.0 + 3.0 * a + 1.5 * b + rng.normal(0, 0.5, n)
    return pd.DataFrame({'y': y, 'a': a, 'b': b, 'c': c})


@pytest.fixture
def forward_data():
    return make_forward_data()


@pytest.fixture
def full_model(forward_data):
    return lm('y ~ .', data=forward_data)
