"""
Test backend selection and the CPU least-squares backend.
"""

import pytest
import numpy as np

from stepreg import SingularFitError
from stepreg._backends import (
    BackendBase,
    get_backend,
    list_available_backends,
    CPUBackendFP64,
)


class TestBackendSelection:
    """Test backend lookup."""

    def test_list_backends(self):
        backends = list_available_backends()
        assert isinstance(backends, list)
        assert 'cpu' in backends

    def test_auto_resolves_to_cpu(self):
        backend = get_backend('auto')
        assert backend.name == 'cpu_fp64'

    def test_instance_passthrough(self):
        backend = CPUBackendFP64()
        assert get_backend(backend) is backend

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown backend"):
            get_backend('tpu')


class TestCPUBackend:
    """Test CPU backend."""

    def test_cpu_backend_creation(self):
        backend = get_backend('cpu')
        assert backend.name == 'cpu_fp64'
        assert backend.precision == 'fp64'

    def test_cpu_simple_regression(self):
        backend = get_backend('cpu')

        np.random.seed(42)
        n, p = 100, 3
        X = np.random.randn(n, p)
        beta_true = np.array([1.0, 2.0, -1.5])
        y = X @ beta_true + 0.1 * np.random.randn(n)

        result = backend.fit_linear_model(X, y)

        assert result.coef.shape == (p + 1,)  # +1 for intercept
        assert result.residuals.shape == (n,)
        assert result.fitted_values.shape == (n,)
        assert result.rank == p + 1
        assert result.df_residual == n - p - 1

        assert np.allclose(result.coef[1:], beta_true, atol=0.1)
        np.testing.assert_allclose(result.fitted_values + result.residuals, y)

    def test_matches_lstsq(self):
        np.random.seed(0)
        X = np.random.randn(30, 4)
        y = np.random.randn(30)

        result = get_backend('cpu').fit_linear_model(X, y)
        expected, *_ = np.linalg.lstsq(np.column_stack([np.ones(30), X]), y, rcond=None)

        np.testing.assert_allclose(result.coef, expected, rtol=1e-10, atol=1e-12)

    def test_collinear_columns_are_aliased(self):
        np.random.seed(1)
        a = np.random.randn(25)
        X = np.column_stack([a, 2 * a, np.random.randn(25)])
        y = np.random.randn(25)

        result = get_backend('cpu').fit_linear_model(X, y)

        assert result.rank == 3
        assert np.isnan(result.coef).sum() == 1
        assert result.df_residual == 25 - 3

    def test_singular_not_ok_raises(self):
        np.random.seed(1)
        a = np.random.randn(25)
        X = np.column_stack([a, 2 * a])
        y = np.random.randn(25)

        with pytest.raises(SingularFitError, match="rank 2 < 3"):
            get_backend('cpu').fit_linear_model(X, y, singular_ok=False)

    def test_singular_fit_error_is_value_error(self):
        assert issubclass(SingularFitError, ValueError)

    def test_backend_interface_is_fitting_only(self):
        assert BackendBase.__abstractmethods__ == frozenset({'fit_linear_model'})
        assert not hasattr(CPUBackendFP64(), 'get_device_info')
