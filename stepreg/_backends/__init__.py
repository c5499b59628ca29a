"""
Backend selection.

Only the FP64 CPU backend ships with stepreg; 'auto' resolves to it.
"""

from .base import BackendBase, LinearModelResult
from .cpu_fp64_backend import CPUBackendFP64


_BACKENDS = {
    'cpu': CPUBackendFP64,
}


def get_backend(backend='auto') -> BackendBase:
    """
    Get computational backend.

    Parameters
    ----------
    backend : str or BackendBase
        Backend selection:
        - 'auto': best available backend (currently always CPU)
        - 'cpu': CPU with NumPy/SciPy (FP64, R-compatible)
        A ready-made ``BackendBase`` instance is returned unchanged.

    Returns
    -------
    BackendBase
        Backend instance

    Examples
    --------
    >>> backend = get_backend('cpu')
    >>> backend.name
    'cpu_fp64'
    """
    if isinstance(backend, BackendBase):
        return backend

    if backend == 'auto':
        backend = 'cpu'

    try:
        return _BACKENDS[backend]()
    except (KeyError, TypeError):
        raise ValueError(
            f"Unknown backend: {backend!r}\n"
            f"Valid options: 'auto', {', '.join(repr(b) for b in _BACKENDS)}"
        ) from None


def list_available_backends() -> list:
    """List names of available backends."""
    return list(_BACKENDS)


__all__ = [
    'get_backend',
    'list_available_backends',
    'BackendBase',
    'LinearModelResult',
    'CPUBackendFP64',
]
