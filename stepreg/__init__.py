"""
stepreg: stepwise forward selection for OLS regression with R-compatible numerics.

Copyright (C) 2024 SGCX
Licensed under GPL-3.0
"""

__version__ = "1.0.0"

from .lm import lm, LinearModel
from .stepwise import (
    ols_step_forward,
    StepwiseForwardSelector,
    StepForwardResult,
    StepRecord,
    ModelSelectionData,
)
from .report import print_step_forward, format_step_forward
from .exceptions import (
    StepregError,
    InvalidModelError,
    InvalidParameterError,
    SingularFitError,
)
from ._backends import get_backend, list_available_backends

__all__ = [
    'lm',
    'LinearModel',
    'ols_step_forward',
    'StepwiseForwardSelector',
    'StepForwardResult',
    'StepRecord',
    'ModelSelectionData',
    'print_step_forward',
    'format_step_forward',
    'StepregError',
    'InvalidModelError',
    'InvalidParameterError',
    'SingularFitError',
    'get_backend',
    'list_available_backends',
]
