"""Exceptions raised by stepreg."""


class StepregError(Exception):
    """Base exception for all stepreg errors."""
    pass


class InvalidModelError(StepregError, TypeError):
    """Input is not a usable OLS fit (wrong type or too few predictors)."""
    pass


class InvalidParameterError(StepregError, ValueError):
    """A selection parameter (penter, details) is out of range or mistyped."""
    pass


class SingularFitError(StepregError, ValueError):
    """Design matrix is not of full column rank."""
    pass
