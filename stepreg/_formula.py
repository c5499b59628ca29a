"""
R-style formula parsing on top of patsy.

Formulas are restricted to additive main effects of numeric columns with
an intercept: ``"y ~ a + b"``, ``"y ~ ."`` and ``"y ~ . - c"``. As in R,
``.`` stands for every column of the data except the response.
Non-identifier column names are written ``Q("my col")``.
"""

import keyword
import re
from typing import List, Tuple

import pandas as pd
from patsy import INTERCEPT, ModelDesc, PatsyError


_DOT = re.compile(r'(?<![\w.])\.(?![\w.])')
_QUOTED = re.compile(r"""^Q\((['"])(.*)\1\)$""")


def is_formula(obj) -> bool:
    return isinstance(obj, str) and '~' in obj


def parse_formula(formula: str, data: pd.DataFrame) -> Tuple[str, List[str]]:
    """
    Split a formula into response and predictor column names.

    Parameters
    ----------
    formula : str
        Formula such as ``"y ~ x1 + x2"``, ``"y ~ ."`` or ``"y ~ . - x3"``
    data : DataFrame
        Data the names refer to

    Returns
    -------
    (response, predictors)

    Examples
    --------
    >>> df = pd.DataFrame({'y': [1, 2], 'a': [3, 4], 'b': [5, 6]})
    >>> parse_formula('y ~ .', df)
    ('y', ['a', 'b'])
    >>> parse_formula('y ~ . - a', df)
    ('y', ['b'])
    """
    if data is None:
        raise ValueError("Must provide data when using a formula")

    lhs, _, rhs = formula.partition('~')
    lhs_desc = _model_desc(f"{lhs} ~ 1", formula)
    if len(lhs_desc.lhs_termlist) != 1:
        raise ValueError(f"Formula must have exactly one response: {formula!r}")
    response = _column_of(lhs_desc.lhs_termlist[0], data)

    if _DOT.search(rhs):
        others = [c for c in data.columns if c != response]
        if not all(isinstance(c, str) for c in others):
            raise ValueError("'.' in a formula requires string column names")
        expansion = ' + '.join(_quote(c) for c in others) or '1'
        rhs = _DOT.sub(f'({expansion})', rhs)

    desc = _model_desc(f"{lhs} ~ {rhs}", formula)
    if INTERCEPT not in desc.rhs_termlist:
        raise ValueError("Models without an intercept are not supported")

    predictors = [
        _column_of(term, data)
        for term in desc.rhs_termlist
        if term != INTERCEPT
    ]
    if response in predictors:
        raise ValueError(f"Response '{response}' also appears as a predictor")
    if not predictors:
        raise ValueError(f"Formula has no predictors: {formula!r}")

    return response, predictors


def _model_desc(text, formula):
    try:
        return ModelDesc.from_formula(text)
    except PatsyError as exc:
        raise ValueError(f"Malformed formula: {formula!r}") from exc


def _quote(name):
    if name.isidentifier() and not keyword.iskeyword(name):
        return name
    return f"Q({name!r})"


def _column_of(term, data):
    """Column name behind a single-factor term; anything else is rejected."""
    if len(term.factors) != 1:
        raise ValueError(
            f"Term '{term.name()}' is not supported (only additive main effects)"
        )
    code = term.factors[0].code
    quoted = _QUOTED.match(code)
    name = quoted.group(2) if quoted else code
    if name not in data.columns:
        raise ValueError(
            f"Term '{code}' is not a column of data "
            f"(only additive formulas are supported)"
        )
    if not pd.api.types.is_numeric_dtype(data[name]):
        raise ValueError(f"Column '{name}' is not numeric")
    return name
