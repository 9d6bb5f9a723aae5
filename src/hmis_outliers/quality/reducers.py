"""
Missing-aware reductions.

Every reduction skips missing values and yields missing when nothing is left
to reduce, so a group without evaluable data never reads as 0.
"""

import numpy as np
import pandas as pd
from typing import Iterable, List

REDUCERS = ('max', 'mean')


def _check_op(op: str) -> str:
    if op not in REDUCERS:
        raise ValueError(f"Unknown reducer {op!r}; expected one of {REDUCERS}")
    return op


def missing_aware(values: pd.Series, op: str = 'mean') -> float:
    """Reduce one series, ignoring NaN; NaN if every value is missing."""
    values = pd.Series(values, dtype=float).dropna()
    if values.empty:
        return np.nan
    return float(getattr(values, _check_op(op))())


def reduce_groups(df: pd.DataFrame, by: Iterable[str], columns: Iterable[str], op: str = 'mean') -> pd.DataFrame:
    """
    Reduce ``columns`` within each group of ``by``.

    Returns one row per group with the key columns first. An empty ``by``
    reduces the whole table to a single row.
    """
    by: List[str] = list(by)
    columns = list(columns)
    _check_op(op)

    if not by:
        return pd.DataFrame([{col: missing_aware(df[col], op) for col in columns}], columns=columns)

    grouped = df.groupby(by, sort=True, dropna=False, observed=True)[columns]
    return getattr(grouped, op)().reset_index()


def reduce_rows(df: pd.DataFrame, columns: Iterable[str], op: str = 'mean') -> pd.Series:
    """Reduce across ``columns`` for every row (NaN where the whole row is missing)."""
    columns = list(columns)
    return getattr(df[columns].astype(float), _check_op(op))(axis=1, skipna=True)
