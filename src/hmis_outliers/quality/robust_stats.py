"""
Robust per-group statistics and the Hampel X84 outlier flag.

For each indicator and group the median and the (scaled) Median Absolute
Deviation are computed over non-missing values, and each value is flagged
when it lies strictly more than ``threshold`` MADs from the median.
"""

import numpy as np
import pandas as pd
from scipy import stats
from typing import Dict, Iterable, List, Optional

from hmis_outliers.quality.registry import IndicatorColumns, build_registry
from hmis_outliers.quality.settings import MAD_NORMAL_CONSTANT, OutlierSettings


def median_abs_deviation(values, constant: float = MAD_NORMAL_CONSTANT) -> float:
    """
    Scaled MAD of the non-missing ``values``: ``median(|x - median(x)|) * constant``.

    Returns NaN when no value is present.
    """
    x = np.asarray(values, dtype=float)
    x = x[~np.isnan(x)]
    if x.size == 0:
        return np.nan
    # scipy divides by ``scale``
    return float(stats.median_abs_deviation(x, scale=1.0 / constant))


def _grouped(df: pd.DataFrame, group_by: List[str]):
    if not group_by:
        return df.groupby(np.zeros(len(df), dtype=int))
    return df.groupby(group_by, sort=False, dropna=False, observed=True)


def add_outlier5std_columns(
    df: pd.DataFrame,
    indicators: Iterable[str],
    group_by: Iterable[str],
    settings: Optional[OutlierSettings] = None,
    registry: Optional[Dict[str, IndicatorColumns]] = None,
) -> pd.DataFrame:
    """
    Add ``_med``, ``_mad`` and ``_outlier5std`` columns for each indicator.

    Args:
        df: One row per observation (typically unit-month means).
        indicators: Indicator columns to evaluate.
        group_by: Columns defining the groups; empty means the whole table.
        settings: Rule parameters (defaults from ``configs/outliers.yaml``).
        registry: Column handles; built from ``indicators`` when omitted.

    Returns:
        A copy of ``df`` with the new columns. Flags are 1.0, 0.0 or NaN:
        NaN for missing values and for groups with fewer than
        ``settings.min_observations`` non-missing values.
    """
    settings = settings or OutlierSettings.from_config()
    indicators = list(indicators)
    registry = registry or build_registry(indicators)

    out = df.copy()
    grouped = _grouped(out, list(group_by))
    min_obs = settings.min_observations

    def group_mad(s: pd.Series) -> float:
        if s.count() < min_obs:
            return np.nan
        return median_abs_deviation(s, settings.mad_constant)

    for ind in indicators:
        cols = registry[ind]
        values = out[cols.value].astype(float)
        median = grouped[cols.value].transform('median').astype(float)
        mad = grouped[cols.value].transform(group_mad).astype(float)

        flag = ((values - median).abs() > settings.threshold * mad).astype(float)
        flag = flag.where(values.notna() & mad.notna())

        out[cols.median] = median
        out[cols.mad] = mad
        out[cols.flag] = flag

    return out
