"""
Input validation for health-facility indicator tables.

Checks required columns, indicator column types and month values before any
outlier computation runs.
"""

import pandas as pd
from typing import Iterable, List, Optional

from hmis_outliers.exceptions import SchemaError
from hmis_outliers.indicators import get_all_indicators
from hmis_outliers.utils.logger import logger

REQUIRED_COLUMNS = ['adminlevel_1', 'district', 'year', 'month']


def validate_required_columns(df: pd.DataFrame, required: Iterable[str]) -> None:
    """
    Check that every required column is present.

    Raises:
        SchemaError: listing the missing columns.
    """
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise SchemaError(
            f"Missing required columns: {', '.join(missing)}. "
            f"Available columns: {', '.join(map(str, df.columns))}",
            missing_columns=missing,
        )


def present_indicators(df: pd.DataFrame, indicators: Iterable[str]) -> List[str]:
    """Indicators that exist as columns, in the given order."""
    return [ind for ind in indicators if ind in df.columns]


def check_cd_data(df: pd.DataFrame, indicators: Optional[Iterable[str]] = None) -> None:
    """
    Validate a health-facility indicator table.

    Args:
        df: Input table, one row per facility/unit submission.
        indicators: Indicator columns to look for (defaults to the catalog).

    Raises:
        SchemaError: If admin/time columns are missing, no indicator column
            is present, an indicator column is not numeric or a month lies
            outside 1-12.
    """
    if not isinstance(df, pd.DataFrame):
        raise SchemaError(f"Expected a pandas DataFrame, got {type(df).__name__}")

    validate_required_columns(df, REQUIRED_COLUMNS)

    indicators = list(get_all_indicators() if indicators is None else indicators)
    found = present_indicators(df, indicators)
    if not found:
        raise SchemaError(
            "None of the indicator columns are present",
            missing_columns=indicators,
        )

    non_numeric = [ind for ind in found if not pd.api.types.is_numeric_dtype(df[ind])]
    if non_numeric:
        raise SchemaError(
            f"Indicator columns must be numeric: {', '.join(non_numeric)}",
            details={'non_numeric_columns': non_numeric},
        )

    non_numeric_periods = [col for col in ('year', 'month') if not pd.api.types.is_numeric_dtype(df[col])]
    if non_numeric_periods:
        raise SchemaError(
            f"Period columns must be numeric: {', '.join(non_numeric_periods)}",
            details={'non_numeric_columns': non_numeric_periods},
        )

    months = df['month'].dropna()
    bad_months = int((~months.between(1, 12)).sum())
    if bad_months:
        raise SchemaError(
            f"Column 'month' has {bad_months} values outside 1-12",
            details={'invalid_months': bad_months},
        )

    skipped = [ind for ind in indicators if ind not in found]
    if skipped:
        logger.debug(f"Indicators not present in data: {skipped}")
