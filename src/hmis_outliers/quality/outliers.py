"""
Record-level extreme outlier detection.

Raw submissions are first averaged per unit and month, then each unit's
monthly series is screened with the Hampel X84 rule (5 x MAD).
"""

import pandas as pd
from typing import Iterable, Optional, Union

from hmis_outliers.etl.aggregate import PERIOD_COLUMNS, aggregate_monthly
from hmis_outliers.etl.validate import check_cd_data, present_indicators
from hmis_outliers.exceptions import UsageError
from hmis_outliers.indicators import ADMIN_LEVELS, IndicatorCatalog, get_admin_columns, get_all_indicators
from hmis_outliers.quality.artifacts import OutlierUnitList
from hmis_outliers.quality.registry import build_registry
from hmis_outliers.quality.robust_stats import add_outlier5std_columns
from hmis_outliers.quality.settings import OutlierSettings
from hmis_outliers.utils.helpers import match_arg
from hmis_outliers.utils.logger import logger

UNIT_LEVELS = ('adminlevel_1', 'district')


def calculate_outlier_core(
    df: pd.DataFrame,
    indicators: Union[str, Iterable[str]],
    admin_level: str = 'national',
    settings: Optional[OutlierSettings] = None,
) -> pd.DataFrame:
    """
    Compute monthly values, medians, MADs and outlier flags.

    Args:
        df: Health-facility indicator table.
        indicators: Indicator column(s) to evaluate.
        admin_level: 'national', 'adminlevel_1' or 'district'.
        settings: Rule parameters.

    Returns:
        One row per (unit, year, month) with ``{ind}``, ``{ind}_med``,
        ``{ind}_mad`` and ``{ind}_outlier5std`` for every indicator present.

    Raises:
        SchemaError: If the input table is malformed.
        UsageError: If ``admin_level`` is unknown or ``indicators`` is empty.
    """
    if isinstance(indicators, str):
        indicators = [indicators]
    indicators = list(dict.fromkeys(indicators)) if indicators is not None else []
    if not indicators:
        raise UsageError('indicators', indicators, message="`indicators` must name at least one indicator")

    check_cd_data(df, indicators)
    admin_level = match_arg(admin_level, ADMIN_LEVELS, 'admin_level')
    admin_cols = get_admin_columns(admin_level)

    monthly = aggregate_monthly(df, indicators, admin_cols)
    found = present_indicators(monthly, indicators)
    registry = build_registry(found)

    logger.info(f"Screening {len(found)} indicators for extreme outliers at {admin_level} level")
    out = add_outlier5std_columns(
        monthly,
        indicators=found,
        group_by=admin_cols,
        settings=settings,
        registry=registry,
    )

    columns = admin_cols + PERIOD_COLUMNS + [col for ind in found for col in registry[ind].all()]
    return out[columns]


def list_outlier_units(
    df: pd.DataFrame,
    indicator: str,
    admin_level: str = 'adminlevel_1',
    settings: Optional[OutlierSettings] = None,
    catalog: Optional[IndicatorCatalog] = None,
) -> OutlierUnitList:
    """
    Monthly outlier listing of a single indicator per administrative unit.

    Args:
        df: Health-facility indicator table.
        indicator: One indicator from the catalog.
        admin_level: 'adminlevel_1' or 'district'; national is not a unit level.
        settings: Rule parameters.
        catalog: Indicator catalog used to validate ``indicator``.

    Returns:
        OutlierUnitList with admin columns, year, month and the indicator's
        value, median, MAD and raw 0/1 flag.
    """
    indicator = match_arg(indicator, get_all_indicators(catalog), 'indicator', default_first=False)
    admin_level = match_arg(admin_level, UNIT_LEVELS, 'admin_level')
    check_cd_data(df, [indicator])

    core = calculate_outlier_core(df, [indicator], admin_level=admin_level, settings=settings)
    columns = get_admin_columns(admin_level) + PERIOD_COLUMNS + build_registry([indicator])[indicator].all()

    return OutlierUnitList(
        data=core[columns].reset_index(drop=True),
        admin_level=admin_level,
        indicator=indicator,
    )
