"""
Annual and district-level rollups of extreme outlier flags.

Both builders turn per-month flags into non-outlier percentages per
indicator and add two composite rates:

- ``mean_out_all``: mean over every indicator;
- ``mean_out_four``: mean over the indicators outside the in-patient group.

Composites are averaged on the outlier incidence and only then converted to
percentages, the same way as the per-indicator columns.
"""

import pandas as pd
from typing import Dict, List, Optional

from hmis_outliers.etl.validate import check_cd_data
from hmis_outliers.indicators import ADMIN_LEVELS, DEFAULT_CATALOG, IndicatorCatalog, get_admin_columns
from hmis_outliers.quality.artifacts import DistrictOutlierSummary, OutlierSummary
from hmis_outliers.quality.outliers import calculate_outlier_core
from hmis_outliers.quality.reducers import reduce_groups, reduce_rows
from hmis_outliers.quality.registry import IndicatorColumns, build_registry, flag_columns
from hmis_outliers.quality.settings import OutlierSettings
from hmis_outliers.utils.helpers import match_arg, to_non_outlier_pct
from hmis_outliers.utils.logger import logger

COMPOSITE_COLUMNS = ['mean_out_all', 'mean_out_four']


def _present_registry(core: pd.DataFrame, catalog: IndicatorCatalog) -> Dict[str, IndicatorColumns]:
    return build_registry(ind for ind in catalog.indicators if ind in core.columns)


def _add_composites(
    rates: pd.DataFrame,
    registry: Dict[str, IndicatorColumns],
    catalog: IndicatorCatalog,
    decimals: int,
) -> pd.DataFrame:
    """Add composite rates, then convert incidence to rounded non-outlier percentages."""
    all_flags = flag_columns(registry)
    tracer_flags = flag_columns(registry, catalog.tracers)

    rates = rates.copy()
    rates['mean_out_all'] = reduce_rows(rates, all_flags, op='mean')
    rates['mean_out_four'] = reduce_rows(rates, tracer_flags, op='mean')

    pct_cols = all_flags + COMPOSITE_COLUMNS
    rates[pct_cols] = to_non_outlier_pct(rates[pct_cols], decimals)
    return rates


def calculate_outliers_summary(
    df: pd.DataFrame,
    admin_level: str = 'national',
    settings: Optional[OutlierSettings] = None,
    catalog: Optional[IndicatorCatalog] = None,
) -> OutlierSummary:
    """
    Annual percentage of non-outlier months per indicator and unit.

    For each unit and year the mean of the monthly flags (missing flags
    excluded) is taken and reported as ``round((1 - mean) * 100)``.

    Args:
        df: Health-facility indicator table.
        admin_level: 'national', 'adminlevel_1' or 'district'.
        settings: Rule parameters and rounding.
        catalog: Indicator catalog (defaults to ``configs/indicators.yaml``).

    Returns:
        OutlierSummary with admin columns, ``year``, one ``{ind}_outlier5std``
        column per indicator, ``mean_out_all`` and ``mean_out_four``.
    """
    settings = settings or OutlierSettings.from_config()
    catalog = catalog or DEFAULT_CATALOG

    check_cd_data(df, catalog.indicators)
    admin_level = match_arg(admin_level, ADMIN_LEVELS, 'admin_level')
    admin_cols = get_admin_columns(admin_level)

    core = calculate_outlier_core(df, catalog.indicators, admin_level=admin_level, settings=settings)
    registry = _present_registry(core, catalog)

    rates = reduce_groups(core, admin_cols + ['year'], flag_columns(registry), op='mean')
    summary = _add_composites(rates, registry, catalog, settings.annual_decimals)

    logger.info(f"Annual outlier summary: {len(summary)} rows at {admin_level} level")
    return OutlierSummary(data=summary, admin_level=admin_level)


def calculate_district_outlier_summary(
    df: pd.DataFrame,
    settings: Optional[OutlierSettings] = None,
    catalog: Optional[IndicatorCatalog] = None,
) -> DistrictOutlierSummary:
    """
    Yearly percentage of districts free of extreme outliers.

    Flags are computed at district level, reduced to the worst month per
    district and year (a district with no evaluable month stays missing),
    then averaged over districts within each year.

    Args:
        df: Health-facility indicator table.
        settings: Rule parameters and rounding.
        catalog: Indicator catalog (defaults to ``configs/indicators.yaml``).

    Returns:
        DistrictOutlierSummary with ``year``, one ``{ind}_outlier5std`` column
        per indicator, ``mean_out_all`` and ``mean_out_four``.
    """
    settings = settings or OutlierSettings.from_config()
    catalog = catalog or DEFAULT_CATALOG

    check_cd_data(df, catalog.indicators)
    district_cols: List[str] = get_admin_columns('district')

    core = calculate_outlier_core(df, catalog.indicators, admin_level='district', settings=settings)
    registry = _present_registry(core, catalog)
    flags = flag_columns(registry)

    worst = reduce_groups(core, district_cols + ['year'], flags, op='max')
    rates = reduce_groups(worst, ['year'], flags, op='mean')
    summary = _add_composites(rates, registry, catalog, settings.district_decimals)

    logger.info(f"District outlier summary: {len(summary)} years from {len(worst)} district-years")
    return DistrictOutlierSummary(data=summary)
