"""
Extreme outlier detection for health-facility indicator data.

Provides the Hampel X84 (5 x MAD) screen and its annual/district rollups.
"""

from .artifacts import DistrictOutlierSummary, OutlierArtifact, OutlierSummary, OutlierUnitList
from .outliers import calculate_outlier_core, list_outlier_units
from .reducers import missing_aware, reduce_groups, reduce_rows
from .registry import IndicatorColumns, build_registry
from .robust_stats import add_outlier5std_columns, median_abs_deviation
from .settings import MAD_NORMAL_CONSTANT, OutlierSettings
from .summaries import calculate_district_outlier_summary, calculate_outliers_summary

__all__ = [
    'DistrictOutlierSummary',
    'OutlierArtifact',
    'OutlierSummary',
    'OutlierUnitList',
    'calculate_outlier_core',
    'list_outlier_units',
    'missing_aware',
    'reduce_groups',
    'reduce_rows',
    'IndicatorColumns',
    'build_registry',
    'add_outlier5std_columns',
    'median_abs_deviation',
    'MAD_NORMAL_CONSTANT',
    'OutlierSettings',
    'calculate_district_outlier_summary',
    'calculate_outliers_summary',
]
