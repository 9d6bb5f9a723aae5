"""
hmis-outliers: extreme outlier screening for routine health-facility data.
"""

from .exceptions import OutlierCheckError, SchemaError, UsageError
from .indicators import IndicatorCatalog, get_admin_columns, get_all_indicators, get_indicator_groups
from .quality import (
    OutlierSettings,
    calculate_district_outlier_summary,
    calculate_outlier_core,
    calculate_outliers_summary,
    list_outlier_units,
)

__version__ = '0.1.0'

__all__ = [
    'OutlierCheckError',
    'SchemaError',
    'UsageError',
    'IndicatorCatalog',
    'get_admin_columns',
    'get_all_indicators',
    'get_indicator_groups',
    'OutlierSettings',
    'calculate_district_outlier_summary',
    'calculate_outlier_core',
    'calculate_outliers_summary',
    'list_outlier_units',
]
