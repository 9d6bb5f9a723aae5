import pandas as pd
from typing import Iterable, List

from hmis_outliers.etl.validate import present_indicators
from hmis_outliers.quality.reducers import reduce_groups
from hmis_outliers.utils.logger import logger

PERIOD_COLUMNS = ['year', 'month']


def aggregate_monthly(df: pd.DataFrame, indicators: Iterable[str], admin_cols: Iterable[str]) -> pd.DataFrame:
    """
    Collapse raw submissions to one mean value per unit, year and month.

    Missing values are ignored; a period where every submission is missing
    stays missing. Indicators absent from ``df`` are skipped.
    """
    indicators = list(dict.fromkeys(indicators))
    found = present_indicators(df, indicators)
    skipped = [ind for ind in indicators if ind not in found]
    if skipped:
        logger.warning(f"Skipping indicators not present in data: {skipped}")

    keys: List[str] = list(admin_cols) + PERIOD_COLUMNS
    out = reduce_groups(df, keys, found, op='mean')
    logger.debug(f"Aggregated {len(df)} rows to {len(out)} unit-months")
    return out
