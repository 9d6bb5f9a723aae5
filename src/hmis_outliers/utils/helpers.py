import pandas as pd
from typing import Any, Iterable, Optional

from hmis_outliers.exceptions import UsageError


def match_arg(value: Optional[Any], allowed: Iterable[Any], parameter: str,
              default_first: bool = True) -> Any:
    """
    Resolve an enumerated argument.

    ``None`` selects the first allowed value when ``default_first`` is set;
    anything else outside ``allowed`` raises ``UsageError`` naming the
    allowed values.
    """
    allowed = list(allowed)
    if value is None and default_first:
        return allowed[0]
    if value not in allowed:
        raise UsageError(parameter, value, allowed)
    return value


def to_non_outlier_pct(x: pd.DataFrame, decimals: int) -> pd.DataFrame:
    """Turn outlier incidence (0..1) into a rounded non-outlier percentage."""
    # DataFrame.round rounds half to even, like R's round()
    return ((1 - x) * 100).round(decimals)
