from dataclasses import dataclass
from typing import Optional

from hmis_outliers.utils.config import OUTLIER_CFG

MAD_NORMAL_CONSTANT = 1.4826


@dataclass(frozen=True)
class OutlierSettings:
    """
    Parameters of the Hampel X84 rule and of the summary rounding.

    Attributes:
        threshold: Number of MADs a value may lie from the median before it is flagged.
        mad_constant: Factor applied to the raw MAD; 1.4826 makes the MAD a
            consistent estimate of the standard deviation for normal data,
            so the default rule flags values beyond roughly 7.4 sigma.
        min_observations: Groups with fewer non-missing values get no MAD.
        annual_decimals: Rounding of the annual summary percentages.
        district_decimals: Rounding of the district rollup percentages.
    """
    threshold: float = 5.0
    mad_constant: float = MAD_NORMAL_CONSTANT
    min_observations: int = 2
    annual_decimals: int = 0
    district_decimals: int = 2

    def __post_init__(self):
        if self.threshold <= 0:
            raise ValueError(f"threshold must be positive, got {self.threshold}")
        if self.mad_constant <= 0:
            raise ValueError(f"mad_constant must be positive, got {self.mad_constant}")
        if self.min_observations < 1:
            raise ValueError(f"min_observations must be at least 1, got {self.min_observations}")

    @classmethod
    def from_config(cls, cfg: Optional[dict] = None) -> 'OutlierSettings':
        cfg = OUTLIER_CFG if cfg is None else cfg
        rounding = cfg.get('rounding', {})
        return cls(
            threshold=float(cfg.get('threshold', 5.0)),
            mad_constant=float(cfg.get('mad_constant', MAD_NORMAL_CONSTANT)),
            min_observations=int(cfg.get('min_observations', 2)),
            annual_decimals=int(rounding.get('annual_summary', 0)),
            district_decimals=int(rounding.get('district_summary', 2)),
        )
