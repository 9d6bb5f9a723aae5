"""
Indicator catalog and administrative levels.

The catalog is read from ``configs/indicators.yaml``; callers that need a
different indicator set build their own ``IndicatorCatalog`` and pass it to
the summary builders.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from hmis_outliers.utils.config import INDICATOR_CFG
from hmis_outliers.utils.helpers import match_arg

ADMIN_LEVELS: Tuple[str, ...] = ('national', 'adminlevel_1', 'district')

ADMIN_COLUMNS: Dict[str, Tuple[str, ...]] = {
    'national': (),
    'adminlevel_1': ('adminlevel_1',),
    'district': ('adminlevel_1', 'district'),
}


@dataclass(frozen=True)
class IndicatorCatalog:
    """Ordered indicator names plus their named groups."""
    groups: Mapping[str, Tuple[str, ...]]
    inpatient_group: str = 'ipd'
    indicators: Tuple[str, ...] = field(init=False)

    def __post_init__(self):
        groups = {name: tuple(members) for name, members in self.groups.items()}
        ordered: List[str] = []
        for members in groups.values():
            ordered.extend(m for m in members if m not in ordered)
        object.__setattr__(self, 'groups', groups)
        object.__setattr__(self, 'indicators', tuple(ordered))

    @classmethod
    def from_config(cls, cfg: Optional[dict] = None) -> 'IndicatorCatalog':
        cfg = INDICATOR_CFG if cfg is None else cfg
        return cls(
            groups=cfg.get('groups', {}),
            inpatient_group=cfg.get('inpatient_group', 'ipd'),
        )

    @property
    def inpatient(self) -> Tuple[str, ...]:
        return self.groups.get(self.inpatient_group, ())

    @property
    def tracers(self) -> Tuple[str, ...]:
        """Indicators counted in ``mean_out_four``: everything outside the in-patient group."""
        return tuple(i for i in self.indicators if i not in self.inpatient)


DEFAULT_CATALOG = IndicatorCatalog.from_config()


def get_all_indicators(catalog: Optional[IndicatorCatalog] = None) -> Tuple[str, ...]:
    return (catalog or DEFAULT_CATALOG).indicators


def get_indicator_groups(catalog: Optional[IndicatorCatalog] = None) -> Dict[str, Tuple[str, ...]]:
    return dict((catalog or DEFAULT_CATALOG).groups)


def get_admin_columns(admin_level: str) -> List[str]:
    """Grouping columns for an administrative level, coarsest first."""
    admin_level = match_arg(admin_level, ADMIN_LEVELS, 'admin_level')
    return list(ADMIN_COLUMNS[admin_level])
