"""
Result objects returned by the outlier builders.

Each artifact wraps a DataFrame and carries a ``kind`` tag plus the metadata
a downstream consumer (a report, a plot keyed by region) dispatches on.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar, Dict, Optional

import pandas as pd


@dataclass(frozen=True, eq=False)
class OutlierArtifact:
    """Base class: a result table plus its administrative level."""
    data: pd.DataFrame
    admin_level: str

    kind: ClassVar[str] = 'cd_outlier_artifact'

    def __len__(self) -> int:
        return len(self.data)

    @property
    def metadata(self) -> Dict[str, Any]:
        return {'kind': self.kind, 'admin_level': self.admin_level}

    def to_dict(self) -> Dict[str, Any]:
        """Convert artifact to dictionary (missing values become None)."""
        records = self.data.astype(object).where(self.data.notna(), None).to_dict(orient='records')
        return {**self.metadata, 'rows': records}

    def to_json(self, filepath: Optional[Path] = None) -> str:
        json_str = json.dumps(self.to_dict(), indent=2, default=str)
        if filepath:
            Path(filepath).write_text(json_str, encoding='utf-8')
        return json_str

    def to_csv(self, filepath: Path) -> None:
        self.data.to_csv(filepath, index=False)


@dataclass(frozen=True, eq=False)
class OutlierSummary(OutlierArtifact):
    """Annual non-outlier percentages per unit and year."""
    kind: ClassVar[str] = 'cd_outlier'


@dataclass(frozen=True, eq=False)
class DistrictOutlierSummary(OutlierArtifact):
    """Yearly percentage of districts without extreme outliers."""
    admin_level: str = 'district'

    kind: ClassVar[str] = 'cd_district_outliers_summary'


@dataclass(frozen=True, eq=False)
class OutlierUnitList(OutlierArtifact):
    """Monthly value, median, MAD and flag of one indicator per unit."""
    indicator: str = ''

    kind: ClassVar[str] = 'cd_outlier_list'

    @property
    def metadata(self) -> Dict[str, Any]:
        return {**super().metadata, 'indicator': self.indicator}

    @property
    def flag_column(self) -> str:
        return f"{self.indicator}_outlier5std"

    def for_region(self, region: str) -> 'OutlierUnitList':
        """Rows of one first-level region (``adminlevel_1``)."""
        if 'adminlevel_1' not in self.data.columns:
            raise KeyError("Unit list has no 'adminlevel_1' column")
        rows = self.data[self.data['adminlevel_1'] == region].reset_index(drop=True)
        return OutlierUnitList(data=rows, admin_level=self.admin_level, indicator=self.indicator)

    def flagged(self) -> 'OutlierUnitList':
        """Only the unit-months flagged as extreme outliers."""
        rows = self.data[self.data[self.flag_column] == 1].reset_index(drop=True)
        return OutlierUnitList(data=rows, admin_level=self.admin_level, indicator=self.indicator)
