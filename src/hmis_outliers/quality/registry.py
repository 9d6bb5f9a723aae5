from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

FLAG_SUFFIX = '_outlier5std'


@dataclass(frozen=True)
class IndicatorColumns:
    """Column names produced for one indicator."""
    indicator: str

    @property
    def value(self) -> str:
        return self.indicator

    @property
    def median(self) -> str:
        return f"{self.indicator}_med"

    @property
    def mad(self) -> str:
        return f"{self.indicator}_mad"

    @property
    def flag(self) -> str:
        return f"{self.indicator}{FLAG_SUFFIX}"

    def all(self) -> List[str]:
        return [self.value, self.median, self.mad, self.flag]


def build_registry(indicators: Iterable[str]) -> Dict[str, IndicatorColumns]:
    """Map each indicator to its value/median/MAD/flag columns, keeping order."""
    return {ind: IndicatorColumns(ind) for ind in indicators}


def flag_columns(registry: Dict[str, IndicatorColumns], indicators: Optional[Iterable[str]] = None) -> List[str]:
    names = registry.keys() if indicators is None else [i for i in indicators if i in registry]
    return [registry[name].flag for name in names]
