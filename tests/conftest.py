"""
Shared fixtures for hmis-outliers tests.

Provides:
- a synthetic monthly indicator table (2 regions x 2 districts x 2 years)
- a builder for variants with injected outliers and missing values
- a small indicator catalog
"""

import os
import sys
import tempfile
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

# Make the src/ layout importable without installation
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

os.environ.setdefault('LOG_LEVEL', 'WARNING')
os.environ.setdefault('HMIS_OUTLIERS_LOG_DIR', tempfile.mkdtemp(prefix='hmis_outliers_logs_'))


REGIONS = {'North': ['N1', 'N2'], 'South': ['S1', 'S2']}
YEARS = (2022, 2023)
BASES = {'anc1': 100, 'penta1': 200, 'measles1': 150, 'opd_total': 500}


def build_cd_data(changes=None):
    """
    Build a monthly table where every indicator follows ``base + month % 4``.

    Args:
        changes: Mapping ``(district, year, month, indicator) -> value``;
            ``month=None`` applies the value to the whole year.
    """
    rows = []
    for region, districts in REGIONS.items():
        for district in districts:
            for year in YEARS:
                for month in range(1, 13):
                    row = {'adminlevel_1': region, 'district': district, 'year': year, 'month': month}
                    for ind, base in BASES.items():
                        row[ind] = float(base + month % 4)
                    rows.append(row)
    df = pd.DataFrame(rows)

    for (district, year, month, ind), value in (changes or {}).items():
        mask = (df['district'] == district) & (df['year'] == year)
        if month is not None:
            mask &= df['month'] == month
        df.loc[mask, ind] = value
    return df


# ============================================================================
# TEST DATA FIXTURES
# ============================================================================

@pytest.fixture
def make_cd_data():
    """Factory for indicator tables with injected values."""
    return build_cd_data


@pytest.fixture
def cd_data():
    """Indicator table with a single extreme anc1 value (N1, May 2022)."""
    return build_cd_data({('N1', 2022, 5, 'anc1'): 1000.0})


@pytest.fixture
def catalog():
    """Catalog of the four indicators in the synthetic table."""
    from hmis_outliers.indicators import IndicatorCatalog

    return IndicatorCatalog(groups={
        'anc': ['anc1'],
        'vacc': ['penta1', 'measles1'],
        'ipd': ['opd_total'],
    })


@pytest.fixture
def unscaled():
    """Settings with an unscaled MAD, so thresholds are exact integers."""
    from hmis_outliers.quality import OutlierSettings

    return OutlierSettings(mad_constant=1.0)


@pytest.fixture
def csv_file(tmp_path, cd_data):
    path = tmp_path / 'cd_data.csv'
    cd_data.to_csv(path, index=False)
    return path


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "integration: end-to-end tests over the CLI"
    )
