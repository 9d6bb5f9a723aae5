"""
Tests for the annual and district outlier summaries.
"""

import numpy as np
import pytest

from hmis_outliers.exceptions import SchemaError, UsageError
from hmis_outliers.indicators import IndicatorCatalog
from hmis_outliers.quality import (
    DistrictOutlierSummary,
    OutlierSummary,
    calculate_district_outlier_summary,
    calculate_outliers_summary,
)

FLAG_COLUMNS = ['anc1_outlier5std', 'penta1_outlier5std', 'measles1_outlier5std', 'opd_total_outlier5std']


class TestCalculateOutliersSummary:
    """Tests for calculate_outliers_summary."""

    def test_national_one_row_per_year(self, cd_data, catalog):
        result = calculate_outliers_summary(cd_data, admin_level='national', catalog=catalog)

        assert isinstance(result, OutlierSummary)
        assert result.kind == 'cd_outlier'
        assert result.admin_level == 'national'
        assert result.data['year'].tolist() == [2022, 2023]
        assert list(result.data.columns) == ['year'] + FLAG_COLUMNS + ['mean_out_all', 'mean_out_four']

    def test_national_percentages(self, cd_data, catalog):
        data = calculate_outliers_summary(cd_data, catalog=catalog).data.set_index('year')

        # one flagged month of twelve: round(91.67)
        assert data.loc[2022, 'anc1_outlier5std'] == 92
        assert data.loc[2022, 'penta1_outlier5std'] == 100
        # (1/12) / 4 indicators -> 97.92; (1/12) / 3 tracers -> 97.22
        assert data.loc[2022, 'mean_out_all'] == 98
        assert data.loc[2022, 'mean_out_four'] == 97
        assert (data.loc[2023] == 100).all()

    def test_missing_flags_excluded(self, make_cd_data, catalog):
        changes = {('N1', 2022, 5, 'anc1'): 1000.0}
        for district in ('N1', 'N2', 'S1', 'S2'):
            changes[(district, 2022, 3, 'anc1')] = np.nan
        df = make_cd_data(changes)

        data = calculate_outliers_summary(df, catalog=catalog).data.set_index('year')

        # one flag out of eleven evaluable months: round(90.91)
        assert data.loc[2022, 'anc1_outlier5std'] == 91

    def test_district_level(self, cd_data, catalog):
        result = calculate_outliers_summary(cd_data, admin_level='district', catalog=catalog)
        data = result.data

        assert result.admin_level == 'district'
        assert len(data) == 8
        assert list(data.columns[:3]) == ['adminlevel_1', 'district', 'year']
        n1 = data[(data['district'] == 'N1') & (data['year'] == 2022)].iloc[0]
        assert n1['anc1_outlier5std'] == 92
        others = data[~((data['district'] == 'N1') & (data['year'] == 2022))]
        assert (others[FLAG_COLUMNS] == 100).all().all()

    def test_rounded_to_whole_percent(self, cd_data, catalog):
        data = calculate_outliers_summary(cd_data, admin_level='district', catalog=catalog).data
        values = data[FLAG_COLUMNS + ['mean_out_all', 'mean_out_four']]
        assert (values == values.round(0)).all().all()

    def test_inpatient_group_only_affects_mean_out_four(self, make_cd_data, catalog):
        df = make_cd_data({('N1', 2022, 5, 'opd_total'): 5000.0})
        regrouped = IndicatorCatalog(groups={
            'anc': ['anc1'],
            'vacc': ['penta1', 'measles1'],
            'other': ['opd_total'],
        })

        with_ipd = calculate_outliers_summary(df, catalog=catalog).data.set_index('year')
        without_ipd = calculate_outliers_summary(df, catalog=regrouped).data.set_index('year')

        assert with_ipd.loc[2022, 'mean_out_four'] == 100
        assert without_ipd.loc[2022, 'mean_out_four'] == 98
        assert with_ipd.loc[2022, 'mean_out_all'] == without_ipd.loc[2022, 'mean_out_all'] == 98

    def test_default_catalog(self, cd_data):
        data = calculate_outliers_summary(cd_data).data
        assert set(FLAG_COLUMNS) <= set(data.columns)
        assert 'bcg_outlier5std' not in data.columns

    def test_invalid_admin_level(self, cd_data, catalog):
        with pytest.raises(UsageError, match="adminlevel_1"):
            calculate_outliers_summary(cd_data, admin_level='facility', catalog=catalog)

    def test_string_months_rejected(self, cd_data, catalog):
        df = cd_data.assign(month=cd_data['month'].astype(str))
        with pytest.raises(SchemaError, match="month"):
            calculate_outliers_summary(df, catalog=catalog)

    def test_missing_columns(self, cd_data, catalog):
        with pytest.raises(SchemaError):
            calculate_outliers_summary(cd_data.drop(columns=['district']), catalog=catalog)


class TestCalculateDistrictOutlierSummary:
    """Tests for calculate_district_outlier_summary."""

    def test_one_row_per_year(self, cd_data, catalog):
        result = calculate_district_outlier_summary(cd_data, catalog=catalog)

        assert isinstance(result, DistrictOutlierSummary)
        assert result.kind == 'cd_district_outliers_summary'
        assert result.admin_level == 'district'
        assert list(result.data.columns) == ['year'] + FLAG_COLUMNS + ['mean_out_all', 'mean_out_four']
        assert result.data['year'].tolist() == [2022, 2023]

    def test_share_of_districts_without_outliers(self, cd_data, catalog):
        data = calculate_district_outlier_summary(cd_data, catalog=catalog).data.set_index('year')

        # one district of four has an extreme anc1 month in 2022
        assert data.loc[2022, 'anc1_outlier5std'] == 75.0
        assert data.loc[2022, 'penta1_outlier5std'] == 100.0
        assert data.loc[2022, 'mean_out_all'] == pytest.approx(93.75)
        assert data.loc[2022, 'mean_out_four'] == pytest.approx(91.67)
        assert (data.loc[2023] == 100).all()

    def test_district_without_data_excluded(self, make_cd_data, catalog):
        df = make_cd_data({
            ('N1', 2023, 7, 'measles1'): 5000.0,
            ('S2', 2023, None, 'measles1'): np.nan,
        })

        data = calculate_district_outlier_summary(df, catalog=catalog).data.set_index('year')

        # S2 has no evaluable month in 2023: one outlier district out of three
        assert data.loc[2023, 'measles1_outlier5std'] == pytest.approx(66.67)
        assert data.loc[2023, 'mean_out_four'] == pytest.approx(88.89)
        assert data.loc[2023, 'mean_out_all'] == pytest.approx(91.67)
        assert data.loc[2022, 'measles1_outlier5std'] == 100

    def test_worst_month_counts_once(self, make_cd_data, catalog):
        df = make_cd_data({
            ('N1', 2022, 5, 'anc1'): 1000.0,
            ('N1', 2022, 9, 'anc1'): 1200.0,
        })

        data = calculate_district_outlier_summary(df, catalog=catalog).data.set_index('year')

        assert data.loc[2022, 'anc1_outlier5std'] == 75.0

    def test_missing_columns(self, cd_data, catalog):
        with pytest.raises(SchemaError):
            calculate_district_outlier_summary(cd_data.drop(columns=['month']), catalog=catalog)
