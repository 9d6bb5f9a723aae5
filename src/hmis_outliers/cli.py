#!/usr/bin/env python
"""
hmis-outliers CLI

Screen a health-facility indicator CSV for extreme outliers.

Usage:
    hmis-outliers --help
    hmis-outliers summary data.csv --admin-level district
    hmis-outliers district-summary data.csv -o districts.csv
    hmis-outliers units data.csv --indicator penta1 --admin-level district
"""

import sys
from dataclasses import replace
from pathlib import Path

import click
import pandas as pd

from hmis_outliers import __version__
from hmis_outliers.exceptions import OutlierCheckError
from hmis_outliers.indicators import ADMIN_LEVELS
from hmis_outliers.quality import (
    OutlierSettings,
    calculate_district_outlier_summary,
    calculate_outliers_summary,
    list_outlier_units,
)
from hmis_outliers.quality.outliers import UNIT_LEVELS
from hmis_outliers.utils.logger import logger


def _load(path: str) -> pd.DataFrame:
    logger.info(f'Loading indicator data from {path}')
    return pd.read_csv(path)


def _settings(threshold, mad_constant) -> OutlierSettings:
    overrides = {}
    if threshold is not None:
        overrides['threshold'] = threshold
    if mad_constant is not None:
        overrides['mad_constant'] = mad_constant
    try:
        return replace(OutlierSettings.from_config(), **overrides)
    except ValueError as e:
        raise click.BadParameter(str(e))


def _emit(artifact, output):
    """Print the table or write it to CSV/JSON depending on the file suffix."""
    if output is None:
        click.echo(artifact.data.to_string(index=False))
        return
    path = Path(output)
    if path.suffix.lower() == '.json':
        artifact.to_json(path)
    else:
        artifact.to_csv(path)
    click.secho(f"✅ {artifact.kind} ({len(artifact)} rows) saved to {path}", fg='green')


def _run(build):
    try:
        return build()
    except OutlierCheckError as e:
        click.secho(f"❌ {e.error_code}: {e.message}", fg='red')
        sys.exit(1)


common_options = [
    click.option('--output', '-o', default=None, help='Write result to .csv or .json instead of printing'),
    click.option('--threshold', type=float, default=None, help='Number of MADs (default from config)'),
    click.option('--mad-constant', type=float, default=None, help='MAD scale constant (default from config)'),
]


def with_common_options(f):
    for option in reversed(common_options):
        f = option(f)
    return f


@click.group()
@click.version_option(version=__version__, prog_name='hmis-outliers')
def cli():
    """
    Extreme outlier (5 x MAD) screening for routine health-facility data.

    Available commands:
    - summary: annual non-outlier rates per unit
    - district-summary: yearly share of districts without extreme outliers
    - units: monthly outlier listing of one indicator
    """
    pass


@cli.command()
@click.argument('data_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--admin-level', '-a', type=click.Choice(ADMIN_LEVELS), default='national', show_default=True)
@with_common_options
def summary(data_file, admin_level, output, threshold, mad_constant):
    """Annual non-outlier percentages per indicator."""
    df = _load(data_file)
    settings = _settings(threshold, mad_constant)
    result = _run(lambda: calculate_outliers_summary(df, admin_level=admin_level, settings=settings))
    _emit(result, output)


@cli.command('district-summary')
@click.argument('data_file', type=click.Path(exists=True, dir_okay=False))
@with_common_options
def district_summary(data_file, output, threshold, mad_constant):
    """Yearly percentage of districts without extreme outliers."""
    df = _load(data_file)
    settings = _settings(threshold, mad_constant)
    result = _run(lambda: calculate_district_outlier_summary(df, settings=settings))
    _emit(result, output)


@cli.command()
@click.argument('data_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--indicator', '-i', required=True, help='Indicator to list, e.g. penta1')
@click.option('--admin-level', '-a', type=click.Choice(UNIT_LEVELS), default='adminlevel_1', show_default=True)
@click.option('--region', '-r', default=None, help='Keep only one adminlevel_1 region')
@click.option('--flagged-only', is_flag=True, help='Keep only flagged unit-months')
@with_common_options
def units(data_file, indicator, admin_level, region, flagged_only, output, threshold, mad_constant):
    """Monthly value, median, MAD and flag of one indicator per unit."""
    df = _load(data_file)
    settings = _settings(threshold, mad_constant)
    result = _run(lambda: list_outlier_units(df, indicator, admin_level=admin_level, settings=settings))
    if region is not None:
        result = result.for_region(region)
    if flagged_only:
        result = result.flagged()
    _emit(result, output)


if __name__ == '__main__':
    cli()
