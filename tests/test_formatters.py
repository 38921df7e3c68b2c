import numpy as np

from station_pipeline.cleaning import normalize_dataset
from station_pipeline.parsing import parse_csv
from station_pipeline.processing import summarize_columns
from utils.formatters import DataFormatter


def test_format_number():
    assert DataFormatter.format_number(3.14159) == '3.14'
    assert DataFormatter.format_number(np.nan) == 'N/A'
    assert DataFormatter.format_number('x') == 'N/A'
    assert DataFormatter.format_number(None) == 'N/A'


def test_format_column_label_and_unit():
    assert DataFormatter.format_column_label('wind_speed') == 'Wind speed'
    assert DataFormatter.format_with_unit(21.456, 'airTemperature') == '21.46 °C'
    assert DataFormatter.format_with_unit(3, 'strikes') == '3.00'


def test_format_summary_for_display():
    df, c = normalize_dataset(parse_csv(
        "timestamp,airTemperature\n2024-01-01,10\n2024-01-02,20\n"
    ))
    formatted = DataFormatter.format_summary_for_display(summarize_columns(df, c))
    assert list(formatted.index) == ['AirTemperature']
    assert formatted.loc['AirTemperature', 'mean'] == '15.00 °C'
    assert formatted.loc['AirTemperature', 'change'] == '100.0%'
    assert formatted.loc['AirTemperature', 'trend'] == 'up'
    assert DataFormatter.format_summary_for_display(None) is None
