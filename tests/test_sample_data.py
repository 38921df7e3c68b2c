import datetime as dt

import pandas as pd

from station_pipeline.sample_data import generate_sample_data

NOW = dt.datetime(2024, 6, 1, 12, 0, tzinfo=dt.timezone.utc)


def test_sample_data_shape_and_ranges():
    df = generate_sample_data(rows=48, seed=7, now=NOW)
    assert len(df) == 48
    assert df.columns[0] == 'timestamp'
    assert df.loc[0, 'timestamp'] == pd.Timestamp(NOW)
    assert df.loc[1, 'timestamp'] == pd.Timestamp(NOW) - pd.Timedelta(hours=1)
    assert df['atmosphericPressure'].between(990, 1030).all()
    assert df['strikes'].between(0, 4).all()
    assert pd.api.types.is_integer_dtype(df['strikes'])


def test_sample_data_is_deterministic_per_seed():
    a = generate_sample_data(rows=5, seed=3, now=NOW)
    b = generate_sample_data(rows=5, seed=3, now=NOW)
    pd.testing.assert_frame_equal(a, b)


def test_unknown_fields_use_default_range():
    df = generate_sample_data(rows=10, fields=['value1'], seed=1, now=NOW)
    assert list(df.columns) == ['timestamp', 'value1']
    assert df['value1'].between(0, 100).all()
