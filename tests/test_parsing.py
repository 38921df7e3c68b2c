import pytest

from station_pipeline.errors import ParseError
from station_pipeline.parsing import parse_csv, to_records


def test_row_count_excludes_blank_lines():
    text = "timestamp,solar\n2024-01-01,1\n\n2024-01-02,2\n\n\n2024-01-03,3\n"
    df = parse_csv(text)
    assert len(df) == 3
    assert list(df.columns) == ['timestamp', 'solar']


def test_numeric_tokens_are_typed_per_value():
    df = parse_csv("a,b,c\n12,1.5,abc\n-3,2e3,\n")
    records = to_records(df)
    assert records[0] == {'a': 12, 'b': 1.5, 'c': 'abc'}
    assert isinstance(records[0]['a'], int)
    assert records[1]['b'] == 2000.0
    assert records[1]['c'] == ''


def test_non_numeric_words_stay_text():
    df = parse_csv("a\nNaN\ninf\n")
    assert to_records(df)[0]['a'] == 'NaN'
    assert to_records(df)[1]['a'] == 'inf'


def test_quoted_fields_keep_delimiters():
    df = parse_csv('name,solar\n"Station, north",5\n')
    assert df.loc[0, 'name'] == 'Station, north'
    assert df.loc[0, 'solar'] == 5


def test_short_rows_are_padded():
    df = parse_csv("a,b,c\n1,2\n")
    assert df.loc[0, 'c'] == ''


def test_header_only_raises():
    with pytest.raises(ParseError):
        parse_csv("timestamp,solar\n")


def test_empty_input_raises():
    with pytest.raises(ParseError):
        parse_csv("")
    with pytest.raises(ParseError):
        parse_csv("\n\n")


def test_unbalanced_quote_raises():
    with pytest.raises(ParseError):
        parse_csv('a,b\n"1,2\n3,4\n')


def test_rows_with_extra_fields_are_kept_and_cut(caplog):
    text = "timestamp,solar\n2024-01-01,1\n2024-01-02,2,extra\n2024-01-03,3\n"
    with caplog.at_level('WARNING', logger='station_pipeline.parsing'):
        df = parse_csv(text)
    assert list(df.columns) == ['timestamp', 'solar']
    assert len(df) == 3
    assert to_records(df)[1] == {'timestamp': '2024-01-02', 'solar': 2}
    assert '2024-01-02,2,extra' in caplog.text


def test_leading_plus_stays_text():
    records = to_records(parse_csv("a\n+5\n-5\n"))
    assert records[0]['a'] == '+5'
    assert records[1]['a'] == -5
