import json

from scripts.convert_csv_to_json import main

URL = 'https://example.test/station.csv'


def test_convert_writes_artifacts(tmp_path, requests_mock):
    requests_mock.get(URL, text="timestamp,solar\n2024-01-01T00:00:00Z,12.3\n2024-01-01T01:00:00Z,abc\n")
    assert main([str(tmp_path), URL]) == 0
    records = json.loads((tmp_path / 'time-series-data.json').read_text(encoding='utf-8'))
    assert [r['solar'] for r in records] == [12.3, 0]
    meta = json.loads((tmp_path / 'time-series-metadata.json').read_text(encoding='utf-8'))
    assert meta['totalRows'] == 2


def test_convert_reports_fetch_failure(tmp_path, requests_mock):
    requests_mock.get(URL, status_code=404)
    assert main([str(tmp_path), URL]) == 1
    assert not (tmp_path / 'time-series-data.json').exists()
