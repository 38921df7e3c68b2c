import json

from station_pipeline.cleaning import normalize_dataset
from station_pipeline.export import artifacts_exist, read_artifact, write_artifacts
from station_pipeline.parsing import parse_csv

CSV = (
    "timestamp,solar,station\n"
    "2024-01-01T00:00:00Z,12.3,north\n"
    "2024-01-01T01:00:00Z,abc,north\n"
)


def test_write_artifacts(tmp_path):
    df, c = normalize_dataset(parse_csv(CSV))
    out_dir = tmp_path / 'public' / 'data'
    assert artifacts_exist(str(out_dir)) is False

    data_path, meta_path = write_artifacts(df, c, str(out_dir))

    assert data_path.name == 'time-series-data.json'
    assert meta_path.name == 'time-series-metadata.json'
    records = json.loads(data_path.read_text(encoding='utf-8'))
    assert records[0] == {'timestamp': '2024-01-01T00:00:00+00:00', 'solar': 12.3, 'station': 'north'}
    meta = json.loads(meta_path.read_text(encoding='utf-8'))
    assert meta['totalRows'] == 2
    assert meta['columns'] == {'timestamp': 'date', 'solar': 'number', 'station': 'string'}
    assert 'lastUpdated' in meta
    assert artifacts_exist(str(out_dir)) is True


def test_read_artifact_restores_types(tmp_path):
    df, c = normalize_dataset(parse_csv(CSV))
    write_artifacts(df, c, str(tmp_path))
    loaded, classification = read_artifact(str(tmp_path))
    assert classification.type_tags() == c.type_tags()
    assert list(loaded['solar']) == [12.3, 0]
    assert loaded.loc[0, 'timestamp'] == df.loc[0, 'timestamp']
