import pytest
import requests

from station_pipeline.downloader import fetch_csv
from station_pipeline.errors import FetchError

URL = 'https://example.test/station.csv'


def test_fetch_returns_text(requests_mock):
    requests_mock.get(URL, text='timestamp,solar\n2024-01-01,1\n')
    assert fetch_csv(URL) == 'timestamp,solar\n2024-01-01,1\n'


def test_fetch_uses_given_session(requests_mock):
    requests_mock.get(URL, text='a\n1\n')
    session = requests.Session()
    assert fetch_csv(URL, session=session) == 'a\n1\n'
    assert requests_mock.call_count == 1


def test_http_error_raises_fetch_error(requests_mock):
    requests_mock.get(URL, status_code=503, reason='Service Unavailable')
    with pytest.raises(FetchError) as excinfo:
        fetch_csv(URL)
    assert '503' in str(excinfo.value)


def test_network_failure_raises_fetch_error(requests_mock):
    requests_mock.get(URL, exc=requests.exceptions.ConnectionError('offline'))
    with pytest.raises(FetchError) as excinfo:
        fetch_csv(URL)
    assert isinstance(excinfo.value.__cause__, requests.exceptions.ConnectionError)
