from station_pipeline.errors import FetchError
from station_pipeline.scheduler import RefreshScheduler


class StubService:
    def __init__(self, error=None):
        self.error = error
        self.calls = 0

    def refresh(self):
        self.calls += 1
        if self.error:
            raise self.error
        return type('Result', (), {'dataset': [1, 2, 3]})()


def test_run_refresh_calls_service():
    service = StubService()
    assert RefreshScheduler(service).run_refresh() is True
    assert service.calls == 1


def test_run_refresh_swallows_failures():
    service = StubService(error=FetchError('offline'))
    assert RefreshScheduler(service).run_refresh() is False


def test_start_registers_interval_job():
    scheduler = RefreshScheduler(StubService())
    scheduler.start(minutes=60)
    try:
        job = scheduler.scheduler.get_job('station_refresh')
        assert job is not None
        assert job.trigger.interval.total_seconds() == 3600
    finally:
        scheduler.shutdown()
