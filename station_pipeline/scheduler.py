import os
import logging

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .data_service import DataService

logger = logging.getLogger(__name__)

REFRESH_MINUTES = int(os.environ.get("STATION_REFRESH_MINUTES", "60"))


class RefreshScheduler:
    """Reload the station dataset in the background once per freshness window."""

    def __init__(self, service: DataService):
        self.service = service
        self.scheduler = BackgroundScheduler(timezone=os.environ.get("SCHED_TZ", "UTC"))

    def run_refresh(self) -> bool:
        try:
            result = self.service.refresh()
            logger.info(f"Auto-refreshed station data ({len(result.dataset)} rows)")
            return True
        except Exception as e:
            logger.exception(f"Auto-refresh failed: {e}")
            return False

    def start(self, minutes: int = REFRESH_MINUTES):
        trigger = IntervalTrigger(minutes=minutes)
        self.scheduler.add_job(self.run_refresh, trigger, id="station_refresh", replace_existing=True)
        if not self.scheduler.running:
            self.scheduler.start()
        logger.info(f"Station refresh scheduled every {minutes} minutes")

    def shutdown(self):
        self.scheduler.shutdown(wait=False)
