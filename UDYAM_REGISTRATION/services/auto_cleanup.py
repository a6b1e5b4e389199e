import logging
import threading
from datetime import datetime, timezone, timedelta
from core.database import SessionLocal
from core.config import SUBMISSION_RETENTION_HOURS
from repositories.step_submission_repository import StepSubmissionRepository

logger = logging.getLogger(__name__)

class AutoCleanup:

    def __init__(self, interval_hours: int = 24, session_factory=SessionLocal):
        self.interval_hours = interval_hours
        self.session_factory = session_factory
        self._stop_event = threading.Event()
        self._thread = None
        logger.info(f"AutoCleanup initialized with interval: {interval_hours}h")

    def start(self):
        if self.is_running():
            logger.warning("Auto cleanup already running")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()
        logger.info(f"Auto cleanup started (runs every {self.interval_hours}h)")

    def stop(self):
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=5)
            self._thread = None
        logger.info("Auto cleanup stopped")

    def is_running(self):
        return self._thread is not None and self._thread.is_alive()

    def _run(self):
        while not self._stop_event.is_set():
            try:
                self.cleanup()
            except Exception as e:
                logger.error(f"Cleanup error: {str(e)}", exc_info=True)

            self._stop_event.wait(self.interval_hours * 3600)

    def cleanup(self) -> int:
        db = self.session_factory()
        try:
            cutoff = datetime.now(timezone.utc) - timedelta(hours=SUBMISSION_RETENTION_HOURS)
            removed = StepSubmissionRepository.delete_stale_submissions(db, cutoff)
            logger.info(f"Cleanup removed {removed} incomplete submission(s) older than {SUBMISSION_RETENTION_HOURS}h")
            return removed
        finally:
            db.close()
