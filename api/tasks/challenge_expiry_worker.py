import logging
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from sqlalchemy.orm import Session

from config.database import SessionLocal
from config.settings import settings
from api.challenges.user_challenges_service import EnrollmentService
from api.challenges.challenge_signals import enrollments_expired

logger = logging.getLogger(__name__)

_scheduler: Optional[BackgroundScheduler] = None


def run_expiry_sweep() -> int:
    """Fail every enrollment still Joined after its challenge's end date."""
    db: Session = SessionLocal()
    try:
        expired = EnrollmentService(db).expire_stale_enrollments()
        enrollments_expired.send("challenge_expiry_worker", enrollments=expired)
        return len(expired)
    except Exception:
        logger.exception("Challenge expiry sweep failed")
        raise
    finally:
        db.close()


def start_scheduler() -> BackgroundScheduler:
    global _scheduler
    if _scheduler is None:
        _scheduler = BackgroundScheduler()
        _scheduler.add_job(
            run_expiry_sweep,
            'interval',
            minutes=settings.EXPIRY_SWEEP_MINUTES,
            id="challenge_expiry_sweep",
            max_instances=1,
            coalesce=True,
        )
        _scheduler.start()
        logger.info("Expiry sweep scheduled every %s minutes", settings.EXPIRY_SWEEP_MINUTES)
    return _scheduler


def stop_scheduler() -> None:
    global _scheduler
    if _scheduler is not None:
        _scheduler.shutdown(wait=False)
        _scheduler = None
