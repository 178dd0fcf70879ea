import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from api.challenges.challenges_model import Challenge
from api.challenges.challenges_schema import ChallengeCreate, ChallengeUpdate
from utils.database_utils import DatabaseUtils
from utils.errors import ChallengeNotFound, ValidationError
from utils.time_utils import as_naive_utc, utcnow

logger = logging.getLogger(__name__)


class ChallengeService:
    def __init__(self, db: Session):
        self.db = db

    def get_challenge(self, challenge_id: int) -> Challenge:
        return DatabaseUtils.get_or_404(self.db, Challenge, ChallengeNotFound, id=challenge_id)

    def list_challenges(self, active: Optional[bool] = None, now: Optional[datetime] = None) -> List[Challenge]:
        """
        All challenges, newest start first. `active=True` keeps only the ones
        open right now; `active=False` only the ones that are not.
        """
        query = self.db.query(Challenge)
        if active is not None:
            now = now or utcnow()
            in_window = (Challenge.start_date <= now) & (Challenge.end_date >= now)
            query = query.filter(in_window if active else ~in_window)
        return query.order_by(Challenge.start_date.desc(), Challenge.id.desc()).all()

    def create_challenge(self, data: ChallengeCreate) -> Challenge:
        values = data.model_dump()
        values["start_date"] = as_naive_utc(values["start_date"])
        values["end_date"] = as_naive_utc(values["end_date"])
        self._check_invariants(values["goal"], values["start_date"], values["end_date"])

        challenge = Challenge(**values)
        self.db.add(challenge)
        self.db.commit()
        self.db.refresh(challenge)
        logger.info("Challenge %s created: %s", challenge.id, challenge.title)
        return challenge

    def update_challenge(self, challenge_id: int, data: ChallengeUpdate) -> Challenge:
        challenge = self.get_challenge(challenge_id)
        changes = data.model_dump(exclude_unset=True)
        for key in ("start_date", "end_date"):
            if changes.get(key) is not None:
                changes[key] = as_naive_utc(changes[key])

        self._check_invariants(
            changes.get("goal", challenge.goal),
            changes.get("start_date") or challenge.start_date,
            changes.get("end_date") or challenge.end_date,
        )
        for field, value in changes.items():
            if value is None and field != "resource_type":
                continue
            setattr(challenge, field, value)

        self.db.commit()
        self.db.refresh(challenge)
        return challenge

    def delete_challenge(self, challenge_id: int) -> None:
        challenge = self.get_challenge(challenge_id)
        self.db.delete(challenge)
        self.db.commit()
        logger.info("Challenge %s deleted", challenge_id)

    @staticmethod
    def _check_invariants(goal: float, start_date: datetime, end_date: datetime) -> None:
        if goal is None or goal <= 0:
            raise ValidationError("Challenge goal must be greater than zero")
        if end_date <= start_date:
            raise ValidationError("Challenge end date must be after its start date")
