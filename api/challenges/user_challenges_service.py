import logging
from datetime import datetime
from typing import List, Optional, Tuple, Type

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from api.challenges.challenges_model import Challenge
from api.challenges.challenges_service import ChallengeService
from api.challenges.enrollment_lifecycle import transition
from api.challenges.user_challenges_model import UserChallenge, EnrollmentStatus
from api.consumption.consumption_service import current_total, has_records
from api.user.user_model import User
from utils.database_utils import DatabaseUtils
from utils.errors import (
    AlreadyFinalized,
    AlreadyJoined,
    ChallengeExpired,
    EnrollmentNotFound,
    InvalidStateTransition,
    NoBaselineData,
    ValidationError,
)
from utils.time_utils import utcnow

logger = logging.getLogger(__name__)

ENROLLMENT_UNIQUE = "uq_user_challenge"
ENROLLMENT_UNIQUE_COLUMNS = ("user_challenges.user_id", "user_challenges.challenge_id")


class EnrollmentService:
    def __init__(self, db: Session):
        self.db = db
        self.challenges = ChallengeService(db)

    # ─── Lookups ───────────────────────────────────────────────────────────
    def find_enrollment(self, user_id: int, challenge_id: int) -> Optional[UserChallenge]:
        return (
            self.db.query(UserChallenge)
              .filter_by(user_id=user_id, challenge_id=challenge_id)
              .first()
        )

    def get_enrollment(self, user_id: int, challenge_id: int) -> UserChallenge:
        enrollment = self.find_enrollment(user_id, challenge_id)
        if not enrollment:
            raise EnrollmentNotFound(
                f"User {user_id} has not joined challenge {challenge_id}"
            )
        return enrollment

    def list_user_enrollments(self, user_id: int) -> List[UserChallenge]:
        return (
            self.db.query(UserChallenge)
              .options(joinedload(UserChallenge.challenge))
              .filter(UserChallenge.user_id == user_id)
              .order_by(UserChallenge.joined_date.desc())
              .all()
        )

    def list_participants(self, challenge_id: int) -> List[Tuple[UserChallenge, User]]:
        self.challenges.get_challenge(challenge_id)
        return (
            self.db.query(UserChallenge, User)
              .join(User, User.id == UserChallenge.user_id)
              .filter(UserChallenge.challenge_id == challenge_id)
              .order_by(UserChallenge.points_earned.desc(), UserChallenge.joined_date.asc())
              .all()
        )

    # ─── Join ──────────────────────────────────────────────────────────────
    def join_challenge(self, user_id: int, challenge_id: int, now: Optional[datetime] = None) -> UserChallenge:
        """
        Enroll a user in an open challenge, capturing their current total of
        the challenge's resource as the baseline. Duplicate joins are refused
        by the (user_id, challenge_id) unique constraint, not by a lookup.
        """
        now = now or utcnow()
        challenge = self.challenges.get_challenge(challenge_id)
        if not challenge.is_active(now):
            raise ChallengeExpired(f"Challenge '{challenge.title}' is not open for joining")

        resource = challenge.resource
        if resource is None or not has_records(self.db, user_id, resource):
            raise NoBaselineData(
                "Submit recent consumption data for this challenge's resource before joining"
            )

        enrollment = UserChallenge(
            user_id=user_id,
            challenge_id=challenge.id,
            start_value=current_total(self.db, user_id, resource),
            end_value=0,
            status=EnrollmentStatus.joined,
            points_earned=0,
            joined_date=now,
        )
        self.db.add(enrollment)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if not DatabaseUtils.is_unique_violation(exc, ENROLLMENT_UNIQUE, ENROLLMENT_UNIQUE_COLUMNS):
                logger.error("Join of user %s to challenge %s failed: %s", user_id, challenge_id, exc.orig)
                raise
            logger.info("User %s tried to join challenge %s twice", user_id, challenge_id)
            raise AlreadyJoined("You have already joined this challenge")

        self.db.refresh(enrollment)
        logger.info(
            "User %s joined challenge %s with baseline %s %s",
            user_id, challenge_id, enrollment.start_value, challenge.unit,
        )
        return enrollment

    # ─── Transitions out of Joined ─────────────────────────────────────────
    def award_points(
        self,
        challenge_id: int,
        user_id: int,
        points: int,
        now: Optional[datetime] = None,
    ) -> UserChallenge:
        """
        Admin award: adds `points`, captures the final consumption value and
        completes the enrollment. Only a Joined enrollment can be awarded,
        and only once.
        """
        if isinstance(points, bool) or not isinstance(points, int) or points <= 0:
            raise ValidationError("Points must be a positive integer")

        enrollment = self.get_enrollment(user_id, challenge_id)
        self._close(enrollment, EnrollmentStatus.completed, now or utcnow(), points, AlreadyFinalized)
        self.db.commit()
        self.db.refresh(enrollment)
        logger.info("Awarded %s points to user %s for challenge %s", points, user_id, challenge_id)
        return enrollment

    def withdraw(self, user_id: int, challenge_id: int, now: Optional[datetime] = None) -> UserChallenge:
        enrollment = self.get_enrollment(user_id, challenge_id)
        self._close(enrollment, EnrollmentStatus.withdrawn, now or utcnow())
        self.db.commit()
        self.db.refresh(enrollment)
        logger.info("User %s withdrew from challenge %s", user_id, challenge_id)
        return enrollment

    def expire_stale_enrollments(self, now: Optional[datetime] = None) -> List[UserChallenge]:
        """
        Fail every enrollment still Joined after its challenge ended.
        Rows finalized concurrently by an award are skipped.
        """
        now = now or utcnow()
        stale = (
            self.db.query(UserChallenge)
              .join(Challenge, Challenge.id == UserChallenge.challenge_id)
              .options(joinedload(UserChallenge.challenge))
              .filter(
                  UserChallenge.status == EnrollmentStatus.joined,
                  Challenge.end_date < now,
              )
              .all()
        )

        expired = []
        for enrollment in stale:
            try:
                self._close(enrollment, EnrollmentStatus.failed, now)
            except InvalidStateTransition:
                logger.debug("Enrollment %s finalized before expiry sweep", enrollment.id)
                continue
            # commit per row so a lost race only rolls back its own update
            self.db.commit()
            expired.append(enrollment)

        for enrollment in expired:
            self.db.refresh(enrollment)
        if expired:
            logger.info("Expired %d stale enrollments", len(expired))
        return expired

    # ─── Internals ─────────────────────────────────────────────────────────
    def _measure(self, enrollment: UserChallenge) -> float:
        resource = enrollment.challenge.resource
        if resource is None:
            return enrollment.end_value or 0
        return current_total(self.db, enrollment.user_id, resource)

    def _close(
        self,
        enrollment: UserChallenge,
        target: EnrollmentStatus,
        now: datetime,
        points: int = 0,
        error: Type[InvalidStateTransition] = InvalidStateTransition,
    ) -> None:
        """
        Move `enrollment` from Joined to `target` with one conditional UPDATE.
        The status guard in the WHERE clause makes concurrent closes race
        safely: the loser updates zero rows and gets `error`.
        """
        transition(enrollment.status, target, error)

        stmt = (
            update(UserChallenge)
            .where(
                UserChallenge.id == enrollment.id,
                UserChallenge.status == EnrollmentStatus.joined,
            )
            .values(
                status=target,
                end_value=self._measure(enrollment),
                points_earned=UserChallenge.points_earned + points,
                completion_date=now,
            )
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        if result.rowcount != 1:
            self.db.rollback()
            raise error(f"Enrollment {enrollment.id} is no longer {EnrollmentStatus.joined.value}")
