from typing import List, Optional

from sqlalchemy.orm import Session

from api.challenges.challenges_service import ChallengeService
from api.challenges.user_challenges_service import EnrollmentService
from api.challenges.challenges_schema import ChallengeCreate, ChallengeRead, ChallengeUpdate
from api.challenges.user_challenges_schema import (
    AwardPointsRequest,
    EnrollmentRead,
    EnrollmentWithChallenge,
    ExpirySweepResult,
    ParticipantRead,
)
from api.challenges.challenge_signals import (
    challenge_joined,
    points_awarded,
    enrollment_withdrawn,
    enrollments_expired,
)


class ChallengeController:
    # ─── Registry ──────────────────────────────────────────────────────────
    @staticmethod
    def list_challenges(db: Session, active: Optional[bool] = None) -> List[ChallengeRead]:
        challenges = ChallengeService(db).list_challenges(active=active)
        return [ChallengeRead.model_validate(c) for c in challenges]

    @staticmethod
    def get_challenge(challenge_id: int, db: Session) -> ChallengeRead:
        return ChallengeRead.model_validate(ChallengeService(db).get_challenge(challenge_id))

    @staticmethod
    def create_challenge(payload: ChallengeCreate, db: Session) -> ChallengeRead:
        return ChallengeRead.model_validate(ChallengeService(db).create_challenge(payload))

    @staticmethod
    def update_challenge(challenge_id: int, payload: ChallengeUpdate, db: Session) -> ChallengeRead:
        challenge = ChallengeService(db).update_challenge(challenge_id, payload)
        return ChallengeRead.model_validate(challenge)

    @staticmethod
    def delete_challenge(challenge_id: int, db: Session) -> None:
        ChallengeService(db).delete_challenge(challenge_id)

    # ─── Enrollments ───────────────────────────────────────────────────────
    @staticmethod
    def join_challenge(challenge_id: int, db: Session, current_user_id: int) -> EnrollmentRead:
        enrollment = EnrollmentService(db).join_challenge(current_user_id, challenge_id)
        # pass the sender as a positional argument, not via `sender=`
        challenge_joined.send(ChallengeController, enrollment=enrollment)
        return EnrollmentRead.model_validate(enrollment)

    @staticmethod
    def withdraw(challenge_id: int, db: Session, current_user_id: int) -> EnrollmentRead:
        enrollment = EnrollmentService(db).withdraw(current_user_id, challenge_id)
        enrollment_withdrawn.send(ChallengeController, enrollment=enrollment)
        return EnrollmentRead.model_validate(enrollment)

    @staticmethod
    def award_points(
        challenge_id: int,
        payload: AwardPointsRequest,
        db: Session,
        current_user_id: int,
    ) -> EnrollmentRead:
        enrollment = EnrollmentService(db).award_points(challenge_id, payload.user_id, payload.points)
        points_awarded.send(
            ChallengeController,
            enrollment=enrollment,
            points=payload.points,
            awarded_by=current_user_id,
        )
        return EnrollmentRead.model_validate(enrollment)

    @staticmethod
    def my_enrollments(db: Session, current_user_id: int) -> List[EnrollmentWithChallenge]:
        enrollments = EnrollmentService(db).list_user_enrollments(current_user_id)
        return [EnrollmentWithChallenge.model_validate(e) for e in enrollments]

    @staticmethod
    def participants(challenge_id: int, db: Session) -> List[ParticipantRead]:
        rows = EnrollmentService(db).list_participants(challenge_id)
        return [
            ParticipantRead(
                **EnrollmentRead.model_validate(enrollment).model_dump(),
                name=user.name,
                city=user.city,
            )
            for enrollment, user in rows
        ]

    @staticmethod
    def expire_stale(db: Session) -> ExpirySweepResult:
        expired = EnrollmentService(db).expire_stale_enrollments()
        enrollments_expired.send(ChallengeController, enrollments=expired)
        return ExpirySweepResult(expired=len(expired))
