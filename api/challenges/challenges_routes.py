from fastapi import APIRouter, Depends, status
from typing import List, Optional
from sqlalchemy.orm import Session

from config.database import get_db
from middlewares.auth_middleware import auth_middleware
from middlewares.role_middleware import admin_required
from api.challenges.challenges_controller import ChallengeController
from api.challenges.challenges_schema import ChallengeCreate, ChallengeRead, ChallengeUpdate
from api.challenges.user_challenges_schema import (
    AwardPointsRequest,
    EnrollmentRead,
    EnrollmentWithChallenge,
    ExpirySweepResult,
    ParticipantRead,
)

router = APIRouter(prefix="/challenges", tags=["Challenges"])


# ─── Registry ──────────────────────────────────────────────────────────────
@router.get("", response_model=List[ChallengeRead])
def list_challenges(
    active: Optional[bool] = None,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return ChallengeController.list_challenges(db, active)

@router.post("", response_model=ChallengeRead, status_code=status.HTTP_201_CREATED)
def create_challenge(
    payload: ChallengeCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(admin_required),
):
    return ChallengeController.create_challenge(payload, db)

@router.get(
    "/me/enrollments",
    response_model=List[EnrollmentWithChallenge],
    summary="Challenges the current user has joined"
)
def my_enrollments(
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return ChallengeController.my_enrollments(db, current_user["id"])

@router.post(
    "/expire",
    response_model=ExpirySweepResult,
    summary="Fail enrollments still Joined after their challenge ended"
)
def expire_stale_enrollments(
    db: Session = Depends(get_db),
    current_user: dict = Depends(admin_required),
):
    return ChallengeController.expire_stale(db)

@router.get("/{challenge_id}", response_model=ChallengeRead)
def get_challenge(
    challenge_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return ChallengeController.get_challenge(challenge_id, db)

@router.put("/{challenge_id}", response_model=ChallengeRead)
def update_challenge(
    challenge_id: int,
    payload: ChallengeUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(admin_required),
):
    return ChallengeController.update_challenge(challenge_id, payload, db)

@router.delete("/{challenge_id}")
def delete_challenge(
    challenge_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(admin_required),
):
    ChallengeController.delete_challenge(challenge_id, db)
    return {"detail": "Deleted"}


# ─── Participation ─────────────────────────────────────────────────────────
@router.post("/{challenge_id}/join", response_model=EnrollmentRead, status_code=status.HTTP_201_CREATED)
def join_challenge(
    challenge_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return ChallengeController.join_challenge(challenge_id, db, current_user["id"])

@router.post("/{challenge_id}/withdraw", response_model=EnrollmentRead)
def withdraw_from_challenge(
    challenge_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return ChallengeController.withdraw(challenge_id, db, current_user["id"])

@router.post(
    "/{challenge_id}/award",
    response_model=EnrollmentRead,
    summary="Award points to a participant and complete their enrollment"
)
def award_points(
    challenge_id: int,
    payload: AwardPointsRequest,
    db: Session = Depends(get_db),
    current_user: dict = Depends(admin_required),
):
    return ChallengeController.award_points(challenge_id, payload, db, current_user["id"])

@router.get("/{challenge_id}/participants", response_model=List[ParticipantRead])
def list_participants(
    challenge_id: int,
    db: Session = Depends(get_db),
    current_user: dict = Depends(admin_required),
):
    return ChallengeController.participants(challenge_id, db)
