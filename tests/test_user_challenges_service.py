from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta
from threading import Barrier

import pytest
from sqlalchemy.exc import IntegrityError

from config.database import SessionLocal
from config.score_config import ResourceType
from api.challenges.user_challenges_model import UserChallenge, EnrollmentStatus
from api.challenges.user_challenges_service import EnrollmentService
from api.consumption.consumption_model import ElectricityUsage
from api.tasks.challenge_expiry_worker import run_expiry_sweep
from utils.errors import (
    AlreadyFinalized,
    AlreadyJoined,
    ChallengeExpired,
    ChallengeNotFound,
    ConflictError,
    EnrollmentNotFound,
    NoBaselineData,
    StateError,
    ValidationError,
)
from utils.time_utils import utcnow


# ─── Join ──────────────────────────────────────────────────────────────────

def test_join_captures_baseline_for_challenge_resource(db, make_user, make_challenge, add_usage):
    user = make_user()
    add_usage(user, electricity=[120, 80], water=[500])
    challenge = make_challenge(unit="kWh")

    enrollment = EnrollmentService(db).join_challenge(user.id, challenge.id)

    assert enrollment.status is EnrollmentStatus.joined
    assert enrollment.start_value == 200
    assert enrollment.end_value == 0
    assert enrollment.points_earned == 0
    assert enrollment.joined_date is not None
    assert enrollment.completion_date is None


def test_join_waste_challenge_sums_all_bag_types(db, make_user, make_challenge, add_usage):
    user = make_user()
    add_usage(user, waste=[(2, 1, 3), (1, 0, 0)])
    challenge = make_challenge(unit="bags")

    enrollment = EnrollmentService(db).join_challenge(user.id, challenge.id)

    assert enrollment.start_value == 7


def test_explicit_resource_type_overrides_unit(db, make_user, make_challenge, add_usage):
    user = make_user()
    add_usage(user, water=[30])
    challenge = make_challenge(unit="litres saved", resource_type=ResourceType.water)

    enrollment = EnrollmentService(db).join_challenge(user.id, challenge.id)

    assert enrollment.start_value == 30


def test_join_twice_is_rejected(db, make_user, make_challenge, add_usage):
    user = make_user()
    add_usage(user, electricity=[10])
    challenge = make_challenge()
    service = EnrollmentService(db)
    service.join_challenge(user.id, challenge.id)

    with pytest.raises(AlreadyJoined):
        service.join_challenge(user.id, challenge.id)

    assert db.query(UserChallenge).count() == 1


def test_concurrent_joins_leave_exactly_one_enrollment(db, make_user, make_challenge, add_usage):
    user = make_user()
    add_usage(user, electricity=[10])
    challenge = make_challenge()
    user_id, challenge_id = user.id, challenge.id
    barrier = Barrier(2)

    def attempt():
        session = SessionLocal()
        try:
            barrier.wait()
            EnrollmentService(session).join_challenge(user_id, challenge_id)
            return "joined"
        except ConflictError as exc:
            return exc.code
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=2) as pool:
        outcomes = sorted(pool.map(lambda _: attempt(), range(2)))

    assert outcomes == ["AlreadyJoined", "joined"]
    assert db.query(UserChallenge).filter_by(user_id=user_id).count() == 1


def test_join_unknown_challenge(db, make_user):
    with pytest.raises(ChallengeNotFound):
        EnrollmentService(db).join_challenge(make_user().id, 999)


@pytest.mark.parametrize("starts_in", [timedelta(days=-40), timedelta(days=2)])
def test_join_outside_window_is_rejected(db, make_user, make_challenge, add_usage, starts_in):
    user = make_user()
    add_usage(user, electricity=[10])
    challenge = make_challenge(starts_in=starts_in, lasts=timedelta(days=30))

    with pytest.raises(ChallengeExpired):
        EnrollmentService(db).join_challenge(user.id, challenge.id)


@pytest.mark.parametrize("bound", ["start_date", "end_date"])
def test_join_window_bounds_are_inclusive(db, make_user, make_challenge, add_usage, bound):
    user = make_user()
    add_usage(user, electricity=[10])
    challenge = make_challenge()
    at = getattr(challenge, bound)

    enrollment = EnrollmentService(db).join_challenge(user.id, challenge.id, now=at)

    assert enrollment.status is EnrollmentStatus.joined
    assert enrollment.joined_date == at


@pytest.mark.parametrize("bound,offset", [
    ("start_date", timedelta(microseconds=-1)),
    ("end_date", timedelta(microseconds=1)),
])
def test_join_just_outside_window_is_rejected(db, make_user, make_challenge, add_usage, bound, offset):
    user = make_user()
    add_usage(user, electricity=[10])
    challenge = make_challenge()

    with pytest.raises(ChallengeExpired):
        EnrollmentService(db).join_challenge(user.id, challenge.id, now=getattr(challenge, bound) + offset)


def test_join_without_matching_data_is_rejected(db, make_user, make_challenge, add_usage):
    user = make_user()
    add_usage(user, water=[40])
    challenge = make_challenge(unit="kWh")

    with pytest.raises(NoBaselineData):
        EnrollmentService(db).join_challenge(user.id, challenge.id)


def test_join_with_unrecognised_unit_has_no_baseline(db, make_user, make_challenge, add_usage):
    user = make_user()
    add_usage(user, electricity=[10], water=[10], waste=[(1, 1, 1)])
    challenge = make_challenge(unit="trees")

    with pytest.raises(NoBaselineData):
        EnrollmentService(db).join_challenge(user.id, challenge.id)


def test_join_reraises_integrity_errors_other_than_duplicates(db, make_user, make_challenge, add_usage, monkeypatch):
    user = make_user()
    add_usage(user, electricity=[10])
    challenge = make_challenge()
    user_id, challenge_id = user.id, challenge.id
    missing_user = IntegrityError(
        "INSERT INTO user_challenges ...", {},
        Exception('violates foreign key constraint "user_challenges_user_id_fkey"'),
    )

    def fail_commit():
        raise missing_user

    monkeypatch.setattr(db, "commit", fail_commit)

    with pytest.raises(IntegrityError):
        EnrollmentService(db).join_challenge(user_id, challenge_id)

    monkeypatch.undo()
    assert db.query(UserChallenge).count() == 0


# ─── Award ─────────────────────────────────────────────────────────────────

def test_award_completes_enrollment(db, make_user, make_challenge, add_usage):
    user = make_user()
    add_usage(user, electricity=[200])
    challenge = make_challenge(goal=50, unit="kWh")
    service = EnrollmentService(db)
    service.join_challenge(user.id, challenge.id)
    db.add(ElectricityUsage(user_id=user.id, billing_month=utcnow().date().replace(day=1), units=30))
    db.commit()

    enrollment = service.award_points(challenge.id, user.id, 40)

    assert enrollment.status is EnrollmentStatus.completed
    assert enrollment.points_earned == 40
    assert enrollment.start_value == 200
    assert enrollment.end_value == 230
    assert enrollment.completion_date is not None


def test_award_twice_is_rejected(db, make_user, make_challenge, add_usage):
    user = make_user()
    add_usage(user, electricity=[10])
    challenge = make_challenge()
    service = EnrollmentService(db)
    service.join_challenge(user.id, challenge.id)
    service.award_points(challenge.id, user.id, 10)

    with pytest.raises(AlreadyFinalized):
        service.award_points(challenge.id, user.id, 10)

    enrollment = service.get_enrollment(user.id, challenge.id)
    assert enrollment.points_earned == 10


def test_award_after_withdrawal_is_a_state_error(db, make_user, make_challenge, add_usage):
    user = make_user()
    add_usage(user, electricity=[10])
    challenge = make_challenge()
    service = EnrollmentService(db)
    service.join_challenge(user.id, challenge.id)
    service.withdraw(user.id, challenge.id)

    with pytest.raises(StateError):
        service.award_points(challenge.id, user.id, 10)


def test_award_requires_enrollment(db, make_user, make_challenge):
    challenge = make_challenge()

    with pytest.raises(EnrollmentNotFound):
        EnrollmentService(db).award_points(challenge.id, make_user().id, 10)


@pytest.mark.parametrize("points", [0, -5, 2.5, True])
def test_award_requires_positive_integer_points(db, make_user, make_challenge, add_usage, points):
    user = make_user()
    add_usage(user, electricity=[10])
    challenge = make_challenge()
    service = EnrollmentService(db)
    service.join_challenge(user.id, challenge.id)

    with pytest.raises(ValidationError):
        service.award_points(challenge.id, user.id, points)


def test_stale_award_loses_to_concurrent_finalize(db, make_user, make_challenge, add_usage):
    user = make_user()
    add_usage(user, electricity=[10])
    challenge = make_challenge()
    user_id, challenge_id = user.id, challenge.id
    stale = EnrollmentService(db)
    stale.join_challenge(user_id, challenge_id)
    assert stale.get_enrollment(user_id, challenge_id).status is EnrollmentStatus.joined

    # a second admin session finalizes first
    other = SessionLocal()
    try:
        EnrollmentService(other).award_points(challenge_id, user_id, 25)
    finally:
        other.close()

    # the identity map still says Joined, only the conditional update sees the truth
    with pytest.raises(AlreadyFinalized):
        stale.award_points(challenge_id, user_id, 25)

    db.expire_all()
    assert stale.get_enrollment(user_id, challenge_id).points_earned == 25


# ─── Withdraw / expiry ─────────────────────────────────────────────────────

def test_withdraw_is_terminal(db, make_user, make_challenge, add_usage):
    user = make_user()
    add_usage(user, electricity=[10])
    challenge = make_challenge()
    service = EnrollmentService(db)
    service.join_challenge(user.id, challenge.id)

    enrollment = service.withdraw(user.id, challenge.id)

    assert enrollment.status is EnrollmentStatus.withdrawn
    assert enrollment.completion_date is not None
    with pytest.raises(StateError):
        service.withdraw(user.id, challenge.id)


def test_expiry_sweep_fails_only_stale_joined_enrollments(db, make_user, make_challenge, add_usage):
    stale_user, done_user, fresh_user = make_user(), make_user(), make_user()
    for u in (stale_user, done_user, fresh_user):
        add_usage(u, electricity=[10])
    ended = make_challenge(title="Ended", starts_in=timedelta(days=-10), lasts=timedelta(days=5))
    running = make_challenge(title="Running")

    # enrollments made while `ended` was still open
    joined_at = utcnow() - timedelta(days=8)
    service = EnrollmentService(db)
    service.join_challenge(stale_user.id, ended.id, now=joined_at)
    service.join_challenge(done_user.id, ended.id, now=joined_at)
    service.award_points(ended.id, done_user.id, 15)
    service.join_challenge(fresh_user.id, running.id)

    expired = service.expire_stale_enrollments()

    assert [e.user_id for e in expired] == [stale_user.id]
    assert service.get_enrollment(stale_user.id, ended.id).status is EnrollmentStatus.failed
    assert service.get_enrollment(stale_user.id, ended.id).points_earned == 0
    assert service.get_enrollment(done_user.id, ended.id).status is EnrollmentStatus.completed
    assert service.get_enrollment(fresh_user.id, running.id).status is EnrollmentStatus.joined


def test_expiry_worker_uses_its_own_session(db, make_user, make_challenge, add_usage):
    user = make_user()
    add_usage(user, electricity=[10])
    ended = make_challenge(starts_in=timedelta(days=-10), lasts=timedelta(days=5))
    EnrollmentService(db).join_challenge(user.id, ended.id, now=utcnow() - timedelta(days=8))

    assert run_expiry_sweep() == 1
    assert run_expiry_sweep() == 0

    db.expire_all()
    assert db.query(UserChallenge).one().status is EnrollmentStatus.failed
