from datetime import datetime, timedelta
from types import SimpleNamespace

from api.challenges.user_challenges_model import EnrollmentStatus
from api.challenges.user_challenges_service import EnrollmentService
from api.leaderboard.leaderboard_service import get_leaderboard, rank_users

T0 = datetime(2024, 3, 1, 9, 0)


def enrollment(user_id, points, status=EnrollmentStatus.completed, joined=T0):
    return SimpleNamespace(user_id=user_id, points_earned=points, status=status, joined_date=joined)


def person(name, city="Kandy"):
    return SimpleNamespace(name=name, city=city, photo="default.jpg")


def test_points_are_summed_across_enrollments():
    rows = [enrollment(1, 30), enrollment(1, 20), enrollment(2, 60)]

    board = rank_users(rows, {1: person("A"), 2: person("B")})

    assert [(r["rank"], r["name"], r["total_points"]) for r in board] == [
        (1, "B", 60),
        (2, "A", 50),
    ]


def test_points_count_regardless_of_status_but_completions_do_not():
    rows = [
        enrollment(1, 10, EnrollmentStatus.completed),
        enrollment(1, 0, EnrollmentStatus.joined),
        enrollment(1, 5, EnrollmentStatus.withdrawn),
    ]

    (entry,) = rank_users(rows, {1: person("A")})

    assert entry["total_points"] == 15
    assert entry["challenges_completed"] == 1


def test_ties_go_to_earliest_joiner_then_lowest_id():
    rows = [
        enrollment(3, 40, joined=T0 + timedelta(days=1)),
        enrollment(2, 40, joined=T0),
        enrollment(1, 40, joined=T0 + timedelta(days=1)),
    ]

    board = rank_users(rows, {})

    assert [r["user_id"] for r in board] == [2, 1, 3]
    assert [r["rank"] for r in board] == [1, 2, 3]


def test_limit_truncates_after_ranking():
    rows = [enrollment(uid, uid * 10) for uid in range(1, 6)]

    board = rank_users(rows, {}, limit=2)

    assert [r["user_id"] for r in board] == [5, 4]


def test_missing_user_falls_back_to_placeholder_name():
    (entry,) = rank_users([enrollment(7, 1)], {})

    assert entry["name"] == "User 7"
    assert entry["city"] is None


def test_leaderboard_from_database(db, make_user, make_challenge, add_usage):
    alice = make_user("Alice", city="Galle")
    bob = make_user("Bob")
    make_user("Carol")  # never joins
    for u in (alice, bob):
        add_usage(u, electricity=[100])
    first = make_challenge(title="First")
    second = make_challenge(title="Second")

    service = EnrollmentService(db)
    for challenge in (first, second):
        service.join_challenge(alice.id, challenge.id)
    service.join_challenge(bob.id, first.id)
    service.award_points(first.id, alice.id, 30)
    service.award_points(second.id, alice.id, 20)
    service.award_points(first.id, bob.id, 60)

    board = list(get_leaderboard(db))

    assert [(r["name"], r["total_points"], r["challenges_completed"]) for r in board] == [
        ("Bob", 60, 1),
        ("Alice", 50, 2),
    ]
    assert board[1]["city"] == "Galle"


def test_empty_leaderboard(db):
    assert list(get_leaderboard(db)) == []
