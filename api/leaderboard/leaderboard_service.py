"""
Leaderboard aggregation.

The leaderboard is never stored: every request regroups the enrollment
rows by user. Ranking is by total points (all statuses) descending; ties go
to the user whose first enrollment is oldest, then to the lower user id.
"""
from datetime import datetime
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from sqlalchemy.orm import Session

from api.challenges.user_challenges_model import UserChallenge, EnrollmentStatus
from api.user.user_model import User


def aggregate_enrollments(enrollments: Iterable[Any]) -> Dict[int, Dict[str, Any]]:
    totals: Dict[int, Dict[str, Any]] = {}
    for e in enrollments:
        row = totals.setdefault(e.user_id, {
            "user_id": e.user_id,
            "total_points": 0,
            "challenges_completed": 0,
            "first_joined": e.joined_date,
        })
        row["total_points"] += e.points_earned or 0
        if e.status == EnrollmentStatus.completed:
            row["challenges_completed"] += 1
        if e.joined_date < row["first_joined"]:
            row["first_joined"] = e.joined_date
    return totals


def rank_users(
    enrollments: Iterable[Any],
    users: Mapping[int, Any],
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    Turn enrollment rows into ranked leaderboard entries.

    `users` maps user id to an object with `name`, `city` and `photo`.
    Users with no enrollments never appear, since they have no rows.
    """
    rows = sorted(
        aggregate_enrollments(enrollments).values(),
        key=lambda r: (-r["total_points"], r["first_joined"] or datetime.max, r["user_id"]),
    )
    if limit is not None:
        rows = rows[:limit]

    ranked = []
    for position, row in enumerate(rows, start=1):
        user = users.get(row["user_id"])
        ranked.append({
            "rank": position,
            "user_id": row["user_id"],
            "name": getattr(user, "name", None) or f"User {row['user_id']}",
            "city": getattr(user, "city", None),
            "photo": getattr(user, "photo", None),
            "total_points": row["total_points"],
            "challenges_completed": row["challenges_completed"],
        })
    return ranked


def get_leaderboard(db: Session, limit: Optional[int] = None) -> Iterator[Dict[str, Any]]:
    """
    Yield the current leaderboard. Each call re-reads the enrollments, so
    calling again restarts from fresh data.
    """
    enrollments = db.query(UserChallenge).all()
    user_ids = {e.user_id for e in enrollments}
    users = {}
    if user_ids:
        users = {u.id: u for u in db.query(User).filter(User.id.in_(user_ids)).all()}
    yield from rank_users(enrollments, users, limit)
