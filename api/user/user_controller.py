from sqlalchemy.orm import Session

from api.user.user_model import User
from api.user.user_schema import UserResponse, MyStanding
from api.leaderboard.leaderboard_service import get_leaderboard
from utils.database_utils import DatabaseUtils


def get_profile_details(db: Session, current_user: dict) -> UserResponse:
    user = DatabaseUtils.get_or_404(db, User, id=current_user["id"])
    return UserResponse.model_validate(user)


def get_my_standing(db: Session, current_user: dict) -> MyStanding:
    """Current user's leaderboard row, or zeros if they never joined a challenge."""
    for entry in get_leaderboard(db):
        if entry["user_id"] == current_user["id"]:
            return MyStanding(
                total_points=entry["total_points"],
                challenges_completed=entry["challenges_completed"],
                rank=entry["rank"],
            )
    return MyStanding(total_points=0, challenges_completed=0)
