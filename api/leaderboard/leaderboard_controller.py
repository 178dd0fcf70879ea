from typing import List, Optional

from sqlalchemy.orm import Session

from api.leaderboard.leaderboard_service import get_leaderboard
from api.leaderboard.leaderboard_schema import LeaderboardEntry


def get_leaderboard_controller(db: Session, limit: Optional[int] = None) -> List[LeaderboardEntry]:
    return [LeaderboardEntry.model_validate(entry) for entry in get_leaderboard(db, limit)]
