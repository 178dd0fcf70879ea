from fastapi import APIRouter, Depends, Query
from typing import List
from sqlalchemy.orm import Session

from config.database import get_db
from config.settings import settings
from middlewares.auth_middleware import auth_middleware
from api.leaderboard.leaderboard_controller import get_leaderboard_controller
from api.leaderboard.leaderboard_schema import LeaderboardEntry

router = APIRouter(prefix="/leaderboard", tags=["Leaderboard"])


@router.get(
    "",
    response_model=List[LeaderboardEntry],
    summary="Users ranked by points earned across all challenges"
)
def read_leaderboard(
    limit: int = Query(
        settings.LEADERBOARD_DEFAULT_LIMIT, ge=1, le=500,
        description="Number of top users to return"
    ),
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return get_leaderboard_controller(db, limit)
