from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from config.database import get_db
from middlewares.auth_middleware import auth_middleware
from api.user.user_controller import get_profile_details, get_my_standing
from api.user.user_schema import UserResponse, MyStanding

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=UserResponse)
def read_me(
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return get_profile_details(db, current_user)


@router.get("/me/standing", response_model=MyStanding, summary="Current user's points and rank")
def read_my_standing(
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return get_my_standing(db, current_user)
