from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from config.database import get_db
from middlewares.auth_middleware import auth_middleware
from api.sustainability_profile.sustainability_profile_controller import (
    get_profile_controller,
    put_profile_controller,
    profile_exists_controller,
)
from api.sustainability_profile.sustainability_profile_schema import (
    SustainabilityProfileRead, SustainabilityProfileUpdate, ProfileExists
)

router = APIRouter(
    prefix="/data/profile",
    tags=["Sustainability Profile"],
    dependencies=[Depends(auth_middleware)],
)

@router.get("", response_model=SustainabilityProfileRead)
def read_profile(
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return get_profile_controller(db, current_user)

@router.put("", response_model=SustainabilityProfileRead, summary="Create or replace the user's profile")
def save_profile(
    payload: SustainabilityProfileUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return put_profile_controller(db, current_user, payload)

@router.get("/exists", response_model=ProfileExists)
def check_profile(
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return profile_exists_controller(db, current_user)
