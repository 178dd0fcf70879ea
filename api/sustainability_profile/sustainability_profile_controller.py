from sqlalchemy.orm import Session

from api.sustainability_profile.sustainability_profile_service import (
    find_profile, get_profile, upsert_profile
)
from api.sustainability_profile.sustainability_profile_schema import (
    SustainabilityProfileRead, SustainabilityProfileUpdate, ProfileExists
)


def get_profile_controller(db: Session, current_user: dict) -> SustainabilityProfileRead:
    return SustainabilityProfileRead.model_validate(get_profile(db, current_user["id"]))


def put_profile_controller(
    db: Session,
    current_user: dict,
    payload: SustainabilityProfileUpdate,
) -> SustainabilityProfileRead:
    profile = upsert_profile(db, current_user["id"], payload)
    return SustainabilityProfileRead.model_validate(profile)


def profile_exists_controller(db: Session, current_user: dict) -> ProfileExists:
    return ProfileExists(exists=find_profile(db, current_user["id"]) is not None)
