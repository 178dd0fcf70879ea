from typing import Optional

from sqlalchemy.orm import Session

from api.sustainability_profile.sustainability_profile_model import SustainabilityProfile
from api.sustainability_profile.sustainability_profile_schema import SustainabilityProfileUpdate
from utils.errors import ProfileNotFound


def find_profile(db: Session, user_id: int) -> Optional[SustainabilityProfile]:
    return db.query(SustainabilityProfile).filter_by(user_id=user_id).first()


def get_profile(db: Session, user_id: int) -> SustainabilityProfile:
    profile = find_profile(db, user_id)
    if not profile:
        raise ProfileNotFound("Sustainability profile not found")
    return profile


def upsert_profile(db: Session, user_id: int, data: SustainabilityProfileUpdate) -> SustainabilityProfile:
    """
    Create the user's profile, or overwrite it if one exists.
    Saving always marks the profile as completed.
    """
    profile = find_profile(db, user_id)
    if not profile:
        profile = SustainabilityProfile(user_id=user_id)
        db.add(profile)

    for field, value in data.model_dump().items():
        setattr(profile, field, value)
    profile.profile_completed = True

    db.commit()
    db.refresh(profile)
    return profile
