from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from api.consumption.consumption_service import list_records
from api.dashboard.score_engine import compute_dashboard as score_records
from api.sustainability_profile.sustainability_profile_service import find_profile
from config.score_config import ResourceType, ScoreWeights, weights_from_settings


def compute_dashboard(
    db: Session,
    user_id: int,
    weights: Optional[ScoreWeights] = None,
) -> Dict[str, Any]:
    """
    Load every consumption record the user owns and score them.
    Adds profile presence and per-type entry counts for the dashboard view.
    """
    electricity = list_records(db, user_id, ResourceType.electricity)
    water = list_records(db, user_id, ResourceType.water)
    waste = list_records(db, user_id, ResourceType.waste)

    result = score_records(electricity, water, waste, weights or weights_from_settings())
    result["has_sustainability_profile"] = find_profile(db, user_id) is not None
    result["total_entries"] = {
        "electricity": len(electricity),
        "water": len(water),
        "waste": len(waste),
    }
    return result
