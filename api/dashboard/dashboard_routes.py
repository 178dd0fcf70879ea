from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from config.database import get_db
from middlewares.auth_middleware import auth_middleware
from api.dashboard.dashboard_controller import assemble_dashboard
from api.dashboard.dashboard_schema import DashboardResponse

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get(
    "",
    response_model=DashboardResponse,
    summary="Eco score, key metrics and electricity chart for the current user"
)
def dashboard(
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    """
    Returns the user's eco score along with:
      – totals per resource type
      – the last six months of electricity usage
    """
    return assemble_dashboard(db=db, user_id=current_user["id"])
