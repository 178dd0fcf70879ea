from sqlalchemy.orm import Session

from api.dashboard.dashboard_service import compute_dashboard
from api.dashboard.dashboard_schema import DashboardResponse


def assemble_dashboard(db: Session, user_id: int) -> DashboardResponse:
    return DashboardResponse(**compute_dashboard(db, user_id))
