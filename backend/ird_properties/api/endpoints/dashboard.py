from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ird_properties.core.database import get_db
from ird_properties.core.security import get_current_user
from ird_properties.models.user import User
from ird_properties.schemas.dashboard import DashboardStats
from ird_properties.services.coordinator import LifecycleCoordinator

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStats)
def get_dashboard_stats(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Catalog, request and issuance totals"""
    return LifecycleCoordinator(db).dashboard_stats()
