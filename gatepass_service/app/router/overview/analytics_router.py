from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import allow_admin
from shared.core.database import get_facility_db as get_db
from shared.core.schemas import UserToken
from ...crud.overview import analytics_crud as crud
from ...schemas.overview.analytics_schema import GatepassAnalytics

router = APIRouter(
    prefix="/api/analytics",
    tags=["analytics"],
    dependencies=[Depends(allow_admin)]
)


@router.get("/gatepasses", response_model=GatepassAnalytics)
def get_gatepass_analytics(
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(allow_admin)):
    return crud.get_gatepass_analytics(db, current_user)
