from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.deps.auth import get_current_user
from liftlog.models import User
from liftlog.repositories.user_repo import UserRepository
from liftlog.schemas.user import WeightUnitBody

router = APIRouter(prefix="/settings", tags=["settings"])

@router.get("/weight-unit", response_model=WeightUnitBody)
def get_weight_unit(current: User = Depends(get_current_user)):
    return WeightUnitBody(unit=current.weight_unit)

@router.put("/weight-unit", response_model=WeightUnitBody)
def update_weight_unit(
    payload: WeightUnitBody,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    user = UserRepository(db).set_weight_unit(current, payload.unit)
    return WeightUnitBody(unit=user.weight_unit)
