from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.deps.auth import get_current_user
from liftlog.models import User
from liftlog.repositories.weight_repo import WeightRepository
from liftlog.schemas.weight import LatestWeight, WeightCreate, WeightRead
from liftlog.units import convert_weight

router = APIRouter(prefix="/weights", tags=["weights"])

@router.post("", response_model=WeightRead, status_code=status.HTTP_201_CREATED)
def record_weight(payload: WeightCreate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    # stored in whatever unit the user has selected right now
    return WeightRepository(db).create(
        current.id,
        weight=payload.weight,
        unit=current.weight_unit,
        recorded_at=payload.recorded_at,
        note=payload.note,
    )

@router.get("", response_model=list[WeightRead])
def weight_history(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return WeightRepository(db).list_by_user(current.id)

@router.get("/latest", response_model=LatestWeight | None)
def latest_weight(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    entry = WeightRepository(db).latest(current.id)
    if entry is None:
        return None
    unit = current.weight_unit
    return LatestWeight(weight=convert_weight(entry.weight, entry.unit, unit), unit=unit)

@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_weight(entry_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    repo = WeightRepository(db)
    entry = repo.get_owned(entry_id, current.id)
    if not entry:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Entry not found")
    repo.delete(entry)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
