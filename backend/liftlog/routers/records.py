from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.deps.auth import get_current_user
from liftlog.models import User
from liftlog.records import LoggedSet, build_records
from liftlog.repositories.workout_repo import WorkoutRepository
from liftlog.schemas.workout import PersonalRecordRead

router = APIRouter(prefix="/records", tags=["records"])

@router.get("", response_model=list[PersonalRecordRead])
def personal_records(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    history = WorkoutRepository(db).completed_sets(current.id)
    records = build_records(LoggedSet.of(s) for s in history)
    return sorted(records.values(), key=lambda r: (r.movement_name.lower(), r.movement_id))
