from datetime import date, datetime, time, timedelta, timezone
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.deps.auth import get_current_user
from liftlog.models import User
from liftlog.repositories.nutrition_repo import NutritionRepository
from liftlog.schemas.nutrition import (
    DailyNutrition,
    GoalRead,
    GoalUpsert,
    NutritionCreate,
    NutritionRead,
    NutritionTotals,
)

router = APIRouter(prefix="/nutrition", tags=["nutrition"])

def daily_totals(entries) -> NutritionTotals:
    totals = NutritionTotals()
    for e in entries:
        totals.calories += e.calories
        # missing macros count as zero
        totals.protein += e.protein or 0
        totals.carbs += e.carbs or 0
        totals.fat += e.fat or 0
    return totals

@router.post("", response_model=NutritionRead, status_code=status.HTTP_201_CREATED)
def log_food(payload: NutritionCreate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return NutritionRepository(db).create(current.id, **payload.model_dump())

@router.get("", response_model=list[NutritionRead])
def nutrition_history(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return NutritionRepository(db).list_by_user(current.id)

@router.get("/daily", response_model=DailyNutrition)
def daily_nutrition(
    day: date = Query(..., alias="date"),
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    entries = NutritionRepository(db).list_between(current.id, start, start + timedelta(days=1))
    return DailyNutrition(
        entries=[NutritionRead.model_validate(e) for e in entries],
        totals=daily_totals(entries),
    )

@router.get("/goal", response_model=GoalRead | None)
def get_goal(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return NutritionRepository(db).get_goal(current.id)

@router.put("/goal", response_model=GoalRead)
def upsert_goal(payload: GoalUpsert, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return NutritionRepository(db).upsert_goal(current.id, **payload.model_dump())

@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_entry(entry_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    repo = NutritionRepository(db)
    entry = repo.get_owned(entry_id, current.id)
    if not entry:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Entry not found")
    repo.delete(entry)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
