from datetime import timedelta
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from liftlog.db import get_db, utcnow
from liftlog.deps.auth import get_current_user
from liftlog.models import User
from liftlog.repositories.movement_repo import MovementRepository
from liftlog.repositories.workout_repo import WorkoutRepository
from liftlog.schemas.progression import DateRange, MetricPoint, MetricType

router = APIRouter(prefix="/progression", tags=["progression"])

RANGE_DAYS = {
    DateRange.week: 7,
    DateRange.month: 30,
    DateRange.quarter: 90,
    DateRange.year: 365,
}

def metric_series(sets, metric: MetricType) -> list[MetricPoint]:
    """
    One point per calendar day (UTC) of workout completion, oldest first.
    ``sets`` must be ordered by completion time.
    """
    by_day: dict[str, list] = {}
    for s in sets:
        by_day.setdefault(s.workout.completed_at.date().isoformat(), []).append(s)

    points = []
    for day, day_sets in by_day.items():
        if metric == MetricType.max_weight:
            value = max(s.weight for s in day_sets)
        elif metric == MetricType.total_reps:
            value = sum(s.reps for s in day_sets)
        else:
            value = sum(s.weight * s.reps for s in day_sets)
        points.append(MetricPoint(date=day, value=value))
    return points

@router.get("/{movement_id}", response_model=list[MetricPoint])
def movement_metrics(
    movement_id: int,
    metric: MetricType = Query(MetricType.max_weight),
    range_: DateRange = Query(DateRange.all, alias="range"),
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    if not MovementRepository(db).get_owned(movement_id, current.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movement not found")
    since = None
    if range_ != DateRange.all:
        since = utcnow() - timedelta(days=RANGE_DAYS[range_])
    sets = WorkoutRepository(db).completed_sets(current.id, movement_id=movement_id, since=since)
    return metric_series(sets, metric)
