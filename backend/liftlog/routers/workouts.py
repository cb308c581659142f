from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.deps.auth import get_current_user
from liftlog.models import User
from liftlog.records import LoggedSet, SessionBestTracker, build_records, check_for_pr
from liftlog.repositories.movement_repo import MovementRepository
from liftlog.repositories.set_repo import SetRepository
from liftlog.repositories.workout_repo import WorkoutRepository
from liftlog.schemas.workout import (
    DeletedCount,
    PersonalRecordRead,
    PRResult,
    SetCreate,
    SetLogged,
    SetRead,
    WorkoutIds,
    WorkoutRead,
)

router = APIRouter(prefix="/workouts", tags=["workouts"])

def _active_or_409(repo: WorkoutRepository, user_id: int):
    workout = repo.get_active(user_id)
    if not workout:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="No active workout")
    return workout

@router.post("", response_model=WorkoutRead, status_code=status.HTTP_201_CREATED)
def start_workout(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    repo = WorkoutRepository(db)
    if repo.get_active(current.id):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="A workout is already in progress")
    return repo.create(current.id)

@router.get("/current", response_model=WorkoutRead | None)
def current_workout(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return WorkoutRepository(db).get_active(current.id)

@router.post("/current/complete", response_model=WorkoutRead)
def complete_workout(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    repo = WorkoutRepository(db)
    return repo.complete(_active_or_409(repo, current.id))

@router.post("/current/sets", response_model=SetLogged, status_code=status.HTTP_201_CREATED)
def add_set(
    payload: SetCreate,
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    workouts = WorkoutRepository(db)
    workout = _active_or_409(workouts, current.id)

    movement = MovementRepository(db).get_owned(payload.movement_id, current.id)
    if not movement:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movement not found")

    # PRs are judged against completed workouts only; the active one is the session
    history = workouts.completed_sets(current.id, movement_id=movement.id)
    records = build_records(LoggedSet.of(s) for s in history)

    set_repo = SetRepository(db)
    earlier = set_repo.list_by_workout(workout.id, movement_id=movement.id)
    tracker = SessionBestTracker.from_sets(LoggedSet.of(s) for s in earlier)

    new_set = set_repo.create(workout.id, movement_id=movement.id, weight=payload.weight, reps=payload.reps)
    logged = LoggedSet.of(new_set)
    check = check_for_pr(logged, records)

    return SetLogged(
        set=SetRead.model_validate(new_set),
        pr=PRResult(
            is_pr=check.is_pr,
            announce=tracker.announce(logged, records),
            previous_best=PersonalRecordRead.model_validate(check.previous_best) if check.previous_best else None,
        ),
    )

@router.delete("/current/sets/{set_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_set(set_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    workout = _active_or_409(WorkoutRepository(db), current.id)
    set_repo = SetRepository(db)
    s = set_repo.get_in_workout(set_id, workout.id)
    if not s:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Set not found")
    set_repo.delete(s)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/history", response_model=list[WorkoutRead])
def workout_history(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return WorkoutRepository(db).list_completed(current.id, limit=500)

@router.post("/delete", response_model=DeletedCount)
def delete_workouts(payload: WorkoutIds, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return DeletedCount(deleted=WorkoutRepository(db).delete_many(current.id, payload.workout_ids))
