from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.deps.auth import get_current_user
from liftlog.models import User
from liftlog.repositories.movement_repo import MovementRepository
from liftlog.schemas.movement import MovementCreate, MovementRead

router = APIRouter(prefix="/movements", tags=["movements"])

@router.post("", response_model=MovementRead, status_code=status.HTTP_201_CREATED)
def create_movement(payload: MovementCreate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return MovementRepository(db).create(current.id, name=payload.name, is_body_weight=payload.is_body_weight)

@router.get("", response_model=list[MovementRead])
def list_movements(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    repo = MovementRepository(db)
    movements = repo.list_by_user(current.id)
    if not movements:
        # first visit: hand out a starter catalogue
        repo.seed_defaults(current.id)
        movements = repo.list_by_user(current.id)
    return movements

@router.delete("/{movement_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_movement(movement_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    repo = MovementRepository(db)
    movement = repo.get_owned(movement_id, current.id)
    if not movement:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movement not found")
    if repo.count_sets(movement.id) > 0:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Cannot delete movement with existing history")
    repo.delete(movement)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
