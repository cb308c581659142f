from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session
from liftlog.db import get_db
from liftlog.deps.auth import get_current_user
from liftlog.models import User
from liftlog.repositories.food_repo import FoodRepository
from liftlog.schemas.food import FoodCreate, FoodRead
from liftlog.text import string_similarity

router = APIRouter(prefix="/foods", tags=["foods"])

SEARCH_LIMIT = 20

def rank_foods(foods, query: str, *, limit: int = SEARCH_LIMIT):
    """Custom foods first, then closest name to the query, then alphabetical."""
    return sorted(
        foods,
        key=lambda f: (not f.is_custom, -string_similarity(f.name, query), f.name.lower()),
    )[:limit]

@router.get("/search", response_model=list[FoodRead])
def search_foods(
    q: str = Query(..., min_length=1, max_length=100),
    db: Session = Depends(get_db),
    current: User = Depends(get_current_user),
):
    term = q.strip()
    if not term:
        return []
    return rank_foods(FoodRepository(db).search(current.id, term), term)

@router.get("/custom", response_model=list[FoodRead])
def custom_foods(db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return FoodRepository(db).list_custom(current.id)

@router.get("/{food_id}", response_model=FoodRead)
def get_food(food_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    food = FoodRepository(db).get_visible(food_id, current.id)
    if not food:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Food not found")
    return food

@router.post("", response_model=FoodRead, status_code=status.HTTP_201_CREATED)
def create_custom_food(payload: FoodCreate, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    return FoodRepository(db).create_custom(current.id, **payload.model_dump())

@router.delete("/{food_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_custom_food(food_id: int, db: Session = Depends(get_db), current: User = Depends(get_current_user)):
    repo = FoodRepository(db)
    food = repo.get_owned(food_id, current.id)
    if not food:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Food not found")
    repo.delete(food)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
