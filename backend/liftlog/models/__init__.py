from liftlog.models.user import User
from liftlog.models.movement import Movement
from liftlog.models.workout import Workout
from liftlog.models.workout_set import WorkoutSet
from liftlog.models.weight_entry import WeightEntry
from liftlog.models.nutrition import MealType, NutritionEntry, NutritionGoal
from liftlog.models.food import Food

__all__ = [
    "User",
    "Movement",
    "Workout",
    "WorkoutSet",
    "WeightEntry",
    "MealType",
    "NutritionEntry",
    "NutritionGoal",
    "Food",
]
