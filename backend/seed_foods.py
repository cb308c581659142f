import csv
import logging
import sys
from pathlib import Path

from liftlog.db import Base, SessionLocal, engine
from liftlog import models  # noqa: F401  # registers tables on Base.metadata
from liftlog.repositories.food_repo import FoodRepository

log = logging.getLogger("seed_foods")

#config
FIELDS = ("name", "category", "calories", "protein", "carbs", "fat", "serving_size")
NUMERIC_FIELDS = ("calories", "protein", "carbs", "fat")

# (name, category, kcal, protein g, carbs g, fat g, serving)
DEFAULT_FOODS = [
    ("Chicken Breast", "Protein", 165, 31, 0, 3.6, "100 g"),
    ("Salmon", "Protein", 208, 20, 0, 13, "100 g"),
    ("Egg", "Protein", 78, 6, 0.6, 5, "1 large"),
    ("Greek Yogurt", "Dairy", 100, 17, 6, 0.7, "170 g"),
    ("Milk", "Dairy", 122, 8, 12, 4.8, "1 cup"),
    ("Cheddar Cheese", "Dairy", 113, 7, 0.4, 9.3, "28 g"),
    ("White Rice", "Grains", 205, 4.3, 45, 0.4, "1 cup cooked"),
    ("Brown Rice", "Grains", 216, 5, 45, 1.8, "1 cup cooked"),
    ("Oats", "Grains", 150, 5, 27, 3, "40 g"),
    ("Whole Wheat Bread", "Grains", 80, 4, 14, 1, "1 slice"),
    ("Banana", "Fruit", 105, 1.3, 27, 0.4, "1 medium"),
    ("Apple", "Fruit", 95, 0.5, 25, 0.3, "1 medium"),
    ("Broccoli", "Vegetables", 55, 3.7, 11, 0.6, "1 cup"),
    ("Sweet Potato", "Vegetables", 103, 2.3, 24, 0.2, "1 medium"),
    ("Almonds", "Nuts", 164, 6, 6, 14, "28 g"),
    ("Peanut Butter", "Nuts", 188, 8, 6, 16, "2 tbsp"),
    ("Olive Oil", "Fats", 119, 0, 0, 13.5, "1 tbsp"),
    ("Whey Protein", "Supplements", 120, 24, 3, 1.5, "1 scoop"),
]

def default_rows():
    """Built-in catalogue as dict rows."""
    return [dict(zip(FIELDS, row)) for row in DEFAULT_FOODS]

def parse_row(raw):
    """
    Normalise one CSV row. Numeric columns become floats; a blank
    serving_size becomes None. Rows without a name are skipped (None).
    """
    name = (raw.get("name") or "").strip()
    if not name:
        return None
    row = {"name": name, "category": (raw.get("category") or "Other").strip() or "Other"}
    for f in NUMERIC_FIELDS:
        row[f] = float(raw.get(f) or 0)
    row["serving_size"] = (raw.get("serving_size") or "").strip() or None
    return row

def load_csv(path):
    with Path(path).open(newline="", encoding="utf-8") as fh:
        return [r for r in (parse_row(raw) for raw in csv.DictReader(fh)) if r is not None]

def seed(rows):
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        added = FoodRepository(db).add_shared(rows)
    log.info("seeded %d foods (%d offered)", added, len(rows))
    return added

def main():
    logging.basicConfig(level=logging.INFO)
    rows = load_csv(sys.argv[1]) if len(sys.argv) > 1 else default_rows()
    seed(rows)

if __name__ == "__main__":
    main()
