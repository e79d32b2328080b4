from core.config import LOG_LEVEL, LOG_FILE
from core.db import Base, engine, SessionLocal
from core.food_store import FoodStore
from core.logger import setup_logging
from core.storage import SqlAlchemyBackend
from models.food_item import FoodItem
from models.audit_log import AuditLog

SAMPLE_FOODS = [
    ("Apple", 2.5),
    ("Bread", 1.0),
    ("Banana", 2.5),
    ("Kimchi Fried Rice", 180.0),
    ("Spam Bowl", 100.0),
    ("Iced Milk Tea", 120.0),
    ("Korean Soda", 80.0),
    ("Extra Egg", 30.0),
]


def seed_foods(store: FoodStore):
    if store.count():
        print("Foods already seeded.")
        return
    for name, price in SAMPLE_FOODS:
        store.add(name, price)
    print(f"{len(SAMPLE_FOODS)} sample foods seeded.")


def init_db():
    setup_logging(LOG_LEVEL, LOG_FILE)
    print("Rebuilding database (drop/create)...")
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    print("All tables created:")
    print(f"   - {FoodItem.__tablename__}")
    print(f"   - {AuditLog.__tablename__}")

    seed_foods(FoodStore(SqlAlchemyBackend(SessionLocal)))
    print("\nDatabase initialization complete!")


if __name__ == "__main__":
    init_db()
